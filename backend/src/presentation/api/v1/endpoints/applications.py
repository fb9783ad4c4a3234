"""
Application Endpoints
/api/v1/applications/* routes
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from application.services.applications import ApplicationFilter, IApplicationService
from presentation.api.v1.container import get_application_service
from presentation.api.v1.dependencies import get_current_user_id, parse_date_param, parse_id
from presentation.api.v1.schemas.application import (
    ApplicationListResponse,
    ApplicationResponse,
    BulkNotesRequest,
    BulkStatusRequest,
    BulkUpdateResponse,
    NotesRequest,
    PaginationResponse,
    StatusUpdateRequest,
)


router = APIRouter()


@router.get("/job/{job_id}", response_model=ApplicationListResponse)
async def list_job_applications(
    job_id: str,
    status: Optional[str] = Query(None),
    date_from: Optional[str] = Query(None),
    date_to: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort_by: str = Query("date"),
    order: str = Query("desc"),
    page: int = Query(1),
    limit: int = Query(20),
    user_id: UUID = Depends(get_current_user_id),
    application_service: IApplicationService = Depends(get_application_service)
):
    """Applications of an owned job with filter, search, sort and paging"""
    filters = ApplicationFilter(
        status=status,
        date_from=parse_date_param(date_from, "date_from"),
        date_to=parse_date_param(date_to, "date_to"),
        search=search,
        sort_by=sort_by,
        order=order,
        page=page,
        limit=limit
    )
    result = await application_service.list_for_job(parse_id(job_id, "Job"), user_id, filters)
    return ApplicationListResponse(
        applications=[ApplicationResponse.from_details(d) for d in result.items],
        pagination=PaginationResponse(
            total=result.total,
            page=result.page,
            limit=result.limit,
            pages=result.pages
        )
    )


@router.get("/my-applications", response_model=List[ApplicationResponse])
async def my_applications(
    user_id: UUID = Depends(get_current_user_id),
    application_service: IApplicationService = Depends(get_application_service)
):
    """Caller's own applications, newest first"""
    details = await application_service.list_for_applicant(user_id)
    return [ApplicationResponse.from_details(d, with_job=True) for d in details]


@router.put("/bulk-update", response_model=BulkUpdateResponse)
async def bulk_update_status(
    payload: BulkStatusRequest,
    user_id: UUID = Depends(get_current_user_id),
    application_service: IApplicationService = Depends(get_application_service)
):
    modified = await application_service.bulk_update_status(
        payload.application_ids, user_id, payload.status
    )
    return BulkUpdateResponse(
        message=f"Updated {modified} applications",
        modified_count=modified
    )


@router.post("/bulk-notes", response_model=BulkUpdateResponse)
async def bulk_set_notes(
    payload: BulkNotesRequest,
    user_id: UUID = Depends(get_current_user_id),
    application_service: IApplicationService = Depends(get_application_service)
):
    modified = await application_service.bulk_set_notes(
        payload.application_ids, user_id, payload.notes
    )
    return BulkUpdateResponse(
        message=f"Added notes to {modified} applications",
        modified_count=modified
    )


@router.get("/export/csv/{job_id}")
async def export_csv(
    job_id: str,
    user_id: UUID = Depends(get_current_user_id),
    application_service: IApplicationService = Depends(get_application_service)
):
    """Download a job's applications as CSV"""
    parsed = parse_id(job_id, "Job")
    content = await application_service.export_csv(parsed, user_id)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="applications-{parsed}.csv"'}
    )


@router.put("/{application_id}", response_model=ApplicationResponse)
async def update_status(
    application_id: str,
    payload: StatusUpdateRequest,
    user_id: UUID = Depends(get_current_user_id),
    application_service: IApplicationService = Depends(get_application_service)
):
    application = await application_service.update_status(
        parse_id(application_id, "Application"), user_id, payload.status
    )
    return ApplicationResponse.from_entity(application)


@router.post("/{application_id}/notes", response_model=ApplicationResponse)
async def set_notes(
    application_id: str,
    payload: NotesRequest,
    user_id: UUID = Depends(get_current_user_id),
    application_service: IApplicationService = Depends(get_application_service)
):
    application = await application_service.set_notes(
        parse_id(application_id, "Application"), user_id, payload.notes
    )
    return ApplicationResponse.from_entity(application)
