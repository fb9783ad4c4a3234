"""
Job Endpoints
/api/v1/jobs/* routes
"""
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.clock import utcnow
from core.database import get_session_factory
from core.exceptions import ValidationException
from application.repositories.interfaces import JobFilters
from application.services.analytics import IAnalyticsService
from application.services.applications import IApplicationService
from application.services.jobs import IJobService
from domain.enums import JobType, WorkMode, ExperienceLevel, parse_enum
from infrastructure.services.job_service import record_job_view
from presentation.api.v1.container import (
    get_analytics_service,
    get_application_service,
    get_job_service,
)
from presentation.api.v1.dependencies import get_current_user_id, parse_id
from presentation.api.v1.schemas.application import ApplicationResponse
from presentation.api.v1.schemas.common import StatusMessageResponse
from presentation.api.v1.schemas.job import ApplyRequest, JobRequest, JobResponse


router = APIRouter()


def _filters(
    keyword: Optional[str],
    location: Optional[str],
    job_type: Optional[str],
    work_mode: Optional[str],
    experience_level: Optional[str],
) -> JobFilters:
    errors = {}
    parsed = {}
    for name, enum_cls, value in (
        ("job_type", JobType, job_type),
        ("work_mode", WorkMode, work_mode),
        ("experience_level", ExperienceLevel, experience_level),
    ):
        try:
            parsed[name] = parse_enum(enum_cls, value, None)
        except ValueError as e:
            errors[name] = str(e)
    if errors:
        raise ValidationException(errors)
    return JobFilters(keyword=keyword, location=location, **parsed)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    payload: JobRequest,
    user_id: UUID = Depends(get_current_user_id),
    job_service: IJobService = Depends(get_job_service)
):
    """Post a job (company accounts only)"""
    job = await job_service.create(user_id, payload.to_draft())
    return JobResponse.from_entity(job, utcnow())


@router.get("", response_model=List[JobResponse])
async def list_jobs(
    keyword: Optional[str] = Query(None, description="Substring of title, description or company"),
    location: Optional[str] = Query(None),
    job_type: Optional[str] = Query(None),
    work_mode: Optional[str] = Query(None),
    experience_level: Optional[str] = Query(None),
    job_service: IJobService = Depends(get_job_service)
):
    """Published or active jobs whose deadline has not passed, newest first"""
    filters = _filters(keyword, location, job_type, work_mode, experience_level)
    jobs = await job_service.public_list(filters)
    now = utcnow()
    return [JobResponse.from_entity(j, now) for j in jobs]


@router.get("/myjobs", response_model=List[JobResponse])
async def my_jobs(
    user_id: UUID = Depends(get_current_user_id),
    job_service: IJobService = Depends(get_job_service)
):
    """Every job of the calling company, expired ones included"""
    jobs = await job_service.owner_list(user_id)
    now = utcnow()
    return [JobResponse.from_entity(j, now) for j in jobs]


@router.get("/analytics/dashboard")
async def dashboard(
    user_id: UUID = Depends(get_current_user_id),
    analytics_service: IAnalyticsService = Depends(get_analytics_service)
) -> Dict[str, Any]:
    return await analytics_service.dashboard(user_id)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: str,
    background_tasks: BackgroundTasks,
    job_service: IJobService = Depends(get_job_service),
    session_factory: async_sessionmaker = Depends(get_session_factory)
):
    """Single job; the view counter is bumped after the response is sent"""
    job = await job_service.get_by_id(parse_id(job_id, "Job"))
    background_tasks.add_task(record_job_view, session_factory, job.id)
    return JobResponse.from_entity(job, utcnow())


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    payload: JobRequest,
    user_id: UUID = Depends(get_current_user_id),
    job_service: IJobService = Depends(get_job_service)
):
    job = await job_service.update(parse_id(job_id, "Job"), user_id, payload.to_draft())
    return JobResponse.from_entity(job, utcnow())


@router.patch("/{job_id}/close", response_model=JobResponse)
async def close_job(
    job_id: str,
    user_id: UUID = Depends(get_current_user_id),
    job_service: IJobService = Depends(get_job_service)
):
    job = await job_service.close(parse_id(job_id, "Job"), user_id)
    return JobResponse.from_entity(job, utcnow())


@router.patch("/{job_id}/reopen", response_model=JobResponse)
async def reopen_job(
    job_id: str,
    user_id: UUID = Depends(get_current_user_id),
    job_service: IJobService = Depends(get_job_service)
):
    job = await job_service.reopen(parse_id(job_id, "Job"), user_id)
    return JobResponse.from_entity(job, utcnow())


@router.delete("/{job_id}", response_model=StatusMessageResponse)
async def delete_job(
    job_id: str,
    user_id: UUID = Depends(get_current_user_id),
    job_service: IJobService = Depends(get_job_service)
):
    await job_service.delete(parse_id(job_id, "Job"), user_id)
    return StatusMessageResponse(message="Job removed successfully")


@router.get("/{job_id}/analytics")
async def job_analytics(
    job_id: str,
    user_id: UUID = Depends(get_current_user_id),
    analytics_service: IAnalyticsService = Depends(get_analytics_service)
) -> Dict[str, Any]:
    return await analytics_service.job_analytics(parse_id(job_id, "Job"), user_id)


@router.post("/{job_id}/apply", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def apply_to_job(
    job_id: str,
    payload: ApplyRequest,
    user_id: UUID = Depends(get_current_user_id),
    application_service: IApplicationService = Depends(get_application_service)
):
    """Submit an application (job seekers only)"""
    application = await application_service.apply(
        parse_id(job_id, "Job"),
        user_id,
        cover_letter=payload.cover_letter,
        document_ids=payload.document_ids
    )
    return ApplicationResponse.from_entity(application)
