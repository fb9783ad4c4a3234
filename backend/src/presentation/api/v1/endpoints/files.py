"""
File Endpoints
/api/v1/files/* routes serving stored uploads
"""
from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from application.services.storage import IFileStorageService
from presentation.api.v1.container import get_file_storage


router = APIRouter()


@router.get("/{owner_id}/{filename}", response_class=FileResponse)
async def get_file(
    owner_id: str,
    filename: str,
    file_storage: IFileStorageService = Depends(get_file_storage)
):
    """Stored upload shown inline; unknown files are a 404"""
    path = await file_storage.resolve_file(f"{owner_id}/{filename}")
    return FileResponse(path, filename=path.name, content_disposition_type="inline")
