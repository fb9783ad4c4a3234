"""
User Profile Endpoints
/api/v1/users/* routes
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, UploadFile

from application.services.profile import (
    IProfileService,
    ProfileUpdate,
    ExperienceDraft,
    ExperienceUpdate,
    EducationDraft,
)
from application.services.storage import UploadKind
from presentation.api.v1.container import get_profile_service
from presentation.api.v1.dependencies import get_current_user_id, get_optional_user_id, parse_id
from presentation.api.v1.schemas.user import (
    DirectoryEntryResponse,
    EducationRequest,
    ExperienceRequest,
    ExperienceUpdateRequest,
    ProfileCompletionResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    SkillRequest,
    UserSearchResponse,
)


router = APIRouter()


def _own(user) -> ProfileResponse:
    return ProfileResponse.from_entity(user, is_owner=True)


@router.get("/me", response_model=ProfileResponse)
async def get_me(
    user_id: UUID = Depends(get_current_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    """Full profile of the caller"""
    return _own(await profile_service.me(user_id))


@router.get("", response_model=List[DirectoryEntryResponse])
async def list_users(profile_service: IProfileService = Depends(get_profile_service)):
    """Networking directory"""
    users = await profile_service.directory()
    return [DirectoryEntryResponse.from_entity(u) for u in users]


@router.get("/search", response_model=UserSearchResponse)
async def search_users(
    q: str = Query(""),
    page: int = Query(1),
    limit: int = Query(10),
    user_id: UUID = Depends(get_current_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    """Users whose name, headline or skills contain ``q``"""
    return UserSearchResponse.from_page(await profile_service.search(q, page, limit))


@router.get("/profile-completion", response_model=ProfileCompletionResponse)
async def get_profile_completion(
    user_id: UUID = Depends(get_current_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    return ProfileCompletionResponse.from_result(await profile_service.profile_completion(user_id))


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    payload: ProfileUpdateRequest,
    user_id: UUID = Depends(get_current_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    user = await profile_service.update_profile(user_id, ProfileUpdate(**payload.model_dump()))
    return _own(user)


@router.post("/picture", response_model=ProfileResponse)
async def upload_picture(
    file: UploadFile = File(...),
    user_id: UUID = Depends(get_current_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    user = await profile_service.set_image(
        user_id, UploadKind.PROFILE_PICTURE, file.filename, await file.read()
    )
    return _own(user)


@router.post("/cover", response_model=ProfileResponse)
async def upload_cover(
    file: UploadFile = File(...),
    user_id: UUID = Depends(get_current_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    user = await profile_service.set_image(
        user_id, UploadKind.COVER_PHOTO, file.filename, await file.read()
    )
    return _own(user)


@router.post("/documents", response_model=ProfileResponse)
async def upload_document(
    file: UploadFile = File(...),
    user_id: UUID = Depends(get_current_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    """Store a document and prepend it to the caller's document list"""
    user = await profile_service.add_document(user_id, file.filename, await file.read())
    return _own(user)


@router.delete("/documents/{document_id}", response_model=ProfileResponse)
async def delete_document(
    document_id: str,
    user_id: UUID = Depends(get_current_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    return _own(await profile_service.remove_document(user_id, document_id))


@router.post("/skills", response_model=ProfileResponse)
async def add_skill(
    payload: SkillRequest,
    user_id: UUID = Depends(get_current_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    return _own(await profile_service.add_skill(user_id, payload.name))


@router.delete("/skills/{skill_id}", response_model=ProfileResponse)
async def delete_skill(
    skill_id: str,
    user_id: UUID = Depends(get_current_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    return _own(await profile_service.remove_skill(user_id, skill_id))


@router.post("/experience", response_model=ProfileResponse)
async def add_experience(
    payload: ExperienceRequest,
    user_id: UUID = Depends(get_current_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    user = await profile_service.add_experience(user_id, ExperienceDraft(**payload.model_dump()))
    return _own(user)


@router.delete("/experience/{experience_id}", response_model=ProfileResponse)
async def delete_experience(
    experience_id: str,
    user_id: UUID = Depends(get_current_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    return _own(await profile_service.remove_experience(user_id, experience_id))


@router.put("/experience/{experience_id}", response_model=ProfileResponse)
async def edit_experience(
    experience_id: str,
    payload: ExperienceUpdateRequest,
    user_id: UUID = Depends(get_current_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    changes = ExperienceUpdate(**payload.model_dump())
    return _own(await profile_service.update_experience(user_id, experience_id, changes))


@router.post("/education", response_model=ProfileResponse)
async def add_education(
    payload: EducationRequest,
    user_id: UUID = Depends(get_current_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    user = await profile_service.add_education(user_id, EducationDraft(**payload.model_dump()))
    return _own(user)


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    viewer_id: Optional[UUID] = Depends(get_optional_user_id),
    profile_service: IProfileService = Depends(get_profile_service)
):
    """Public profile; email and documents only for the owner"""
    user, is_owner = await profile_service.public_profile(parse_id(user_id, "User"), viewer_id)
    return ProfileResponse.from_entity(user, is_owner=is_owner)
