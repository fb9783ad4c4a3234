"""
ProfileService Implementation
User profiles with a Redis read-through cache, evicted after every committed write
"""
import math
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import UUID

from application.services.profile import (
    IProfileService,
    ProfileUpdate,
    ExperienceDraft,
    ExperienceUpdate,
    EducationDraft,
    ProfileCompletion,
    UserSearchPage,
    MAX_SEARCH_LIMIT,
)
from application.services.storage import IFileStorageService, UploadKind
from application.repositories.interfaces import IUserRepository
from domain.entities import User, Document, Skill, Experience, Education
from domain.entities.user import DEFAULT_HEADLINE
from domain.enums import UserRole
from domain.value_objects import Email
from infrastructure.cache.redis_cache_service import RedisCacheService, profile_key
from core.clock import as_datetime, utcnow
from core.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
    ValidationException,
)
from core.logging_config import logger


def _to_cache(user: User) -> Dict[str, Any]:
    """Cached profile snapshot; the password hash never leaves the database"""
    return {
        "id": str(user.id),
        "name": user.name,
        "email": str(user.email),
        "role": user.role.value,
        "headline": user.headline,
        "location": user.location,
        "about": user.about,
        "profile_picture": user.profile_picture,
        "cover_photo": user.cover_photo,
        "documents": [d.to_dict() for d in user.documents],
        "skills": [s.to_dict() for s in user.skills],
        "experience": [e.to_dict() for e in user.experience],
        "education": [e.to_dict() for e in user.education],
        "created_at": user.created_at.isoformat() if user.created_at else None,
        "updated_at": user.updated_at.isoformat() if user.updated_at else None,
    }


def _from_cache(data: Dict[str, Any]) -> User:
    return User(
        id=UUID(data["id"]),
        name=data["name"],
        email=Email(data["email"]),
        password_hash="",
        role=UserRole(data["role"]),
        headline=data["headline"],
        location=data["location"],
        about=data.get("about"),
        profile_picture=data.get("profile_picture") or "",
        cover_photo=data.get("cover_photo") or "",
        documents=[Document.from_dict(d) for d in data.get("documents", [])],
        skills=[Skill.from_dict(s) for s in data.get("skills", [])],
        experience=[Experience.from_dict(e) for e in data.get("experience", [])],
        education=[Education.from_dict(e) for e in data.get("education", [])],
        created_at=datetime.fromisoformat(data["created_at"]) if data.get("created_at") else None,
        updated_at=datetime.fromisoformat(data["updated_at"]) if data.get("updated_at") else None,
    )



# (suggestion, check) pairs scored by profile_completion
COMPLETION_CHECKS: Tuple[Tuple[str, Callable[[User], bool]], ...] = (
    ("Add a professional profile picture", lambda u: bool(u.profile_picture)),
    ("Write a compelling headline", lambda u: bool(u.headline) and u.headline != DEFAULT_HEADLINE),
    ("Add a detailed bio about yourself", lambda u: len((u.about or "").strip()) > 20),
    ("Add your location", lambda u: bool(u.location)),
    ("Add a cover photo", lambda u: bool(u.cover_photo)),
    ("Add your work experience", lambda u: bool(u.experience)),
    ("Add your education background", lambda u: bool(u.education)),
    ("Add at least 3 skills", lambda u: len(u.skills) >= 3),
    ("Upload your CV", lambda u: bool(u.documents)),
)
MAX_SUGGESTIONS = 5


def profile_strength(percentage: int) -> str:
    if percentage >= 80:
        return "All-Star"
    if percentage >= 40:
        return "Intermediate"
    return "Beginner"


def _matches(user: User, needle: str) -> bool:
    if needle in user.name.lower() or needle in user.headline.lower():
        return True
    return any(needle in s.name.lower() for s in user.skills)


class ProfileService(IProfileService):
    """Profile service implementation with caching"""

    def __init__(
        self,
        user_repository: IUserRepository,
        file_storage: IFileStorageService,
        cache: RedisCacheService,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.user_repo = user_repository
        self.file_storage = file_storage
        self.cache = cache
        self.clock = clock

    async def me(self, user_id: UUID) -> User:
        return await self._get_user(user_id)

    async def public_profile(self, user_id: UUID, viewer_id: Optional[UUID] = None) -> Tuple[User, bool]:
        user = await self._get_user(user_id)
        is_owner = viewer_id is not None and str(viewer_id) == str(user.id)
        return user, is_owner

    async def directory(self) -> List[User]:
        return await self.user_repo.list_all()

    async def search(self, query: str, page: int = 1, limit: int = 10) -> UserSearchPage:
        needle = (query or "").strip().lower()
        errors: Dict[str, str] = {}
        if not needle:
            errors["q"] = "Search query is required"
        if page < 1:
            errors["page"] = "must be at least 1"
        if not 1 <= limit <= MAX_SEARCH_LIMIT:
            errors["limit"] = f"must be between 1 and {MAX_SEARCH_LIMIT}"
        if errors:
            raise ValidationException(errors)

        matches = [u for u in await self.user_repo.list_all() if _matches(u, needle)]
        matches.sort(key=lambda u: u.updated_at or datetime.min, reverse=True)

        start = (page - 1) * limit
        return UserSearchPage(
            users=matches[start:start + limit],
            total=len(matches),
            page=page,
            limit=limit,
            pages=math.ceil(len(matches) / limit),
        )

    async def profile_completion(self, user_id: UUID) -> ProfileCompletion:
        user = await self._get_user(user_id)

        missing = [suggestion for suggestion, check in COMPLETION_CHECKS if not check(user)]
        total = len(COMPLETION_CHECKS)
        completed = total - len(missing)
        percentage = round(completed * 100 / total)
        return ProfileCompletion(
            percentage=percentage,
            completed=completed,
            total=total,
            strength=profile_strength(percentage),
            suggestions=missing[:MAX_SUGGESTIONS],
        )

    async def update_profile(self, user_id: UUID, changes: ProfileUpdate) -> User:
        user = await self._load_fresh(user_id)

        values: Dict[str, Any] = {}
        if changes.name is not None:
            if not changes.name.strip():
                raise ValidationException.single("name", "Name cannot be empty")
            values["name"] = changes.name.strip()
        for attr in ("headline", "location", "about"):
            value = getattr(changes, attr)
            if value is not None:
                values[attr] = value.strip()

        return await self._save(replace(user, **values))

    async def set_image(self, user_id: UUID, kind: UploadKind, filename: str, content: bytes) -> User:
        if kind == UploadKind.DOCUMENT:
            raise ValidationException.single("kind", "must be a profile picture or cover photo")
        user = await self._load_fresh(user_id)

        path = await self.file_storage.save_file(user.id, filename, content, kind)
        attr = "profile_picture" if kind == UploadKind.PROFILE_PICTURE else "cover_photo"
        return await self._save(replace(user, **{attr: path}))

    async def add_document(self, user_id: UUID, filename: str, content: bytes) -> User:
        user = await self._load_fresh(user_id)

        path = await self.file_storage.save_file(user.id, filename, content, UploadKind.DOCUMENT)
        document = Document(original_name=filename, file_path=path, date_uploaded=self.clock())

        logger.info(f"Document {document.id} '{filename}' added for user {user_id}")
        return await self._save(replace(user, documents=[document] + list(user.documents)))

    async def remove_document(self, user_id: UUID, document_id: str) -> User:
        user = await self._load_fresh(user_id)
        if not user.find_document(document_id):
            raise ResourceNotFoundException("Document", document_id)

        # the file stays on disk: submitted applications may still reference it
        remaining = [d for d in user.documents if d.id != document_id]
        return await self._save(replace(user, documents=remaining))

    async def add_skill(self, user_id: UUID, name: str) -> User:
        name = (name or "").strip()
        if not name:
            raise ValidationException.single("name", "Skill name is required")

        user = await self._load_fresh(user_id)
        if user.has_skill(name):
            raise DuplicateResourceException("Skill", "name", name)

        return await self._save(replace(user, skills=[Skill(name=name)] + list(user.skills)))

    async def remove_skill(self, user_id: UUID, skill_id: str) -> User:
        user = await self._load_fresh(user_id)
        if not any(s.id == skill_id for s in user.skills):
            raise ResourceNotFoundException("Skill", skill_id)
        return await self._save(replace(user, skills=[s for s in user.skills if s.id != skill_id]))

    async def add_experience(self, user_id: UUID, draft: ExperienceDraft) -> User:
        errors: Dict[str, str] = {}
        for attr in ("title", "company"):
            if not (getattr(draft, attr) or "").strip():
                errors[attr] = f"{attr.capitalize()} is required"
        if draft.from_date is None:
            errors["from_date"] = "Start date is required"
        if errors:
            raise ValidationException(errors)

        entry = Experience(
            title=draft.title.strip(),
            company=draft.company.strip(),
            from_date=as_datetime(draft.from_date),
            location=draft.location,
            to_date=None if draft.current or draft.to_date is None else as_datetime(draft.to_date),
            current=draft.current,
            description=draft.description,
        )
        user = await self._load_fresh(user_id)
        return await self._save(replace(user, experience=[entry] + list(user.experience)))

    async def remove_experience(self, user_id: UUID, experience_id: str) -> User:
        user = await self._load_fresh(user_id)
        if not any(e.id == experience_id for e in user.experience):
            raise ResourceNotFoundException("Experience", experience_id)
        return await self._save(replace(user, experience=[e for e in user.experience if e.id != experience_id]))

    async def update_experience(self, user_id: UUID, experience_id: str, changes: ExperienceUpdate) -> User:
        errors = {
            attr: f"{attr.capitalize()} cannot be empty"
            for attr in ("title", "company")
            if getattr(changes, attr) is not None and not getattr(changes, attr).strip()
        }
        if errors:
            raise ValidationException(errors)

        user = await self._load_fresh(user_id)
        entry = next((e for e in user.experience if e.id == experience_id), None)
        if not entry:
            raise ResourceNotFoundException("Experience", experience_id)

        values: Dict[str, Any] = {}
        for attr in ("title", "company"):
            if getattr(changes, attr) is not None:
                values[attr] = getattr(changes, attr).strip()
        for attr in ("location", "description", "current"):
            if getattr(changes, attr) is not None:
                values[attr] = getattr(changes, attr)
        if changes.from_date is not None:
            values["from_date"] = as_datetime(changes.from_date)
        if changes.to_date is not None:
            values["to_date"] = as_datetime(changes.to_date)

        edited = replace(entry, **values)
        if edited.current:
            edited = replace(edited, to_date=None)
        experience = [edited if e.id == experience_id else e for e in user.experience]
        return await self._save(replace(user, experience=experience))

    async def add_education(self, user_id: UUID, draft: EducationDraft) -> User:
        errors: Dict[str, str] = {}
        for attr in ("school", "degree"):
            if not (getattr(draft, attr) or "").strip():
                errors[attr] = f"{attr.capitalize()} is required"
        if draft.from_date is None:
            errors["from_date"] = "Start date is required"
        if errors:
            raise ValidationException(errors)

        entry = Education(
            school=draft.school.strip(),
            degree=draft.degree.strip(),
            from_date=as_datetime(draft.from_date),
            field_of_study=draft.field_of_study,
            to_date=None if draft.current or draft.to_date is None else as_datetime(draft.to_date),
            current=draft.current,
            grade=draft.grade,
            description=draft.description,
        )
        user = await self._load_fresh(user_id)
        return await self._save(replace(user, education=[entry] + list(user.education)))

    async def _get_user(self, user_id: UUID) -> User:
        """Cached read"""
        cached = await self.cache.get_json(profile_key(user_id))
        if cached:
            return _from_cache(cached)

        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise ResourceNotFoundException("User", str(user_id))
        await self.cache.set_json(profile_key(user_id), _to_cache(user))
        return user

    async def _load_fresh(self, user_id: UUID) -> User:
        """Uncached read for read-modify-write"""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise ResourceNotFoundException("User", str(user_id))
        return user

    async def _save(self, user: User) -> User:
        saved = await self.user_repo.update(user)
        # the row is committed before its key is evicted
        await self.user_repo.commit()
        await self.cache.delete(profile_key(user.id))
        return saved
