"""
Profile Service Interface
Own and public profiles, directory, search, documents, skills, experience,
education and profile completion
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Tuple, Union
from uuid import UUID

from domain.entities import User
from application.services.storage import UploadKind


MAX_SEARCH_LIMIT = 50

@dataclass
class ProfileUpdate:
    """Fields left as None keep their current value"""

    name: Optional[str] = None
    headline: Optional[str] = None
    location: Optional[str] = None
    about: Optional[str] = None


@dataclass
class ExperienceDraft:
    title: Optional[str] = None
    company: Optional[str] = None
    from_date: Optional[Union[datetime, date]] = None
    location: Optional[str] = None
    to_date: Optional[Union[datetime, date]] = None
    current: bool = False
    description: Optional[str] = None


@dataclass
class ExperienceUpdate:
    """Partial edit of an experience entry; None keeps the current value"""

    title: Optional[str] = None
    company: Optional[str] = None
    from_date: Optional[Union[datetime, date]] = None
    location: Optional[str] = None
    to_date: Optional[Union[datetime, date]] = None
    current: Optional[bool] = None
    description: Optional[str] = None


@dataclass
class EducationDraft:
    school: Optional[str] = None
    degree: Optional[str] = None
    from_date: Optional[Union[datetime, date]] = None
    field_of_study: Optional[str] = None
    to_date: Optional[Union[datetime, date]] = None
    current: bool = False
    grade: Optional[str] = None
    description: Optional[str] = None


@dataclass
class ProfileCompletion:
    percentage: int
    completed: int
    total: int
    strength: str
    suggestions: List[str] = field(default_factory=list)


@dataclass
class UserSearchPage:
    users: List[User] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10
    pages: int = 0


class IProfileService(ABC):
    """Profile service interface"""

    @abstractmethod
    async def me(self, user_id: UUID) -> User:
        pass

    @abstractmethod
    async def public_profile(self, user_id: UUID, viewer_id: Optional[UUID] = None) -> Tuple[User, bool]:
        """
        Profile of any user and whether the viewer owns it

        Raises:
            ResourceNotFoundException: user does not exist
        """
        pass

    @abstractmethod
    async def directory(self) -> List[User]:
        pass

    @abstractmethod
    async def search(self, query: str, page: int = 1, limit: int = 10) -> UserSearchPage:
        """
        Case-insensitive substring match on name, headline and skills,
        most recently updated first

        Raises:
            ValidationException: blank query or bad paging values
        """
        pass

    @abstractmethod
    async def profile_completion(self, user_id: UUID) -> ProfileCompletion:
        pass

    @abstractmethod
    async def update_profile(self, user_id: UUID, changes: ProfileUpdate) -> User:
        pass

    @abstractmethod
    async def set_image(self, user_id: UUID, kind: UploadKind, filename: str, content: bytes) -> User:
        """Replace the profile picture or cover photo"""
        pass

    @abstractmethod
    async def add_document(self, user_id: UUID, filename: str, content: bytes) -> User:
        pass

    @abstractmethod
    async def remove_document(self, user_id: UUID, document_id: str) -> User:
        pass

    @abstractmethod
    async def add_skill(self, user_id: UUID, name: str) -> User:
        """
        Raises:
            DuplicateResourceException: skill already present (case-insensitive)
        """
        pass

    @abstractmethod
    async def remove_skill(self, user_id: UUID, skill_id: str) -> User:
        pass

    @abstractmethod
    async def add_experience(self, user_id: UUID, draft: ExperienceDraft) -> User:
        pass

    @abstractmethod
    async def update_experience(self, user_id: UUID, experience_id: str, changes: ExperienceUpdate) -> User:
        pass

    @abstractmethod
    async def remove_experience(self, user_id: UUID, experience_id: str) -> User:
        pass

    @abstractmethod
    async def add_education(self, user_id: UUID, draft: EducationDraft) -> User:
        pass
