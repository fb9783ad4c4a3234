"""
Repository Interfaces (Abstract Base Classes)
Define contracts for data access without implementation details
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, List, Sequence
from uuid import UUID

from domain.entities import User, Job, Application, ApplicationDetails, Message
from domain.enums import JobType, WorkMode, ExperienceLevel
from domain.value_objects import ApplicationStatus


@dataclass(frozen=True)
class JobFilters:
    """Optional substring/classification filters for the public listing"""

    keyword: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    work_mode: Optional[WorkMode] = None
    experience_level: Optional[ExperienceLevel] = None


class IUserRepository(ABC):
    """User repository interface"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_ids(self, user_ids: Sequence[UUID]) -> List[User]:
        """Get several users by ID (missing ids are skipped)"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check if user exists by email"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Persist profile fields and embedded documents/skills/experience/education"""
        pass

    @abstractmethod
    async def list_all(self) -> List[User]:
        """All users, for the networking directory"""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Make pending writes visible to other sessions"""
        pass


class IJobRepository(ABC):
    """Job repository interface"""

    @abstractmethod
    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID"""
        pass

    @abstractmethod
    async def create(self, job: Job) -> Job:
        """Create new job"""
        pass

    @abstractmethod
    async def update(self, job: Job) -> Job:
        """Replace the updatable fields of an existing job"""
        pass

    @abstractmethod
    async def delete(self, job_id: UUID) -> bool:
        """Hard delete a job"""
        pass

    @abstractmethod
    async def list_public(self, now: datetime, filters: Optional[JobFilters] = None) -> List[Job]:
        """Published/active jobs with deadline >= now, newest first"""
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: UUID) -> List[Job]:
        """All jobs of one company regardless of status, newest first"""
        pass

    @abstractmethod
    async def increment_views(self, job_id: UUID) -> None:
        """Atomically add one to the view counter"""
        pass

    @abstractmethod
    async def increment_application_count(self, job_id: UUID) -> None:
        """Atomically add one to the application counter"""
        pass


class IApplicationRepository(ABC):
    """Application repository interface"""

    @abstractmethod
    async def get_by_id(self, application_id: UUID) -> Optional[Application]:
        """Get application by ID"""
        pass

    @abstractmethod
    async def get_by_ids(self, application_ids: Sequence[UUID]) -> List[Application]:
        """Get several applications by ID (missing ids are skipped)"""
        pass

    @abstractmethod
    async def create(self, application: Application) -> Application:
        """
        Create new application

        Raises:
            DuplicateApplicationException: (job, applicant) already exists
        """
        pass

    @abstractmethod
    async def exists_for_job(self, job_id: UUID, applicant_id: UUID) -> bool:
        """Check if applicant already applied to job"""
        pass

    @abstractmethod
    async def update_status(self, application_id: UUID, status: ApplicationStatus) -> Application:
        pass

    @abstractmethod
    async def update_notes(self, application_id: UUID, notes: str) -> Application:
        pass

    @abstractmethod
    async def bulk_update_status(self, application_ids: Sequence[UUID], status: ApplicationStatus) -> int:
        """Single UPDATE over all ids, returns modified row count"""
        pass

    @abstractmethod
    async def bulk_update_notes(self, application_ids: Sequence[UUID], notes: str) -> int:
        """Single UPDATE over all ids, returns modified row count"""
        pass

    @abstractmethod
    async def list_for_job(
        self,
        job_id: UUID,
        status: Optional[ApplicationStatus] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> List[ApplicationDetails]:
        """Applications of one job with applicants populated, newest first"""
        pass

    @abstractmethod
    async def list_for_applicant(self, applicant_id: UUID) -> List[ApplicationDetails]:
        """Applications of one applicant with jobs populated, newest first"""
        pass

    @abstractmethod
    async def list_for_company(self, company_id: UUID) -> List[Application]:
        """All applications received by one company"""
        pass


class IMessageRepository(ABC):
    """Message repository interface"""

    @abstractmethod
    async def create(self, message: Message) -> Message:
        pass

    @abstractmethod
    async def mark_read(self, sender_id: UUID, receiver_id: UUID) -> int:
        """Mark unread messages from sender to receiver as read"""
        pass

    @abstractmethod
    async def get_conversation(self, user_id: UUID, other_user_id: UUID) -> List[Message]:
        """Both directions, oldest first"""
        pass

    @abstractmethod
    async def list_involving(self, user_id: UUID) -> List[Message]:
        """Every message sent or received by the user"""
        pass

    @abstractmethod
    async def count_unread(self, receiver_id: UUID) -> int:
        pass
