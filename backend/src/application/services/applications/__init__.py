"""
Application Service Interface
Applying to jobs and the company-side review workflow
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Sequence, Union
from uuid import UUID

from domain.entities import Application, ApplicationDetails

SORT_KEYS = ("date", "name", "status")
SORT_ORDERS = ("asc", "desc")
MAX_PAGE_SIZE = 100


@dataclass
class ApplicationFilter:
    """
    Filter, search, sort and page options for a job's applications

    A bare ``date_to`` date includes the whole day.
    """

    status: Optional[str] = None
    date_from: Optional[Union[datetime, date]] = None
    date_to: Optional[Union[datetime, date]] = None
    search: Optional[str] = None
    sort_by: str = "date"
    order: str = "desc"
    page: int = 1
    limit: int = 20


@dataclass
class ApplicationPage:
    items: List[ApplicationDetails] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20
    pages: int = 0


class IApplicationService(ABC):
    """Application service interface"""

    @abstractmethod
    async def apply(
        self,
        job_id: UUID,
        applicant_id: UUID,
        cover_letter: Optional[str] = None,
        document_ids: Optional[Sequence[str]] = None
    ) -> Application:
        """
        Submit an application

        Raises:
            ResourceNotFoundException: job does not exist
            DeadlinePassedException: job deadline has passed
            ForbiddenException: applicant is not a seeker
            DuplicateApplicationException: applicant already applied
        """
        pass

    @abstractmethod
    async def list_for_job(
        self,
        job_id: UUID,
        caller_id: UUID,
        filters: Optional[ApplicationFilter] = None
    ) -> ApplicationPage:
        """Filtered, searched, sorted and paginated applications of an owned job"""
        pass

    @abstractmethod
    async def list_for_applicant(self, applicant_id: UUID) -> List[ApplicationDetails]:
        pass

    @abstractmethod
    async def update_status(self, application_id: UUID, caller_id: UUID, status: str) -> Application:
        pass

    @abstractmethod
    async def set_notes(self, application_id: UUID, caller_id: UUID, notes: Optional[str]) -> Application:
        pass

    @abstractmethod
    async def bulk_update_status(self, application_ids: Sequence[str], caller_id: UUID, status: str) -> int:
        """All-or-nothing; returns the modified count"""
        pass

    @abstractmethod
    async def bulk_set_notes(self, application_ids: Sequence[str], caller_id: UUID, notes: Optional[str]) -> int:
        """All-or-nothing; returns the modified count"""
        pass

    @abstractmethod
    async def export_csv(self, job_id: UUID, caller_id: UUID) -> str:
        """CSV document of a job's applications"""
        pass
