"""
Job Service Interface
Job posting lifecycle: create, list, update, close/reopen, delete
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from domain.entities import Job
from application.repositories.interfaces import JobFilters


@dataclass
class JobDraft:
    """
    Client-supplied job fields under their canonical names

    Everything is optional here; presence and enum validity are checked by
    the service so that all problems are reported together.
    """

    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    deadline: Optional[Union[datetime, date]] = None
    job_type: Optional[str] = None
    work_mode: Optional[str] = None
    experience_level: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    salary_currency: Optional[str] = None
    salary_period: Optional[str] = None
    requirements: Optional[str] = None
    skills: List[str] = field(default_factory=list)
    benefits: Optional[Union[List[str], Dict[str, Any]]] = None
    contact_email: Optional[str] = None
    is_easy_apply: Optional[bool] = None
    is_urgent: Optional[bool] = None
    status: Optional[str] = None


class IJobService(ABC):
    """Job service interface"""

    @abstractmethod
    async def create(self, owner_id: UUID, draft: JobDraft) -> Job:
        """
        Create a job posting

        Raises:
            ForbiddenException: owner is not a company
            ValidationException: missing title/description/deadline or bad values
        """
        pass

    @abstractmethod
    async def public_list(self, filters: Optional[JobFilters] = None) -> List[Job]:
        """Publicly visible jobs, newest first"""
        pass

    @abstractmethod
    async def owner_list(self, owner_id: UUID) -> List[Job]:
        """All jobs of a company regardless of status or deadline"""
        pass

    @abstractmethod
    async def get_by_id(self, job_id: UUID) -> Job:
        """
        Raises:
            ResourceNotFoundException: job does not exist
        """
        pass

    @abstractmethod
    async def update(self, job_id: UUID, caller_id: UUID, draft: JobDraft) -> Job:
        """Full replacement of the updatable fields (owner only)"""
        pass

    @abstractmethod
    async def close(self, job_id: UUID, caller_id: UUID) -> Job:
        pass

    @abstractmethod
    async def reopen(self, job_id: UUID, caller_id: UUID) -> Job:
        """
        Raises:
            InvalidStateException: deadline already passed
        """
        pass

    @abstractmethod
    async def delete(self, job_id: UUID, caller_id: UUID) -> None:
        pass
