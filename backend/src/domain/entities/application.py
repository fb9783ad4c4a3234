"""
Application Domain Entity
Immutable job application business object
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from ..value_objects import ApplicationStatus
from .job import Job
from .user import User


@dataclass(frozen=True)
class AttachedDocument:
    """Snapshot of an applicant document taken at submission time"""

    original_name: str
    file_path: str

    def to_dict(self) -> Dict[str, Any]:
        return {"original_name": self.original_name, "file_path": self.file_path}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AttachedDocument":
        return cls(original_name=data["original_name"], file_path=data["file_path"])


@dataclass(frozen=True)
class Application:
    """Job application domain entity - immutable"""

    id: UUID
    job_id: UUID
    applicant_id: UUID
    company_id: UUID  # job owner at submission time

    status: ApplicationStatus = ApplicationStatus.PENDING
    cover_letter: Optional[str] = None
    attached_documents: List[AttachedDocument] = field(default_factory=list)
    company_notes: str = ""

    # Timestamps
    date: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_owned_by(self, user_id: UUID) -> bool:
        return str(self.company_id) == str(user_id)

    def __str__(self) -> str:
        return f"Application({self.id}, status={self.status.value})"


@dataclass(frozen=True)
class ApplicationDetails:
    """Application joined with its applicant and/or job"""

    application: Application
    applicant: Optional[User] = None
    job: Optional[Job] = None
