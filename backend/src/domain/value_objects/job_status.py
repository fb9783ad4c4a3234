"""
Job Status Enums
Status enumerations for jobs and applications
"""
from enum import Enum
from typing import Optional


class JobStatus(str, Enum):
    """Job posting status"""
    DRAFT = "draft"
    PUBLISHED = "published"
    ACTIVE = "active"
    PAUSED = "paused"
    CLOSED = "closed"
    EXPIRED = "expired"  # derived on read from the deadline, never stored

    @classmethod
    def from_input(cls, value: Optional[str]) -> "JobStatus":
        """
        Normalize a client-supplied status

        ``live`` maps to published and ``inactive`` to paused; anything
        unknown (including ``expired``) falls back to published.
        """
        if not value:
            return cls.PUBLISHED
        normalized = str(value).strip().lower()
        if normalized in STATUS_ALIASES:
            return STATUS_ALIASES[normalized]
        try:
            status = cls(normalized)
        except ValueError:
            return cls.PUBLISHED
        return cls.PUBLISHED if status is cls.EXPIRED else status

    @property
    def is_listed(self) -> bool:
        """Statuses eligible for the public listing"""
        return self in (JobStatus.PUBLISHED, JobStatus.ACTIVE)


STATUS_ALIASES = {
    "live": JobStatus.PUBLISHED,
    "inactive": JobStatus.PAUSED,
}


class ApplicationStatus(str, Enum):
    """Job application status"""
    PENDING = "pending"
    VIEWED = "viewed"
    SUCCESSFUL = "successful"
    UNSUCCESSFUL = "unsuccessful"
