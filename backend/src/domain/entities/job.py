"""
Job Domain Entity
Immutable job posting business object
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID

from ..value_objects import SalaryRange, JobStatus, Requirements, Benefits
from ..enums import JobType, WorkMode, ExperienceLevel


@dataclass(frozen=True)
class Job:
    """Job posting domain entity - immutable"""

    id: UUID
    user_id: UUID  # owning company
    title: str
    company: str
    location: str
    description: str
    deadline: datetime

    # Classification
    job_type: JobType = JobType.FULL_TIME
    work_mode: WorkMode = WorkMode.ON_SITE
    experience_level: ExperienceLevel = ExperienceLevel.ENTRY_LEVEL

    # Details
    salary_range: SalaryRange = field(default_factory=SalaryRange)
    requirements: Requirements = field(default_factory=Requirements)
    benefits: Benefits = field(default_factory=Benefits)
    contact_email: Optional[str] = None
    is_easy_apply: bool = True
    is_urgent: bool = False

    # Lifecycle
    status: JobStatus = JobStatus.PUBLISHED
    views: int = 0
    application_count: int = 0

    # Timestamps
    date: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate job data"""
        if not self.title or len(self.title.strip()) == 0:
            raise ValueError("Job title cannot be empty")

        if not self.description or len(self.description.strip()) == 0:
            raise ValueError("Job description cannot be empty")

    def is_owned_by(self, user_id: UUID) -> bool:
        return str(self.user_id) == str(user_id)

    def is_deadline_passed(self, now: datetime) -> bool:
        return self.deadline < now

    def is_publicly_visible(self, now: datetime) -> bool:
        """Listed status and deadline not yet passed"""
        return self.status.is_listed and not self.is_deadline_passed(now)

    def is_active(self, now: datetime) -> bool:
        """Counted as active on the dashboard"""
        return self.status == JobStatus.ACTIVE and not self.is_deadline_passed(now)

    def effective_status(self, now: datetime) -> JobStatus:
        """Stored status, or ``expired`` once the deadline has passed"""
        if self.is_deadline_passed(now):
            return JobStatus.EXPIRED
        return self.status

    def __str__(self) -> str:
        return f"Job({self.title} at {self.company})"
