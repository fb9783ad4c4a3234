"""
Job Schemas
Request bodies accept both the canonical snake_case names and the
camelCase / legacy spellings sent by existing clients; everything past
this module sees canonical names only.
"""
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from application.services.jobs import JobDraft
from domain.entities import Job


def _alias(*names: str) -> AliasChoices:
    return AliasChoices(*names)


class JobRequest(BaseModel):
    """Create / full update of a job posting"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Optional[str] = Field(None, validation_alias=_alias("title", "jobTitle"))
    company: Optional[str] = Field(None, validation_alias=_alias("company", "companyName"))
    location: Optional[str] = Field(None, validation_alias=_alias("location", "workLocation"))
    description: Optional[str] = None
    deadline: Optional[Union[datetime, date]] = Field(
        None, validation_alias=_alias("deadline", "applicationDeadline")
    )
    job_type: Optional[str] = Field(None, validation_alias=_alias("job_type", "jobType"))
    work_mode: Optional[str] = Field(None, validation_alias=_alias("work_mode", "workMode"))
    experience_level: Optional[str] = Field(
        None, validation_alias=_alias("experience_level", "experienceLevel")
    )
    salary_min: Optional[int] = Field(None, validation_alias=_alias("salary_min", "salaryMin"))
    salary_max: Optional[int] = Field(None, validation_alias=_alias("salary_max", "salaryMax"))
    salary_currency: Optional[str] = Field(
        None, validation_alias=_alias("salary_currency", "salaryCurrency")
    )
    salary_period: Optional[str] = Field(None, validation_alias=_alias("salary_period", "salaryPeriod"))
    requirements: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    benefits: Optional[Union[List[str], Dict[str, Any]]] = None
    contact_email: Optional[str] = Field(None, validation_alias=_alias("contact_email", "contactEmail"))
    is_easy_apply: Optional[bool] = Field(None, validation_alias=_alias("is_easy_apply", "isEasyApply"))
    is_urgent: Optional[bool] = Field(None, validation_alias=_alias("is_urgent", "isUrgent"))
    status: Optional[str] = None

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v):
        """Comma-separated string or list"""
        if v is None:
            return []
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("salary_min", "salary_max", mode="before")
    @classmethod
    def blank_salary(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_draft(self) -> JobDraft:
        return JobDraft(**self.model_dump())


class SalaryResponse(BaseModel):
    min: Optional[int] = None
    max: Optional[int] = None
    currency: str
    period: str


class RequirementsResponse(BaseModel):
    text: str = ""
    skills: List[str] = Field(default_factory=list)


class JobResponse(BaseModel):
    """Job with status derived against the current time"""

    id: str
    user_id: str
    title: str
    company: str
    location: str
    description: str
    job_type: str
    work_mode: str
    experience_level: str
    salary: SalaryResponse
    requirements: RequirementsResponse
    benefits: Dict[str, Any]
    contact_email: Optional[str] = None
    is_easy_apply: bool
    is_urgent: bool
    deadline: datetime
    status: str
    views: int
    application_count: int
    date: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, job: Job, now: datetime) -> "JobResponse":
        return cls(
            id=str(job.id),
            user_id=str(job.user_id),
            title=job.title,
            company=job.company,
            location=job.location,
            description=job.description,
            job_type=job.job_type.value,
            work_mode=job.work_mode.value,
            experience_level=job.experience_level.value,
            salary=SalaryResponse(
                min=job.salary_range.min_salary,
                max=job.salary_range.max_salary,
                currency=job.salary_range.currency,
                period=job.salary_range.period.value,
            ),
            requirements=RequirementsResponse(**job.requirements.to_dict()),
            benefits=job.benefits.to_dict(),
            contact_email=job.contact_email,
            is_easy_apply=job.is_easy_apply,
            is_urgent=job.is_urgent,
            deadline=job.deadline,
            status=job.effective_status(now).value,
            views=job.views,
            application_count=job.application_count,
            date=job.date,
            updated_at=job.updated_at,
        )


class ApplyRequest(BaseModel):
    """Application submission"""

    model_config = ConfigDict(populate_by_name=True)

    cover_letter: Optional[str] = Field(None, validation_alias=_alias("cover_letter", "coverLetter"))
    document_ids: List[str] = Field(
        default_factory=list,
        validation_alias=_alias("document_ids", "documentIds", "attachedDocumentIds"),
    )
