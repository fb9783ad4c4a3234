"""
Application Schemas
"""
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from domain.entities import Application, ApplicationDetails, User


class AttachedDocumentResponse(BaseModel):
    original_name: str
    file_path: str


class ApplicantSummary(BaseModel):
    """Applicant fields shown to the reviewing company"""

    id: str
    name: str
    email: str
    headline: str
    location: str
    profile_picture: str = ""
    skills: List[str] = Field(default_factory=list)
    experience_count: int = 0

    @classmethod
    def from_entity(cls, user: User) -> "ApplicantSummary":
        return cls(
            id=str(user.id),
            name=user.name,
            email=str(user.email),
            headline=user.headline,
            location=user.location,
            profile_picture=user.profile_picture,
            skills=[s.name for s in user.skills],
            experience_count=len(user.experience),
        )


class JobSummary(BaseModel):
    """Job fields denormalized into an applicant's own list; null once the job is deleted"""

    id: str
    title: Optional[str] = None
    company: Optional[str] = None


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    applicant_id: str
    company_id: str
    status: str
    cover_letter: Optional[str] = None
    attached_documents: List[AttachedDocumentResponse] = Field(default_factory=list)
    company_notes: str = ""
    date: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    applicant: Optional[ApplicantSummary] = None
    job: Optional[JobSummary] = None

    @classmethod
    def from_entity(cls, application: Application) -> "ApplicationResponse":
        return cls(
            id=str(application.id),
            job_id=str(application.job_id),
            applicant_id=str(application.applicant_id),
            company_id=str(application.company_id),
            status=application.status.value,
            cover_letter=application.cover_letter,
            attached_documents=[
                AttachedDocumentResponse(**d.to_dict()) for d in application.attached_documents
            ],
            company_notes=application.company_notes,
            date=application.date,
            updated_at=application.updated_at,
        )

    @classmethod
    def from_details(cls, details: ApplicationDetails, with_job: bool = False) -> "ApplicationResponse":
        response = cls.from_entity(details.application)
        if details.applicant:
            response.applicant = ApplicantSummary.from_entity(details.applicant)
        if with_job:
            job = details.job
            response.job = JobSummary(
                id=str(details.application.job_id),
                title=job.title if job else None,
                company=job.company if job else None,
            )
        return response


class PaginationResponse(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class ApplicationListResponse(BaseModel):
    applications: List[ApplicationResponse]
    pagination: PaginationResponse


class StatusUpdateRequest(BaseModel):
    status: str


class NotesRequest(BaseModel):
    notes: Optional[str] = ""


class BulkStatusRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    application_ids: List[str] = Field(
        ..., validation_alias=AliasChoices("application_ids", "applicationIds")
    )
    status: str


class BulkNotesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    application_ids: List[str] = Field(
        ..., validation_alias=AliasChoices("application_ids", "applicationIds")
    )
    notes: Optional[str] = ""


class BulkUpdateResponse(BaseModel):
    message: str
    modified_count: int
