"""
ApplicationService Implementation
Applying to jobs, company review workflow, bulk updates and CSV export
"""
import csv
import io
import math
from typing import Callable, List, Optional, Sequence, Set
from datetime import datetime
from uuid import UUID, uuid4

from application.services.applications import (
    IApplicationService,
    ApplicationFilter,
    ApplicationPage,
    SORT_KEYS,
    SORT_ORDERS,
    MAX_PAGE_SIZE,
)
from application.repositories.interfaces import (
    IApplicationRepository,
    IJobRepository,
    IUserRepository,
)
from domain.entities import Application, ApplicationDetails, AttachedDocument, Job, User
from domain.enums import UserRole
from domain.policies import (
    ensure_accepting_applications,
    ensure_owner,
    ensure_owns_all,
    ensure_role,
)
from domain.value_objects import ApplicationStatus
from core.clock import as_datetime, as_upper_bound, utcnow
from core.exceptions import (
    AuthenticationException,
    DuplicateApplicationException,
    ResourceNotFoundException,
    ValidationException,
)
from core.logging_config import logger

CSV_HEADER = [
    "Name",
    "Email",
    "Headline",
    "Location",
    "Status",
    "Applied Date",
    "Experience",
    "Skills",
    "Cover Letter Preview",
    "Notes",
]
COVER_LETTER_PREVIEW_LENGTH = 100


def flatten_text(value: Optional[str]) -> str:
    """Replace quotes and line breaks with spaces"""
    if not value:
        return ""
    for char in ('"', "\r", "\n"):
        value = value.replace(char, " ")
    return value


def parse_application_status(value: Optional[str]) -> ApplicationStatus:
    try:
        return ApplicationStatus(str(value or "").strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise ValidationException.single("status", f"must be one of: {allowed}")


def _matches(details: ApplicationDetails, needle: str) -> bool:
    applicant = details.applicant
    haystack = [details.application.cover_letter or ""]
    if applicant:
        haystack += [applicant.name, str(applicant.email), applicant.headline or "", applicant.location or ""]
    return any(needle in value.lower() for value in haystack)


def _sort_key(sort_by: str):
    if sort_by == "name":
        return lambda d: (d.applicant.name.lower() if d.applicant else "")
    if sort_by == "status":
        return lambda d: d.application.status.value
    return lambda d: d.application.date or datetime.min


class ApplicationService(IApplicationService):
    """Application service implementation"""

    def __init__(
        self,
        application_repository: IApplicationRepository,
        job_repository: IJobRepository,
        user_repository: IUserRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.application_repo = application_repository
        self.job_repo = job_repository
        self.user_repo = user_repository
        self.clock = clock

    async def apply(
        self,
        job_id: UUID,
        applicant_id: UUID,
        cover_letter: Optional[str] = None,
        document_ids: Optional[Sequence[str]] = None
    ) -> Application:
        job = await self._load_job(job_id)

        # deadline is checked before the applicant's role
        ensure_accepting_applications(job, self.clock())

        applicant = await self.user_repo.get_by_id(applicant_id)
        if not applicant:
            raise AuthenticationException()
        ensure_role(applicant, UserRole.SEEKER, "Only job seekers can apply for jobs.")

        if await self.application_repo.exists_for_job(job.id, applicant.id):
            raise DuplicateApplicationException()

        wanted: Set[str] = {str(d) for d in (document_ids or [])}
        attached = [
            AttachedDocument(original_name=d.original_name, file_path=d.file_path)
            for d in applicant.documents
            if d.id in wanted
        ]

        application = await self.application_repo.create(Application(
            id=uuid4(),
            job_id=job.id,
            applicant_id=applicant.id,
            company_id=job.user_id,
            cover_letter=cover_letter,
            attached_documents=attached,
        ))
        await self.job_repo.increment_application_count(job.id)

        logger.info(
            f"Application {application.id} submitted by {applicant_id} for job {job_id} "
            f"({len(attached)} documents)"
        )
        return application

    async def list_for_job(
        self,
        job_id: UUID,
        caller_id: UUID,
        filters: Optional[ApplicationFilter] = None
    ) -> ApplicationPage:
        filters = filters or ApplicationFilter()
        self._validate_filter(filters)
        status = parse_application_status(filters.status) if filters.status else None

        job = await self._load_job(job_id)
        ensure_owner(job, caller_id)

        results = await self.application_repo.list_for_job(
            job_id,
            status=status,
            date_from=as_datetime(filters.date_from) if filters.date_from else None,
            date_to=as_upper_bound(filters.date_to) if filters.date_to else None,
        )

        # search runs over the populated rows
        if filters.search and filters.search.strip():
            needle = filters.search.strip().lower()
            results = [d for d in results if _matches(d, needle)]

        results.sort(key=_sort_key(filters.sort_by), reverse=filters.order == "desc")

        total = len(results)
        start = (filters.page - 1) * filters.limit
        return ApplicationPage(
            items=results[start:start + filters.limit],
            total=total,
            page=filters.page,
            limit=filters.limit,
            pages=math.ceil(total / filters.limit),
        )

    async def list_for_applicant(self, applicant_id: UUID) -> List[ApplicationDetails]:
        return await self.application_repo.list_for_applicant(applicant_id)

    async def update_status(self, application_id: UUID, caller_id: UUID, status: str) -> Application:
        application = await self._load_owned(application_id, caller_id)
        new_status = parse_application_status(status)

        updated = await self.application_repo.update_status(application.id, new_status)
        logger.info(f"Application {application_id} status {application.status.value} -> {new_status.value}")
        return updated

    async def set_notes(self, application_id: UUID, caller_id: UUID, notes: Optional[str]) -> Application:
        application = await self._load_owned(application_id, caller_id)
        return await self.application_repo.update_notes(application.id, notes or "")

    async def bulk_update_status(self, application_ids: Sequence[str], caller_id: UUID, status: str) -> int:
        ids = self._parse_ids(application_ids)
        new_status = parse_application_status(status)
        await self._load_all_owned(ids, caller_id)

        modified = await self.application_repo.bulk_update_status(ids, new_status)
        logger.info(f"Bulk status update by {caller_id}: {modified} applications -> {new_status.value}")
        return modified

    async def bulk_set_notes(self, application_ids: Sequence[str], caller_id: UUID, notes: Optional[str]) -> int:
        ids = self._parse_ids(application_ids)
        await self._load_all_owned(ids, caller_id)

        modified = await self.application_repo.bulk_update_notes(ids, notes or "")
        logger.info(f"Bulk notes update by {caller_id}: {modified} applications")
        return modified

    async def export_csv(self, job_id: UUID, caller_id: UUID) -> str:
        job = await self._load_job(job_id)
        ensure_owner(job, caller_id)

        results = await self.application_repo.list_for_job(job_id)

        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for details in results:
            writer.writerow(self._csv_row(details))

        logger.info(f"Exported {len(results)} applications of job {job_id}")
        return buffer.getvalue()

    @staticmethod
    def _csv_row(details: ApplicationDetails) -> List[str]:
        app = details.application
        applicant: Optional[User] = details.applicant
        cover_letter = flatten_text(app.cover_letter)[:COVER_LETTER_PREVIEW_LENGTH]
        return [
            applicant.name if applicant else "",
            str(applicant.email) if applicant else "",
            applicant.headline if applicant else "",
            applicant.location if applicant else "",
            app.status.value,
            app.date.strftime("%Y-%m-%d") if app.date else "",
            str(len(applicant.experience)) if applicant else "0",
            "; ".join(s.name for s in applicant.skills) if applicant else "",
            cover_letter,
            flatten_text(app.company_notes),
        ]

    async def _load_job(self, job_id: UUID) -> Job:
        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise ResourceNotFoundException("Job", str(job_id))
        return job

    async def _load_owned(self, application_id: UUID, caller_id: UUID) -> Application:
        application = await self.application_repo.get_by_id(application_id)
        if not application:
            raise ResourceNotFoundException("Application", str(application_id))
        ensure_owner(application, caller_id)
        return application

    async def _load_all_owned(self, ids: List[UUID], caller_id: UUID) -> List[Application]:
        """Every id must exist and belong to the caller, otherwise nothing is touched"""
        applications = await self.application_repo.get_by_ids(ids)
        found = {a.id for a in applications}
        missing = [str(i) for i in ids if i not in found]
        if missing:
            raise ResourceNotFoundException("Application", ", ".join(missing))
        ensure_owns_all(applications, caller_id)
        return applications

    @staticmethod
    def _parse_ids(values: Sequence[str]) -> List[UUID]:
        if not values:
            raise ValidationException.single("application_ids", "At least one application id is required")
        ids: List[UUID] = []
        for value in values:
            try:
                parsed = value if isinstance(value, UUID) else UUID(str(value))
            except ValueError:
                raise ResourceNotFoundException("Application", str(value))
            if parsed not in ids:
                ids.append(parsed)
        return ids

    @staticmethod
    def _validate_filter(filters: ApplicationFilter) -> None:
        errors = {}
        if filters.sort_by not in SORT_KEYS:
            errors["sort_by"] = f"must be one of: {', '.join(SORT_KEYS)}"
        if filters.order not in SORT_ORDERS:
            errors["order"] = f"must be one of: {', '.join(SORT_ORDERS)}"
        if filters.page < 1:
            errors["page"] = "must be at least 1"
        if not 1 <= filters.limit <= MAX_PAGE_SIZE:
            errors["limit"] = f"must be between 1 and {MAX_PAGE_SIZE}"
        if errors:
            raise ValidationException(errors)
