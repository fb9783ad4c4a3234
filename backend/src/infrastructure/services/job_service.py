"""
JobService Implementation
Job posting lifecycle with ownership, role and deadline rules
"""
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import async_sessionmaker

from application.services.jobs import IJobService, JobDraft
from application.repositories.interfaces import IJobRepository, IUserRepository, JobFilters
from domain.entities import Job, User
from domain.enums import JobType, WorkMode, ExperienceLevel, SalaryPeriod, UserRole, parse_enum
from domain.policies import ensure_owner, ensure_reopenable, ensure_role
from domain.value_objects import SalaryRange, JobStatus, Requirements, Benefits
from infrastructure.persistence.repositories.job import SQLAlchemyJobRepository
from core.clock import as_datetime, utcnow
from core.config import settings
from core.exceptions import AuthenticationException, ResourceNotFoundException, ValidationException
from core.logging_config import logger


def build_benefits(value: Any) -> Benefits:
    """Benefits from a list of slugs or a dict of flags"""
    if not value:
        return Benefits()
    if isinstance(value, dict):
        return Benefits.from_dict(value)
    if isinstance(value, str):
        return Benefits.from_slugs(value.split(","))
    return Benefits.from_slugs(value)


class JobService(IJobService):
    """Job service implementation"""

    def __init__(
        self,
        job_repository: IJobRepository,
        user_repository: IUserRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.job_repo = job_repository
        self.user_repo = user_repository
        self.clock = clock

    async def create(self, owner_id: UUID, draft: JobDraft) -> Job:
        owner = await self._load_user(owner_id)
        ensure_role(owner, UserRole.COMPANY, "Authorization denied: Only company accounts can post jobs.")

        job = self._build(uuid4(), owner, draft)
        created = await self.job_repo.create(job)

        logger.info(f"Job {created.id} '{created.title}' posted by {owner_id} ({created.status.value})")
        return created

    async def public_list(self, filters: Optional[JobFilters] = None) -> List[Job]:
        return await self.job_repo.list_public(self.clock(), filters)

    async def owner_list(self, owner_id: UUID) -> List[Job]:
        owner = await self._load_user(owner_id)
        ensure_role(owner, UserRole.COMPANY)
        return await self.job_repo.list_by_owner(owner_id)

    async def get_by_id(self, job_id: UUID) -> Job:
        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise ResourceNotFoundException("Job", str(job_id))
        return job

    async def update(self, job_id: UUID, caller_id: UUID, draft: JobDraft) -> Job:
        job = await self._load_owned(job_id, caller_id)
        owner = await self._load_user(caller_id)

        updated = self._build(job.id, owner, draft, existing=job)
        saved = await self.job_repo.update(updated)

        logger.info(f"Job {job_id} updated by {caller_id}")
        return saved

    async def close(self, job_id: UUID, caller_id: UUID) -> Job:
        job = await self._load_owned(job_id, caller_id)
        saved = await self.job_repo.update(replace(job, status=JobStatus.CLOSED))
        logger.info(f"Job {job_id} closed")
        return saved

    async def reopen(self, job_id: UUID, caller_id: UUID) -> Job:
        job = await self._load_owned(job_id, caller_id)
        ensure_reopenable(job, self.clock())
        saved = await self.job_repo.update(replace(job, status=JobStatus.PUBLISHED))
        logger.info(f"Job {job_id} reopened")
        return saved

    async def delete(self, job_id: UUID, caller_id: UUID) -> None:
        await self._load_owned(job_id, caller_id)
        await self.job_repo.delete(job_id)
        logger.info(f"Job {job_id} deleted by {caller_id}")

    async def _load_user(self, user_id: UUID) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            # token refers to an account that no longer exists
            raise AuthenticationException()
        return user

    async def _load_owned(self, job_id: UUID, caller_id: UUID) -> Job:
        job = await self.get_by_id(job_id)
        ensure_owner(job, caller_id)
        return job

    def _build(self, job_id: UUID, owner: User, draft: JobDraft, existing: Optional[Job] = None) -> Job:
        """Validate a draft and turn it into a Job, collecting every field error"""
        errors: Dict[str, str] = {}

        title = (draft.title or "").strip()
        description = (draft.description or "").strip()
        if not title:
            errors["title"] = "Job title is required"
        if not description:
            errors["description"] = "Job description is required"

        deadline = None
        if draft.deadline is None:
            errors["deadline"] = "Application deadline is a required field."
        else:
            try:
                deadline = as_datetime(draft.deadline)
            except ValueError as e:
                errors["deadline"] = str(e)

        def enum_field(name, enum_cls, value, default):
            try:
                return parse_enum(enum_cls, value, default)
            except ValueError as e:
                errors[name] = str(e)
                return default

        job_type = enum_field("job_type", JobType, draft.job_type, JobType.FULL_TIME)
        work_mode = enum_field("work_mode", WorkMode, draft.work_mode, WorkMode.ON_SITE)
        experience_level = enum_field(
            "experience_level", ExperienceLevel, draft.experience_level, ExperienceLevel.ENTRY_LEVEL
        )
        period = enum_field("salary_period", SalaryPeriod, draft.salary_period, SalaryPeriod.MONTHLY)

        salary_range = SalaryRange(period=period, currency=settings.DEFAULT_CURRENCY)
        try:
            salary_range = SalaryRange(
                min_salary=draft.salary_min,
                max_salary=draft.salary_max,
                currency=(draft.salary_currency or settings.DEFAULT_CURRENCY).strip().upper(),
                period=period,
            )
        except ValueError as e:
            errors["salary"] = str(e)

        if errors:
            raise ValidationException(errors)

        # PUT without a status keeps the current one
        if draft.status is None and existing is not None:
            status = existing.status
        else:
            status = JobStatus.from_input(draft.status)

        return Job(
            id=job_id,
            user_id=owner.id,
            title=title,
            company=(draft.company or "").strip() or owner.name,
            location=(draft.location or "").strip() or owner.location,
            description=description,
            deadline=deadline,
            job_type=job_type,
            work_mode=work_mode,
            experience_level=experience_level,
            salary_range=salary_range,
            requirements=Requirements(
                text=(draft.requirements or "").strip(),
                skills=[s.strip() for s in draft.skills if s and s.strip()],
            ),
            benefits=build_benefits(draft.benefits),
            contact_email=draft.contact_email or None,
            is_easy_apply=True if draft.is_easy_apply is None else draft.is_easy_apply,
            is_urgent=bool(draft.is_urgent),
            status=status,
            views=existing.views if existing else 0,
            application_count=existing.application_count if existing else 0,
            date=existing.date if existing else None,
        )


async def record_job_view(session_factory: async_sessionmaker, job_id: UUID) -> None:
    """
    Best-effort view counter update, run after the response is sent

    Opens its own session since the request session is already closed.
    Failures are logged and dropped.
    """
    try:
        async with session_factory() as session:
            await SQLAlchemyJobRepository(session).increment_views(job_id)
            await session.commit()
    except Exception as e:
        logger.warning(f"View count update failed for job {job_id}: {e}")
