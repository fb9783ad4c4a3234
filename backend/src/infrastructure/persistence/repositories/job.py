"""
Job Repository Implementation
SQLAlchemy-based job posting repository
"""
from datetime import datetime
from typing import Optional, List
from uuid import UUID

from sqlalchemy import select, update, delete, and_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import Job
from domain.enums import JobType, WorkMode, ExperienceLevel, SalaryPeriod
from domain.value_objects import SalaryRange, JobStatus, Requirements, Benefits
from application.repositories.interfaces import IJobRepository, JobFilters
from infrastructure.persistence.models.job import JobModel
from core.exceptions import RepositoryException

LISTED_STATUSES = [JobStatus.PUBLISHED.value, JobStatus.ACTIVE.value]


class SQLAlchemyJobRepository(IJobRepository):
    """SQLAlchemy implementation of job repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID"""
        try:
            model = await self.session.get(JobModel, job_id, populate_existing=True)
            return self._to_entity(model) if model else None

        except SQLAlchemyError as e:
            logger.error(f"Failed to get job by ID {job_id}: {str(e)}")
            raise RepositoryException(f"Failed to get job: {str(e)}")

    async def create(self, job: Job) -> Job:
        """Create new job"""
        try:
            model = JobModel(id=job.id, user_id=job.user_id, views=0, application_count=0)
            self._apply_fields(model, job)
            if job.date:
                model.date = job.date
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)

            logger.info(f"Created job {model.id} for company {job.user_id}")
            return self._to_entity(model)

        except SQLAlchemyError as e:
            logger.error(f"Failed to create job {job.title}: {str(e)}")
            raise RepositoryException(f"Failed to create job: {str(e)}")

    async def update(self, job: Job) -> Job:
        """Replace the updatable fields of an existing job (counters untouched)"""
        try:
            model = await self.session.get(JobModel, job.id)
            if not model:
                raise RepositoryException(f"Job not found: {job.id}")

            self._apply_fields(model, job)
            await self.session.flush()
            await self.session.refresh(model)
            return self._to_entity(model)

        except SQLAlchemyError as e:
            logger.error(f"Failed to update job {job.id}: {str(e)}")
            raise RepositoryException(f"Failed to update job: {str(e)}")

    async def delete(self, job_id: UUID) -> bool:
        """Hard delete; applications of the job are left in place"""
        try:
            result = await self.session.execute(delete(JobModel).where(JobModel.id == job_id))
            await self.session.flush()
            return result.rowcount > 0

        except SQLAlchemyError as e:
            logger.error(f"Failed to delete job {job_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete job: {str(e)}")

    async def list_public(self, now: datetime, filters: Optional[JobFilters] = None) -> List[Job]:
        """Published/active jobs whose deadline has not passed"""
        try:
            conditions = [
                JobModel.status.in_(LISTED_STATUSES),
                JobModel.deadline >= now,
            ]

            if filters:
                if filters.keyword:
                    pattern = f"%{filters.keyword.strip()}%"
                    conditions.append(or_(
                        JobModel.title.ilike(pattern),
                        JobModel.description.ilike(pattern),
                        JobModel.company.ilike(pattern),
                    ))
                if filters.location:
                    conditions.append(JobModel.location.ilike(f"%{filters.location.strip()}%"))
                if filters.job_type:
                    conditions.append(JobModel.job_type == filters.job_type.value)
                if filters.work_mode:
                    conditions.append(JobModel.work_mode == filters.work_mode.value)
                if filters.experience_level:
                    conditions.append(JobModel.experience_level == filters.experience_level.value)

            result = await self.session.execute(
                select(JobModel)
                .where(and_(*conditions))
                .order_by(JobModel.date.desc())
            )
            return [self._to_entity(m) for m in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Failed to list public jobs: {str(e)}")
            raise RepositoryException(f"Failed to list jobs: {str(e)}")

    async def list_by_owner(self, owner_id: UUID) -> List[Job]:
        """Get all jobs for a company"""
        try:
            result = await self.session.execute(
                select(JobModel)
                .where(JobModel.user_id == owner_id)
                .order_by(JobModel.date.desc())
            )
            return [self._to_entity(m) for m in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Failed to find jobs for company {owner_id}: {str(e)}")
            raise RepositoryException(f"Failed to find jobs: {str(e)}")

    async def increment_views(self, job_id: UUID) -> None:
        await self._increment(job_id, JobModel.views, "views")

    async def increment_application_count(self, job_id: UUID) -> None:
        await self._increment(job_id, JobModel.application_count, "application_count")

    async def _increment(self, job_id: UUID, column, name: str) -> None:
        try:
            await self.session.execute(
                update(JobModel)
                .where(JobModel.id == job_id)
                .values({name: column + 1})
            )
            await self.session.flush()

        except SQLAlchemyError as e:
            logger.error(f"Failed to increment {name} for job {job_id}: {str(e)}")
            raise RepositoryException(f"Failed to update job counter: {str(e)}")

    @staticmethod
    def _apply_fields(model: JobModel, job: Job) -> None:
        """Copy every updatable field from the entity onto the model"""
        model.title = job.title
        model.company = job.company
        model.location = job.location
        model.description = job.description
        model.job_type = job.job_type.value
        model.work_mode = job.work_mode.value
        model.experience_level = job.experience_level.value
        model.salary_min = job.salary_range.min_salary
        model.salary_max = job.salary_range.max_salary
        model.salary_currency = job.salary_range.currency
        model.salary_period = job.salary_range.period.value
        model.requirements = job.requirements.to_dict()
        model.benefits = job.benefits.to_dict()
        model.contact_email = job.contact_email
        model.is_easy_apply = job.is_easy_apply
        model.is_urgent = job.is_urgent
        model.deadline = job.deadline
        model.status = job.status.value

    @staticmethod
    def _to_entity(model: JobModel) -> Job:
        """Convert ORM model to domain entity"""
        return Job(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            company=model.company,
            location=model.location,
            description=model.description,
            deadline=model.deadline,
            job_type=JobType(model.job_type),
            work_mode=WorkMode(model.work_mode),
            experience_level=ExperienceLevel(model.experience_level),
            salary_range=SalaryRange(
                min_salary=model.salary_min,
                max_salary=model.salary_max,
                currency=model.salary_currency,
                period=SalaryPeriod(model.salary_period),
            ),
            requirements=Requirements.from_dict(model.requirements),
            benefits=Benefits.from_dict(model.benefits),
            contact_email=model.contact_email,
            is_easy_apply=model.is_easy_apply,
            is_urgent=model.is_urgent,
            status=JobStatus(model.status),
            views=model.views,
            application_count=model.application_count,
            date=model.date,
            updated_at=model.updated_at,
        )
