"""
Application Repository Implementation
SQLAlchemy-based job application repository
"""
from datetime import datetime
from typing import Optional, List, Sequence
from uuid import UUID

from sqlalchemy import select, update, and_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import Application, AttachedDocument, ApplicationDetails
from domain.value_objects import ApplicationStatus
from application.repositories.interfaces import IApplicationRepository
from infrastructure.persistence.models.application import ApplicationModel
from infrastructure.persistence.models.job import JobModel
from infrastructure.persistence.models.user import UserModel
from infrastructure.persistence.repositories.job import SQLAlchemyJobRepository
from infrastructure.persistence.repositories.user import SQLAlchemyUserRepository
from core.clock import to_naive_utc, utcnow
from core.exceptions import (
    RepositoryException,
    ResourceNotFoundException,
    DuplicateApplicationException,
)


class SQLAlchemyApplicationRepository(IApplicationRepository):
    """SQLAlchemy implementation of application repository"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._users = SQLAlchemyUserRepository(session)

    async def get_by_id(self, application_id: UUID) -> Optional[Application]:
        """Get application by ID"""
        try:
            model = await self.session.get(ApplicationModel, application_id, populate_existing=True)
            return self._to_entity(model) if model else None

        except SQLAlchemyError as e:
            logger.error(f"Failed to get application {application_id}: {str(e)}")
            raise RepositoryException(f"Failed to get application: {str(e)}")

    async def get_by_ids(self, application_ids: Sequence[UUID]) -> List[Application]:
        if not application_ids:
            return []
        try:
            result = await self.session.execute(
                select(ApplicationModel)
                .where(ApplicationModel.id.in_(list(application_ids)))
                .execution_options(populate_existing=True)
            )
            return [self._to_entity(m) for m in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Failed to get applications {list(application_ids)}: {str(e)}")
            raise RepositoryException(f"Failed to get applications: {str(e)}")

    async def create(self, application: Application) -> Application:
        """Insert; the (job_id, applicant_id) unique constraint rejects duplicates"""
        model = ApplicationModel(
            id=application.id,
            job_id=application.job_id,
            applicant_id=application.applicant_id,
            company_id=application.company_id,
            status=application.status.value,
            cover_letter=application.cover_letter,
            attached_documents=[d.to_dict() for d in application.attached_documents],
            company_notes=application.company_notes,
        )
        try:
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)
            return self._to_entity(model)

        except IntegrityError:
            await self.session.rollback()
            logger.warning(
                f"Duplicate application rejected by constraint: job={application.job_id} "
                f"applicant={application.applicant_id}"
            )
            raise DuplicateApplicationException()
        except SQLAlchemyError as e:
            logger.error(f"Failed to create application for job {application.job_id}: {str(e)}")
            raise RepositoryException(f"Failed to create application: {str(e)}")

    async def exists_for_job(self, job_id: UUID, applicant_id: UUID) -> bool:
        try:
            result = await self.session.execute(
                select(ApplicationModel.id).where(and_(
                    ApplicationModel.job_id == job_id,
                    ApplicationModel.applicant_id == applicant_id,
                ))
            )
            return result.scalar_one_or_none() is not None

        except SQLAlchemyError as e:
            logger.error(f"Failed to check application existence: {str(e)}")
            raise RepositoryException(f"Failed to check application: {str(e)}")

    async def update_status(self, application_id: UUID, status: ApplicationStatus) -> Application:
        return await self._update_one(application_id, status=status.value)

    async def update_notes(self, application_id: UUID, notes: str) -> Application:
        return await self._update_one(application_id, company_notes=notes)

    async def bulk_update_status(self, application_ids: Sequence[UUID], status: ApplicationStatus) -> int:
        return await self._update_many(application_ids, status=status.value)

    async def bulk_update_notes(self, application_ids: Sequence[UUID], notes: str) -> int:
        return await self._update_many(application_ids, company_notes=notes)

    async def list_for_job(
        self,
        job_id: UUID,
        status: Optional[ApplicationStatus] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> List[ApplicationDetails]:
        """Applications of a job joined with their applicants"""
        try:
            conditions = [ApplicationModel.job_id == job_id]
            if status:
                conditions.append(ApplicationModel.status == status.value)
            if date_from:
                conditions.append(ApplicationModel.date >= to_naive_utc(date_from))
            if date_to:
                conditions.append(ApplicationModel.date <= to_naive_utc(date_to))

            result = await self.session.execute(
                select(ApplicationModel, UserModel)
                .outerjoin(UserModel, UserModel.id == ApplicationModel.applicant_id)
                .where(and_(*conditions))
                .order_by(ApplicationModel.date.desc())
                .execution_options(populate_existing=True)
            )
            return [
                ApplicationDetails(
                    application=self._to_entity(app_model),
                    applicant=self._users._to_entity(user_model) if user_model else None,
                )
                for app_model, user_model in result.all()
            ]

        except SQLAlchemyError as e:
            logger.error(f"Failed to list applications for job {job_id}: {str(e)}")
            raise RepositoryException(f"Failed to list applications: {str(e)}")

    async def list_for_applicant(self, applicant_id: UUID) -> List[ApplicationDetails]:
        """Applications of an applicant joined with their jobs (job may be deleted)"""
        try:
            result = await self.session.execute(
                select(ApplicationModel, JobModel)
                .outerjoin(JobModel, JobModel.id == ApplicationModel.job_id)
                .where(ApplicationModel.applicant_id == applicant_id)
                .order_by(ApplicationModel.date.desc())
                .execution_options(populate_existing=True)
            )
            return [
                ApplicationDetails(
                    application=self._to_entity(app_model),
                    job=SQLAlchemyJobRepository._to_entity(job_model) if job_model else None,
                )
                for app_model, job_model in result.all()
            ]

        except SQLAlchemyError as e:
            logger.error(f"Failed to list applications of applicant {applicant_id}: {str(e)}")
            raise RepositoryException(f"Failed to list applications: {str(e)}")

    async def list_for_company(self, company_id: UUID) -> List[Application]:
        try:
            result = await self.session.execute(
                select(ApplicationModel)
                .where(ApplicationModel.company_id == company_id)
                .order_by(ApplicationModel.date.desc())
                .execution_options(populate_existing=True)
            )
            return [self._to_entity(m) for m in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Failed to list applications of company {company_id}: {str(e)}")
            raise RepositoryException(f"Failed to list applications: {str(e)}")

    async def _update_one(self, application_id: UUID, **values) -> Application:
        try:
            model = await self.session.get(ApplicationModel, application_id)
            if not model:
                raise ResourceNotFoundException("Application", str(application_id))

            for key, value in values.items():
                setattr(model, key, value)
            await self.session.flush()
            await self.session.refresh(model)
            return self._to_entity(model)

        except SQLAlchemyError as e:
            logger.error(f"Failed to update application {application_id}: {str(e)}")
            raise RepositoryException(f"Failed to update application: {str(e)}")

    async def _update_many(self, application_ids: Sequence[UUID], **values) -> int:
        try:
            result = await self.session.execute(
                update(ApplicationModel)
                .where(ApplicationModel.id.in_(list(application_ids)))
                .values(updated_at=utcnow(), **values)
            )
            await self.session.flush()
            return result.rowcount

        except SQLAlchemyError as e:
            logger.error(f"Failed bulk update of {len(application_ids)} applications: {str(e)}")
            raise RepositoryException(f"Failed to update applications: {str(e)}")

    @staticmethod
    def _to_entity(model: ApplicationModel) -> Application:
        """Convert ORM model to domain entity"""
        return Application(
            id=model.id,
            job_id=model.job_id,
            applicant_id=model.applicant_id,
            company_id=model.company_id,
            status=ApplicationStatus(model.status),
            cover_letter=model.cover_letter,
            attached_documents=[AttachedDocument.from_dict(d) for d in (model.attached_documents or [])],
            company_notes=model.company_notes or "",
            date=model.date,
            updated_at=model.updated_at,
        )
