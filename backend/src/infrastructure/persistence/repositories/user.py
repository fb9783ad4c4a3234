"""
User Repository Implementation
SQLAlchemy-based user repository
"""
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import User, Document, Skill, Experience, Education
from domain.enums import UserRole
from domain.value_objects import Email
from application.repositories.interfaces import IUserRepository
from infrastructure.persistence.models.user import UserModel
from core.exceptions import RepositoryException, DuplicateResourceException


class SQLAlchemyUserRepository(IUserRepository):
    """SQLAlchemy implementation of user repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        try:
            model = await self.session.get(UserModel, user_id)
            return self._to_entity(model) if model else None

        except SQLAlchemyError as e:
            logger.error(f"Failed to get user by ID {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to get user: {str(e)}")

    async def get_by_ids(self, user_ids: Sequence[UUID]) -> List[User]:
        if not user_ids:
            return []
        try:
            result = await self.session.execute(
                select(UserModel).where(UserModel.id.in_(list(user_ids)))
            )
            return [self._to_entity(m) for m in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Failed to get users {list(user_ids)}: {str(e)}")
            raise RepositoryException(f"Failed to get users: {str(e)}")

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        try:
            result = await self.session.execute(
                select(UserModel).where(UserModel.email == email.strip().lower())
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

        except SQLAlchemyError as e:
            logger.error(f"Failed to get user by email {email}: {str(e)}")
            raise RepositoryException(f"Failed to get user: {str(e)}")

    async def exists_by_email(self, email: str) -> bool:
        try:
            result = await self.session.execute(
                select(UserModel.id).where(UserModel.email == email.strip().lower())
            )
            return result.scalar_one_or_none() is not None

        except SQLAlchemyError as e:
            logger.error(f"Failed to check user existence {email}: {str(e)}")
            raise RepositoryException(f"Failed to check user existence: {str(e)}")

    async def create(self, user: User) -> User:
        """Create new user"""
        model = self._to_model(user)
        try:
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)
            return self._to_entity(model)

        except IntegrityError:
            await self.session.rollback()
            raise DuplicateResourceException("Email", "email", str(user.email))
        except SQLAlchemyError as e:
            logger.error(f"Failed to create user {user.email}: {str(e)}")
            raise RepositoryException(f"Failed to create user: {str(e)}")

    async def update(self, user: User) -> User:
        """Update profile fields and embedded lists"""
        try:
            model = await self.session.get(UserModel, user.id)
            if not model:
                raise RepositoryException(f"User not found: {user.id}")

            model.name = user.name
            model.headline = user.headline
            model.location = user.location
            model.about = user.about
            model.profile_picture = user.profile_picture
            model.cover_photo = user.cover_photo
            # JSON columns are replaced wholesale so the change is tracked
            model.documents = [d.to_dict() for d in user.documents]
            model.skills = [s.to_dict() for s in user.skills]
            model.experience = [e.to_dict() for e in user.experience]
            model.education = [e.to_dict() for e in user.education]

            await self.session.flush()
            await self.session.refresh(model)
            return self._to_entity(model)

        except SQLAlchemyError as e:
            logger.error(f"Failed to update user {user.id}: {str(e)}")
            raise RepositoryException(f"Failed to update user: {str(e)}")

    async def list_all(self) -> List[User]:
        try:
            result = await self.session.execute(
                select(UserModel).order_by(UserModel.created_at.desc())
            )
            return [self._to_entity(m) for m in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Failed to list users: {str(e)}")
            raise RepositoryException(f"Failed to list users: {str(e)}")

    async def commit(self) -> None:
        try:
            await self.session.commit()

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to commit user changes: {str(e)}")
            raise RepositoryException(f"Failed to commit user changes: {str(e)}")

    def _to_entity(self, model: UserModel) -> User:
        """Convert ORM model to domain entity"""
        return User(
            id=model.id,
            name=model.name,
            email=Email(model.email),
            password_hash=model.password_hash,
            role=UserRole(model.role),
            headline=model.headline,
            location=model.location,
            about=model.about,
            profile_picture=model.profile_picture or "",
            cover_photo=model.cover_photo or "",
            documents=[Document.from_dict(d) for d in (model.documents or [])],
            skills=[Skill.from_dict(s) for s in (model.skills or [])],
            experience=[Experience.from_dict(e) for e in (model.experience or [])],
            education=[Education.from_dict(e) for e in (model.education or [])],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, user: User) -> UserModel:
        """Convert domain entity to ORM model"""
        return UserModel(
            id=user.id,
            name=user.name,
            email=str(user.email),
            password_hash=user.password_hash,
            role=user.role.value,
            headline=user.headline,
            location=user.location,
            about=user.about,
            profile_picture=user.profile_picture,
            cover_photo=user.cover_photo,
            documents=[d.to_dict() for d in user.documents],
            skills=[s.to_dict() for s in user.skills],
            experience=[e.to_dict() for e in user.experience],
            education=[e.to_dict() for e in user.education],
        )
