"""
Dependency Injection Container
Manages service and repository instances
"""
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import Depends

from core.database import get_db
from application.repositories.interfaces import (
    IApplicationRepository,
    IJobRepository,
    IMessageRepository,
    IUserRepository,
)
from application.services.auth.interfaces import IAuthService, IJwtService, IPasswordHasher
from application.services.analytics import IAnalyticsService
from application.services.applications import IApplicationService
from application.services.jobs import IJobService
from application.services.messaging import IMessagingService
from application.services.profile import IProfileService
from application.services.storage import IFileStorageService
from application.services.auth.impl import AuthService
from infrastructure.cache.redis_cache_service import RedisCacheService, cache_service
from infrastructure.external.file_storage_service import LocalFileStorageService
from infrastructure.persistence.repositories.application import SQLAlchemyApplicationRepository
from infrastructure.persistence.repositories.job import SQLAlchemyJobRepository
from infrastructure.persistence.repositories.message import SQLAlchemyMessageRepository
from infrastructure.persistence.repositories.user import SQLAlchemyUserRepository
from infrastructure.security.password_hasher import BcryptPasswordHasher
from infrastructure.security.jwt_service import JwtService
from infrastructure.services.analytics_service import AnalyticsService
from infrastructure.services.application_service import ApplicationService
from infrastructure.services.job_service import JobService
from infrastructure.services.messaging_service import MessagingService
from infrastructure.services.profile_service import ProfileService


# Singleton instances
_password_hasher: IPasswordHasher | None = None
_jwt_service: IJwtService | None = None
_file_storage: IFileStorageService | None = None


def get_password_hasher() -> IPasswordHasher:
    """Get password hasher instance (singleton)"""
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = BcryptPasswordHasher()
    return _password_hasher


def get_jwt_service() -> IJwtService:
    """Get JWT service instance (singleton)"""
    global _jwt_service
    if _jwt_service is None:
        _jwt_service = JwtService()
    return _jwt_service


def get_file_storage() -> IFileStorageService:
    """Get file storage instance (singleton)"""
    global _file_storage
    if _file_storage is None:
        _file_storage = LocalFileStorageService()
    return _file_storage


def get_cache() -> RedisCacheService:
    return cache_service


def get_user_repository(
    session: AsyncSession = Depends(get_db)
) -> IUserRepository:
    """Get user repository instance (per-request)"""
    return SQLAlchemyUserRepository(session)


def get_job_repository(
    session: AsyncSession = Depends(get_db)
) -> IJobRepository:
    return SQLAlchemyJobRepository(session)


def get_application_repository(
    session: AsyncSession = Depends(get_db)
) -> IApplicationRepository:
    return SQLAlchemyApplicationRepository(session)


def get_message_repository(
    session: AsyncSession = Depends(get_db)
) -> IMessageRepository:
    return SQLAlchemyMessageRepository(session)


def get_auth_service(
    user_repo: IUserRepository = Depends(get_user_repository),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
    jwt_service: IJwtService = Depends(get_jwt_service)
) -> IAuthService:
    """Get auth service instance (per-request)"""
    return AuthService(user_repo, password_hasher, jwt_service)


def get_job_service(
    job_repo: IJobRepository = Depends(get_job_repository),
    user_repo: IUserRepository = Depends(get_user_repository)
) -> IJobService:
    return JobService(job_repo, user_repo)


def get_application_service(
    application_repo: IApplicationRepository = Depends(get_application_repository),
    job_repo: IJobRepository = Depends(get_job_repository),
    user_repo: IUserRepository = Depends(get_user_repository)
) -> IApplicationService:
    return ApplicationService(application_repo, job_repo, user_repo)


def get_analytics_service(
    job_repo: IJobRepository = Depends(get_job_repository),
    application_repo: IApplicationRepository = Depends(get_application_repository),
    user_repo: IUserRepository = Depends(get_user_repository)
) -> IAnalyticsService:
    return AnalyticsService(job_repo, application_repo, user_repo)


def get_profile_service(
    user_repo: IUserRepository = Depends(get_user_repository),
    file_storage: IFileStorageService = Depends(get_file_storage),
    cache: RedisCacheService = Depends(get_cache)
) -> IProfileService:
    return ProfileService(user_repo, file_storage, cache)


def get_messaging_service(
    message_repo: IMessageRepository = Depends(get_message_repository),
    user_repo: IUserRepository = Depends(get_user_repository)
) -> IMessagingService:
    return MessagingService(message_repo, user_repo)
