"""
Shared fixtures

Settings are read once at import time, so the environment is prepared
before any application module is imported.
"""
import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CACHE_ENABLED"] = "false"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_JSON_FORMAT"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"

from datetime import timedelta
from typing import Optional
from uuid import UUID

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from core.clock import utcnow
from core.database import Base, get_db, get_session_factory
from domain.entities import User
from domain.enums import UserRole
from application.services.auth.impl import AuthService
from application.services.jobs import JobDraft
from infrastructure.cache.redis_cache_service import RedisCacheService
from infrastructure.external.file_storage_service import LocalFileStorageService
from infrastructure.persistence.repositories.application import SQLAlchemyApplicationRepository
from infrastructure.persistence.repositories.job import SQLAlchemyJobRepository
from infrastructure.persistence.repositories.message import SQLAlchemyMessageRepository
from infrastructure.persistence.repositories.user import SQLAlchemyUserRepository
from infrastructure.security.jwt_service import JwtService
from infrastructure.security.password_hasher import BcryptPasswordHasher
from infrastructure.services.application_service import ApplicationService
from infrastructure.services.job_service import JobService
import infrastructure.persistence.models  # noqa: F401


class FrozenClock:
    """Settable clock passed to services in place of utcnow"""

    def __init__(self):
        self.now = utcnow()

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def user_repo(session):
    return SQLAlchemyUserRepository(session)


@pytest.fixture
def job_repo(session):
    return SQLAlchemyJobRepository(session)


@pytest.fixture
def application_repo(session):
    return SQLAlchemyApplicationRepository(session)


@pytest.fixture
def message_repo(session):
    return SQLAlchemyMessageRepository(session)


@pytest.fixture
def auth_service(user_repo):
    return AuthService(user_repo, BcryptPasswordHasher(), JwtService())


@pytest.fixture
def job_service(job_repo, user_repo, clock):
    return JobService(job_repo, user_repo, clock=clock)


@pytest.fixture
def application_service(application_repo, job_repo, user_repo, clock):
    return ApplicationService(application_repo, job_repo, user_repo, clock=clock)


@pytest.fixture
def make_user(auth_service):
    counter = {"n": 0}

    async def _make(role: UserRole = UserRole.SEEKER, name: Optional[str] = None) -> User:
        counter["n"] += 1
        n = counter["n"]
        user, _ = await auth_service.register(
            name or f"{role.value.title()} {n}",
            f"{role.value}{n}@example.com",
            "secret123",
            role,
        )
        return user

    return _make


@pytest.fixture
def make_job(job_service, clock):
    async def _make(owner_id: UUID, **fields):
        fields.setdefault("title", "Backend Developer")
        fields.setdefault("description", "Build APIs")
        fields.setdefault("deadline", clock() + timedelta(days=10))
        return await job_service.create(owner_id, JobDraft(**fields))

    return _make


# HTTP

@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest_asyncio.fixture
async def client(session_factory, upload_dir):
    from main import app
    from presentation.api.v1.container import get_cache, get_file_storage

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    storage = LocalFileStorageService(str(upload_dir))
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_file_storage] = lambda: storage
    app.dependency_overrides[get_cache] = lambda: RedisCacheService()

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Register through the API and return (user_id, auth headers)"""
    counter = {"n": 0}

    async def _register(role: str = "seeker", name: Optional[str] = None):
        counter["n"] += 1
        response = await client.post("/api/v1/auth/register", json={
            "name": name or f"{role.title()} {counter['n']}",
            "email": f"api-{role}{counter['n']}@example.com",
            "password": "secret123",
            "role": role,
        })
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user_id"], auth_header(body["token"])

    return _register
