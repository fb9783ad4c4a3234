"""
Seed Data Script
Populates database with a demo company, a demo seeker and a few jobs

Run from the repository root:

    python scripts/seed_data.py
"""
import asyncio
import os
import sys
from datetime import timedelta

sys.path.append(os.path.join(os.path.dirname(__file__), "..", "backend", "src"))

from loguru import logger

from core.clock import utcnow
from core.database import get_db_session, init_db, close_db
from core.exceptions import DuplicateResourceException
from domain.enums import UserRole
from application.services.auth.impl import AuthService
from application.services.jobs import JobDraft
from infrastructure.persistence.repositories.job import SQLAlchemyJobRepository
from infrastructure.persistence.repositories.user import SQLAlchemyUserRepository
from infrastructure.security.jwt_service import JwtService
from infrastructure.security.password_hasher import BcryptPasswordHasher
from infrastructure.services.job_service import JobService
import infrastructure.persistence.models  # noqa: F401


DEMO_PASSWORD = "password123"

DEMO_JOBS = [
    JobDraft(
        title="Backend Developer",
        description="Build and run the APIs behind our mobile banking app.",
        location="Mbabane",
        job_type="full-time",
        work_mode="hybrid",
        experience_level="mid-level",
        salary_min=18000,
        salary_max=26000,
        skills=["Python", "PostgreSQL", "Docker"],
        benefits=["health-insurance", "flexible-hours", "gym membership"],
        status="published",
    ),
    JobDraft(
        title="Customer Support Intern",
        description="Answer customer queries and help improve our help centre.",
        location="Manzini",
        job_type="internship",
        work_mode="on-site",
        skills=["Customer Service"],
        status="active",
    ),
]


async def seed_database():
    """Seed database with demo data"""
    await init_db()

    async with get_db_session() as session:
        users = SQLAlchemyUserRepository(session)
        auth = AuthService(users, BcryptPasswordHasher(), JwtService())

        try:
            company, _ = await auth.register("Acme Eswatini", "hr@example.com", DEMO_PASSWORD, UserRole.COMPANY)
            await auth.register("Demo Seeker", "seeker@example.com", DEMO_PASSWORD, UserRole.SEEKER)
        except DuplicateResourceException:
            logger.info("Demo users already exist, skipping")
            return

        jobs = SQLAlchemyJobRepository(session)
        job_service = JobService(jobs, users)
        deadline = utcnow() + timedelta(days=30)
        for draft in DEMO_JOBS:
            draft.deadline = deadline
            job = await job_service.create(company.id, draft)
            logger.info(f"Created job {job.title} ({job.id})")

    logger.info(f"Seeded demo accounts hr@example.com / seeker@example.com (password: {DEMO_PASSWORD})")


async def main():
    try:
        await seed_database()
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
