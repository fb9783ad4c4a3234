"""
Add unique constraint on applications (job_id, applicant_id)

For databases created before the constraint existed. Duplicate applications
are collapsed to the oldest one per (job, applicant) first.
"""
import asyncio
import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), 'backend', 'src'))

from loguru import logger
from sqlalchemy import text
from core.database import engine


CONSTRAINT_NAME = "uq_applications_job_id_applicant_id"


async def add_unique_constraint():
    """Add unique constraint on applications table for (job_id, applicant_id)"""
    async with engine.begin() as conn:
        result = await conn.execute(text("""
            SELECT constraint_name
            FROM information_schema.table_constraints
            WHERE table_name = 'applications'
            AND constraint_type = 'UNIQUE'
            AND constraint_name = :name;
        """), {"name": CONSTRAINT_NAME})
        if result.fetchone():
            logger.info("Unique constraint already exists.")
            return

        logger.info("Removing duplicate applications...")
        result = await conn.execute(text("""
            DELETE FROM applications
            WHERE id NOT IN (
                SELECT DISTINCT ON (job_id, applicant_id) id
                FROM applications
                ORDER BY job_id, applicant_id, date ASC
            );
        """))
        logger.info(f"Deleted {result.rowcount} duplicate applications")

        await conn.execute(text(f"""
            ALTER TABLE applications
            ADD CONSTRAINT {CONSTRAINT_NAME}
            UNIQUE (job_id, applicant_id);
        """))
        logger.info("Unique constraint added successfully")


if __name__ == "__main__":
    asyncio.run(add_unique_constraint())
