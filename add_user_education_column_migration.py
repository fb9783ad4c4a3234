"""
Add the education column to users

For databases created before profiles carried education entries.
"""
import asyncio
import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), 'backend', 'src'))

from loguru import logger
from sqlalchemy import text
from core.database import engine


async def add_education_column():
    """Add users.education as an empty JSON list"""
    async with engine.begin() as conn:
        await conn.execute(text("""
            ALTER TABLE users
            ADD COLUMN IF NOT EXISTS education JSON NOT NULL DEFAULT '[]';
        """))
        logger.info("users.education column ready")


if __name__ == "__main__":
    asyncio.run(add_education_column())
