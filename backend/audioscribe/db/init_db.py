from loguru import logger
from sqlalchemy.ext.asyncio import AsyncEngine

from audioscribe.db.base_class import Base
from audioscribe.models import models  # noqa: F401  registers tables on Base.metadata


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create the users and transcriptions tables if they don't exist.
    """
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Database tables ensured: {', '.join(Base.metadata.tables)}")
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise
