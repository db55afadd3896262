import asyncio

from audioscribe.core.config import settings
from audioscribe.db.init_db import create_tables
from audioscribe.db.session import create_engine


async def main():
    """Create database tables."""
    print("Creating database tables...")

    engine = create_engine(settings.DATABASE_URL, echo=True)
    try:
        await create_tables(engine)
    finally:
        await engine.dispose()

    print("Database tables created successfully!")


if __name__ == "__main__":
    asyncio.run(main())
