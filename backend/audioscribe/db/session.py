from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create the async engine for the store.
    """
    return create_async_engine(database_url, echo=echo, future=True, pool_pre_ping=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session dependency.

    The session factory is created once in the application lifespan and kept
    on ``app.state``.
    """
    async with request.app.state.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
