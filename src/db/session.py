"""Async SQLAlchemy engine and request-scoped session."""
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import get_settings


def build_engine(database_url: str) -> AsyncEngine:
    """Create the async engine the request sessions are bound to."""
    return create_async_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
    )


engine = build_engine(get_settings().database_url)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """
    Yield an async database session.

    One session per request: storage functions only flush(), the commit happens
    here once the handler returns. Any exception rolls the whole request back,
    so a failed write never leaves a partial row behind.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
