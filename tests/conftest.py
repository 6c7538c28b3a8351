"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Generator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from core.config import get_settings
from models.base import Base
from models.bookmark import Bookmark

TEST_API_TOKEN = "test-api-token"
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(scope="session", autouse=True)
def test_environment() -> Generator[None]:
    """
    Configure settings through the environment.

    This must happen before api.main or db.session is imported, since both read
    settings at import time. Test modules therefore import them inside fixtures.
    """
    os.environ["DATABASE_URL"] = TEST_DATABASE_URL
    os.environ["API_TOKEN"] = TEST_API_TOKEN
    # Tests exercise the real auth check regardless of local .env
    os.environ["DEV_MODE"] = "false"
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """
    Create a fresh in-memory database per test.

    StaticPool keeps a single connection so every session sees the same database.
    """
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for tests that call the storage and service layers directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def count_bookmarks(session_factory: async_sessionmaker[AsyncSession]):  # noqa: ANN201
    """Return an async callable counting stored rows through a fresh session."""
    async def _count() -> int:
        async with session_factory() as session:
            result = await session.execute(select(func.count()).select_from(Bookmark))
            return result.scalar_one()

    return _count


@pytest.fixture
def app_with_test_db(session_factory: async_sessionmaker[AsyncSession]):  # noqa: ANN201
    """The FastAPI app with its session dependency pointed at the test database."""
    from api.main import app  # noqa: PLC0415
    from db.session import get_async_session  # noqa: PLC0415

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_async_session] = override_get_async_session
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app_with_test_db) -> AsyncGenerator[AsyncClient]:  # noqa: ANN001
    """Authenticated test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app_with_test_db),
        base_url="http://test",
        headers={"Authorization": f"Bearer {TEST_API_TOKEN}"},
    ) as test_client:
        yield test_client


@pytest.fixture
async def anonymous_client(app_with_test_db) -> AsyncGenerator[AsyncClient]:  # noqa: ANN001
    """Test client that sends no Authorization header."""
    async with AsyncClient(
        transport=ASGITransport(app=app_with_test_db),
        base_url="http://test",
    ) as test_client:
        yield test_client
