"""Pytest configuration and fixtures for changetrack.

DB-dependent fixtures run against an in-memory aiosqlite database built
from the ORM metadata (one fresh database per test). HTTP tests use
changetrack.main.create_app with get_db overridden to that database.
"""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import changetrack.infrastructure.persistence.models  # noqa: F401  (registers tables)
from changetrack.core.config import get_settings
from changetrack.infrastructure.external.storage.local_storage import LocalStorageService
from changetrack.infrastructure.persistence.database import Base, get_db
from changetrack.infrastructure.persistence.models import Employee
from changetrack.infrastructure.services.date_format import StaticDateFormatProvider

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory database with every table created."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Session for repository/integration tests. Rolls back after test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def date_formats() -> StaticDateFormatProvider:
    return StaticDateFormatProvider("MM/DD/YYYY")


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorageService:
    """Local document storage rooted in a per-test directory."""
    return LocalStorageService(str(tmp_path / "storage"))


@pytest.fixture
async def employee(db_session: AsyncSession) -> Employee:
    """One persisted employee (the owner of audited records)."""
    row = Employee(
        id="emp_1",
        display_name="Jane Doe",
        first_name="Jane",
        last_name="Doe",
        email_id="jane@example.com",
    )
    db_session.add(row)
    await db_session.flush()
    return row


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI) using the test database."""
    from changetrack.main import create_app

    get_settings.cache_clear()
    app = create_app()

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
