"""Tests for lazy engine creation and the session dependencies."""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from sqlalchemy import select

from changetrack.core.config import get_settings
from changetrack.domain.exceptions import SqlNotConfiguredException
from changetrack.infrastructure.persistence import database
from changetrack.infrastructure.persistence.models import Organization


@pytest.fixture
async def configured_db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AsyncIterator[None]:
    """Point DATABASE_URL at a file database with the schema created."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'ct.db'}")
    get_settings.cache_clear()
    await database.dispose_engine()
    database.get_session_factory()
    async with database.engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.create_all)
    yield
    await database.dispose_engine()
    get_settings.cache_clear()


async def test_session_factory_requires_database_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "")
    get_settings.cache_clear()
    await database.dispose_engine()
    try:
        with pytest.raises(SqlNotConfiguredException):
            database.get_session_factory()
    finally:
        get_settings.cache_clear()


async def test_transactional_dependency_commits(configured_db: None) -> None:
    sessions = database.get_db_transactional()
    session = await anext(sessions)
    session.add(Organization(organization_name="Acme", date_format="DD/MM/YYYY"))
    with pytest.raises(StopAsyncIteration):
        await anext(sessions)

    reads = database.get_db()
    session = await anext(reads)
    names = (await session.execute(select(Organization.organization_name))).scalars().all()
    await reads.aclose()
    assert names == ["Acme"]


async def test_transactional_dependency_rolls_back_on_error(configured_db: None) -> None:
    sessions = database.get_db_transactional()
    session = await anext(sessions)
    session.add(Organization(organization_name="Acme"))
    with pytest.raises(RuntimeError):
        await sessions.athrow(RuntimeError("request failed"))

    reads = database.get_db()
    session = await anext(reads)
    names = (await session.execute(select(Organization.organization_name))).scalars().all()
    await reads.aclose()
    assert names == []
