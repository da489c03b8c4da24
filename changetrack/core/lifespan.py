"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: logging, the event dispatcher
and its audit writer, and the DB engine dispose. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from changetrack.application.services.audit_writer import AuditWriter
from changetrack.core.config import get_settings
from changetrack.infrastructure.messaging.dispatcher import EventDispatcher, set_dispatcher
from changetrack.infrastructure.persistence.repositories import ActivityTrackRepository
from changetrack.infrastructure.persistence.snapshot_providers import build_snapshot_registry
from changetrack.infrastructure.services.date_format import OrganizationDateFormatProvider
from changetrack.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


def build_audit_writer(session_factory: async_sessionmaker[AsyncSession]) -> AuditWriter:
    """Audit writer backed by SQL repositories and snapshot providers."""
    return AuditWriter(
        session_factory,
        repository_factory=ActivityTrackRepository,
        registry_factory=lambda session: build_snapshot_registry(
            session, OrganizationDateFormatProvider(session)
        ),
    )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, dispatcher (with the audit writer subscribed when a
    database is configured). Shutdown: dispatcher drain, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    dispatcher = EventDispatcher(
        maxsize=settings.dispatcher_queue_size,
        drain_timeout=settings.dispatcher_drain_timeout_seconds,
    )
    if settings.database_url:
        from changetrack.infrastructure.persistence.database import get_session_factory

        build_audit_writer(get_session_factory()).register(dispatcher)
    else:
        logger.warning("DATABASE_URL not set; activity signals will not be recorded")
    await dispatcher.start()
    set_dispatcher(dispatcher)
    app.state.dispatcher = dispatcher

    yield

    # ---- Shutdown ----
    await dispatcher.stop(drain=True)
    set_dispatcher(None)
    app.state.dispatcher = None
    if dispatcher.dropped:
        logger.warning("%d activity signal(s) dropped during this run", dispatcher.dropped)

    from changetrack.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
