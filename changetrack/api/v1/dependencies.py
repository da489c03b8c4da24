"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions and application services.
Routes depend only on these dependencies, not on infrastructure directly.
"""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from changetrack.application.services.audit_reader import AuditReader
from changetrack.infrastructure.persistence.database import get_db
from changetrack.infrastructure.persistence.repositories import ActivityTrackRepository
from changetrack.infrastructure.services.date_format import OrganizationDateFormatProvider
from changetrack.shared.context import set_current_actor


async def get_actor_id(
    x_actor_id: Annotated[str | None, Header()] = None,
) -> str | None:
    """Acting employee id from the X-Actor-Id header; also stored in request context."""
    set_current_actor(x_actor_id)
    return x_actor_id


async def get_audit_reader(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuditReader:
    """Audit reader over the request's read session."""
    return AuditReader(ActivityTrackRepository(db), OrganizationDateFormatProvider(db))
