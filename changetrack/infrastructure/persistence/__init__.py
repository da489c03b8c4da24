"""Persistence: database engine, ORM models, repositories and snapshot providers."""

from changetrack.infrastructure.persistence.database import (
    Base,
    get_db,
    get_db_transactional,
    get_session_factory,
)

__all__ = ["Base", "get_db", "get_db_transactional", "get_session_factory"]
