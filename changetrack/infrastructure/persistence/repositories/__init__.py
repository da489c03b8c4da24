"""Repositories: data access behind application interfaces."""

from changetrack.infrastructure.persistence.repositories.activity_track_repo import (
    ActivityTrackRepository,
)
from changetrack.infrastructure.persistence.repositories.base import BaseRepository
from changetrack.infrastructure.persistence.repositories.document_repo import (
    DocumentRepository,
)

__all__ = [
    "ActivityTrackRepository",
    "BaseRepository",
    "DocumentRepository",
]
