"""Domain layer: enums, referrable mapping, and exceptions.

No dependencies on infrastructure or presentation.
"""

from changetrack.domain.enums import (
    ActionType,
    ChangeSlug,
    EntityKind,
    ReferrableType,
    Signal,
)
from changetrack.domain.exceptions import (
    AuditPersistenceError,
    ChangeTrackException,
    DiffSerializationError,
    DocumentAlreadyAbsent,
    DocumentMoveError,
    ResourceNotFoundException,
    SnapshotNotFound,
    SqlNotConfiguredException,
    ValidationException,
)

__all__ = [
    # Enums
    "ActionType",
    "ChangeSlug",
    "EntityKind",
    "ReferrableType",
    "Signal",
    # Exceptions
    "AuditPersistenceError",
    "ChangeTrackException",
    "DiffSerializationError",
    "DocumentAlreadyAbsent",
    "DocumentMoveError",
    "ResourceNotFoundException",
    "SnapshotNotFound",
    "SqlNotConfiguredException",
    "ValidationException",
]
