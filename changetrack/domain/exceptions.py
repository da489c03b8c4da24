"""Domain exceptions for change tracking and document lifecycle.

Audit-path errors (SnapshotNotFound, DiffSerializationError,
AuditPersistenceError) are contained by the audit writer. Document-path
errors (DocumentMoveError) propagate and fail the triggering request.
Presentation maps error_code to HTTP status in core.exception_handlers.
"""

from typing import Any


class ChangeTrackException(Exception):
    """Base exception for all changetrack errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serializable body for API error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ChangeTrackException):
    """Raised when input validation fails (e.g. invalid page or folder)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(ChangeTrackException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SnapshotNotFound(ChangeTrackException):
    """The entity to snapshot no longer exists.

    Callers on the audit path treat this as "no prior state".
    """

    def __init__(self, entity_kind: str, condition: dict[str, Any]) -> None:
        super().__init__(
            f"No {entity_kind} row matches {condition}",
            "SNAPSHOT_NOT_FOUND",
            {"entity_kind": entity_kind, "condition": {k: str(v) for k, v in condition.items()}},
        )


class DiffSerializationError(ChangeTrackException):
    """A change log could not be serialized; the audit write is skipped."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Change log could not be serialized: {reason}",
            "DIFF_SERIALIZATION_ERROR",
            {"reason": reason},
        )


class AuditPersistenceError(ChangeTrackException):
    """The audit insert failed (connectivity, constraint). Never surfaced to users."""

    def __init__(self, owner_id: str | None, reason: str) -> None:
        super().__init__(
            f"Failed to persist audit record for owner {owner_id}",
            "AUDIT_PERSISTENCE_ERROR",
            {"owner_id": owner_id, "reason": reason},
        )


class DocumentMoveError(ChangeTrackException):
    """A physical file operation failed while promoting or destroying a document.

    Propagates so the enclosing unit of work rolls back and no document row
    points at a file that does not exist.
    """

    def __init__(self, document_ref: str, reason: str) -> None:
        super().__init__(
            "Could not save document",
            "DOCUMENT_MOVE_ERROR",
            {"document_ref": document_ref, "reason": reason},
        )


class DocumentAlreadyAbsent(ChangeTrackException):
    """The file to delete is already gone. Treated as a successful delete."""

    def __init__(self, document_ref: str) -> None:
        super().__init__(
            f"Document already absent: {document_ref}",
            "DOCUMENT_ALREADY_ABSENT",
            {"document_ref": document_ref},
        )


class SqlNotConfiguredException(ChangeTrackException):
    """Raised when a session is requested but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
