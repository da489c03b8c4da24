"""DTOs for audit records (write-model, read-model, listing page)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from changetrack.domain.enums import ActionType


@dataclass(frozen=True)
class AuditRecordCreate:
    """Input for appending one audit record. Append-only; no update."""

    employee_id: str
    action_type: ActionType
    activity: str
    change_log: str
    created_by: str | None
    referrable_type: int | None = None
    referrable_type_id: str | None = None


@dataclass(frozen=True)
class AuditRecordResult:
    """Persisted audit record."""

    id: str
    employee_id: str
    referrable_type: int | None
    referrable_type_id: str | None
    action_type: ActionType
    activity: str
    change_log: list[dict[str, Any]]
    created_by: str | None
    created_at: datetime


@dataclass(frozen=True)
class AuditRecordRow:
    """Audit record joined with the actor's display name (listing read-model)."""

    record: AuditRecordResult
    action_by_name: str | None


@dataclass(frozen=True)
class ActivityItem:
    """One rendered audit record for display."""

    id: str
    activity: str
    action_type: ActionType
    action: str
    referrable_type_id: str | None
    referrable_label: str | None
    action_by: str | None
    created_at: str
    change_log: list[str]
    entries: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class Pagination:
    """Offset pagination block returned alongside a page."""

    total: int
    current_page: int
    per_page: int
    total_pages: int

    @classmethod
    def build(cls, total: int, page: int, per_page: int) -> "Pagination":
        total_pages = (total + per_page - 1) // per_page if per_page else 0
        return cls(total=total, current_page=page, per_page=per_page, total_pages=total_pages)


@dataclass(frozen=True)
class AuditPage:
    """A page of rendered activity plus its pagination block."""

    data: list[ActivityItem]
    pagination: Pagination
