"""Application DTOs: plain dataclasses shared by services and repositories."""

from changetrack.application.dtos.audit import (
    ActivityItem,
    AuditPage,
    AuditRecordCreate,
    AuditRecordResult,
    AuditRecordRow,
    Pagination,
)
from changetrack.application.dtos.change_log import (
    ChangeEntry,
    CollectionSnapshot,
    Snapshot,
)
from changetrack.application.dtos.document import (
    DocumentResult,
    PromotionResult,
    TempDocumentResult,
)
from changetrack.application.dtos.signal import ActivitySignal

__all__ = [
    "ActivityItem",
    "ActivitySignal",
    "AuditPage",
    "AuditRecordCreate",
    "AuditRecordResult",
    "AuditRecordRow",
    "ChangeEntry",
    "CollectionSnapshot",
    "DocumentResult",
    "Pagination",
    "PromotionResult",
    "Snapshot",
    "TempDocumentResult",
]
