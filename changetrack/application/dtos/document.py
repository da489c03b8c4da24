"""DTOs for document lifecycle use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TempDocumentResult:
    """A staged upload waiting to be promoted."""

    id: str
    document_name: str
    document_url: str | None
    document_path: str


@dataclass(frozen=True)
class DocumentResult:
    """Owner-linked document record."""

    id: str
    document_name: str | None
    document_url: str | None
    document_path: str | None
    referrable_type: int | None
    referrable_type_id: str | None
    deleted_at: datetime | None = None


@dataclass(frozen=True)
class PromotionResult:
    """Where a promoted document ended up."""

    final_url: str
    final_path: str
    final_name: str
