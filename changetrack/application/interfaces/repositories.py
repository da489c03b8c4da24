"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill.
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from changetrack.application.dtos.audit import (
        AuditRecordCreate,
        AuditRecordResult,
        AuditRecordRow,
    )
    from changetrack.application.dtos.document import (
        DocumentResult,
        TempDocumentResult,
    )


class IAuditRecordRepository(Protocol):
    """Append-only audit record store."""

    async def append(self, entry: AuditRecordCreate) -> AuditRecordResult:
        """Insert one audit record and return it."""

    async def list_for_owner(
        self,
        employee_id: str,
        *,
        skip: int = 0,
        limit: int = 10,
        referrable_type_id: str | None = None,
        search: str | None = None,
    ) -> list[AuditRecordRow]:
        """Records for the owner, newest first, joined to the actor's display name."""

    async def count_for_owner(
        self,
        employee_id: str,
        *,
        referrable_type_id: str | None = None,
        search: str | None = None,
    ) -> int:
        """Total records matching the same filters as list_for_owner."""

    async def resolve_label(self, table_name: str, column_name: str, row_id: str) -> str | None:
        """Read one display column of one row, or None when missing."""


class IDocumentRepository(Protocol):
    """Document records and staged uploads."""

    async def get_temp(self, temp_document_id: str) -> TempDocumentResult | None:
        """Staged upload by id."""

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        """Document record by id (including soft-deleted)."""

    async def create(
        self,
        referrable_type: int,
        referrable_type_id: str,
        created_by: str | None,
    ) -> DocumentResult:
        """Create an owner-linked record with no file yet."""

    async def count_matching_names(self, dest_folder: str, name: str) -> int:
        """Live records under dest_folder whose name contains `name` (case-insensitive)."""

    async def update_location(
        self,
        document_id: str,
        document_name: str,
        document_url: str,
        document_path: str,
    ) -> DocumentResult:
        """Point the record at its promoted file."""

    async def delete_temp(self, temp_document_id: str) -> None:
        """Remove the staged upload row."""

    async def mark_deleted(self, document_id: str, deleted_by: str | None = None) -> None:
        """Soft-delete the record (sets deleted_at)."""
