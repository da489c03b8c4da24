"""Document repository: owner-linked documents and staged uploads."""

from __future__ import annotations

from sqlalchemy import and_, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from changetrack.application.dtos.document import DocumentResult, TempDocumentResult
from changetrack.domain.exceptions import ResourceNotFoundException
from changetrack.infrastructure.persistence.models.document import (
    EmployeeMappedDocument,
    TempUploadDocument,
)
from changetrack.infrastructure.persistence.repositories.base import BaseRepository, escape_like
from changetrack.shared.utils.datetime import utc_now


def _document_to_result(row: EmployeeMappedDocument) -> DocumentResult:
    return DocumentResult(
        id=row.id,
        document_name=row.document_name,
        document_url=row.document_url,
        document_path=row.document_path,
        referrable_type=row.referrable_type,
        referrable_type_id=row.referrable_type_id,
        deleted_at=row.deleted_at,
    )


def _temp_to_result(row: TempUploadDocument) -> TempDocumentResult:
    return TempDocumentResult(
        id=row.id,
        document_name=row.document_name,
        document_url=row.document_url,
        document_path=row.document_path,
    )


class DocumentRepository(BaseRepository[EmployeeMappedDocument]):
    """Implements IDocumentRepository over employee_mapped_documents and temp_upload_documents."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, EmployeeMappedDocument)

    async def get_temp(self, temp_document_id: str) -> TempDocumentResult | None:
        result = await self.db.execute(
            select(TempUploadDocument).where(TempUploadDocument.id == temp_document_id)
        )
        row = result.scalar_one_or_none()
        return _temp_to_result(row) if row else None

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        row = await self._get(document_id)
        return _document_to_result(row) if row else None

    async def create(
        self,
        referrable_type: int,
        referrable_type_id: str,
        created_by: str | None,
    ) -> DocumentResult:
        row = EmployeeMappedDocument(
            referrable_type=referrable_type,
            referrable_type_id=referrable_type_id,
            created_by=created_by,
        )
        await self._add(row)
        return _document_to_result(row)

    async def count_matching_names(self, dest_folder: str, name: str) -> int:
        """Live documents stored under dest_folder whose name contains `name`."""
        folder = dest_folder.rstrip("/") + "/"
        stmt = select(func.count(EmployeeMappedDocument.id)).where(
            and_(
                EmployeeMappedDocument.deleted_at.is_(None),
                EmployeeMappedDocument.document_path.like(f"{escape_like(folder)}%", escape="\\"),
                EmployeeMappedDocument.document_name.ilike(f"%{escape_like(name)}%", escape="\\"),
            )
        )
        result = await self.db.execute(stmt)
        return int(result.scalar_one())

    async def update_location(
        self,
        document_id: str,
        document_name: str,
        document_url: str,
        document_path: str,
    ) -> DocumentResult:
        row = await self._get_or_raise(document_id)
        row.document_name = document_name
        row.document_url = document_url
        row.document_path = document_path
        await self._save(row)
        return _document_to_result(row)

    async def delete_temp(self, temp_document_id: str) -> None:
        await self.db.execute(
            delete(TempUploadDocument).where(TempUploadDocument.id == temp_document_id)
        )
        await self.db.flush()

    async def mark_deleted(self, document_id: str, deleted_by: str | None = None) -> None:
        row = await self._get(document_id)
        if row is None:
            raise ResourceNotFoundException("Document", document_id)
        row.deleted_at = utc_now()
        row.deleted_by = deleted_by
        await self._save(row)
