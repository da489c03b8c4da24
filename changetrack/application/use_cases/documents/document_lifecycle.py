"""Document lifecycle: promote staged uploads to owner storage, destroy, audit entries.

Promotion runs inside the business unit of work. A failed copy raises
DocumentMoveError so the enclosing transaction rolls back and no document
row points at a file that does not exist.
"""

from __future__ import annotations

import logging
import os
from pathlib import PurePosixPath
from urllib.parse import unquote

from changetrack.application.dtos.change_log import ChangeEntry, Scalar
from changetrack.application.dtos.document import DocumentResult, PromotionResult
from changetrack.application.interfaces.repositories import IDocumentRepository
from changetrack.application.interfaces.services import IStorageService
from changetrack.application.services.diff_engine import document_entry
from changetrack.core.config import get_settings
from changetrack.domain.enums import ActionType
from changetrack.domain.exceptions import (
    ChangeTrackException,
    DocumentAlreadyAbsent,
    DocumentMoveError,
    ResourceNotFoundException,
    ValidationException,
)
from changetrack.shared.context import resolve_actor

logger = logging.getLogger(__name__)


def build_document_url(url_base: str, dest_folder: str, file_name: str) -> str:
    """Public URL of a stored document; spaces are percent-encoded."""
    base = url_base if url_base.endswith("/") else url_base + "/"
    return f"{base}{dest_folder.strip('/')}/{file_name}".replace(" ", "%20")


def deduplicated_name(desired: str, existing_count: int) -> str:
    """Name with a "- (n)" suffix when n documents already carry it."""
    return desired if existing_count == 0 else f"{desired}- ({existing_count})"


def _normalize_folder(dest_folder: str) -> str:
    folder = dest_folder.strip().strip("/")
    if not folder or ".." in PurePosixPath(folder).parts:
        raise ValidationException(f"Invalid destination folder: {dest_folder!r}", field="dest_folder")
    return folder


def _strip_extension(name: str, extension: str) -> str:
    if extension and name.lower().endswith(extension.lower()):
        return name[: -len(extension)]
    return name


class DocumentLifecycleManager:
    """Sole owner of document files between temp and permanent storage.

    The repository carries the caller's session, so every database change
    made here commits or rolls back with the business write.
    """

    def __init__(
        self,
        repository: IDocumentRepository,
        storage: IStorageService,
        url_base: str | None = None,
    ) -> None:
        self.repository = repository
        self.storage = storage
        self.url_base = url_base or get_settings().document_url_base

    async def promote(
        self,
        temp_document_id: str,
        dest_folder: str,
        document_id: str,
        override_name: str | None = None,
    ) -> PromotionResult:
        """Move a staged upload into dest_folder and point the document record at it.

        Re-running for an already promoted temp document returns the existing
        location instead of copying again.

        Raises:
            ResourceNotFoundException: unknown temp document or document record.
            DocumentMoveError: the bytes could not be copied.
        """
        folder = _normalize_folder(dest_folder)
        document = await self.repository.get_by_id(document_id)
        if document is None:
            raise ResourceNotFoundException("Document", document_id)

        temp = await self.repository.get_temp(temp_document_id)
        if temp is None:
            if document.document_path and document.document_path.startswith(folder + "/"):
                logger.info(
                    "Temp document %s already promoted to %s", temp_document_id, document.document_path
                )
                return PromotionResult(
                    final_url=document.document_url or "",
                    final_path=document.document_path,
                    final_name=document.document_name or "",
                )
            raise ResourceNotFoundException("TempDocument", temp_document_id)

        extension = os.path.splitext(temp.document_path)[1]
        desired = _strip_extension((override_name or temp.document_name).strip(), extension)
        if not desired:
            raise ValidationException("Document name is empty", field="document_name")

        count = await self.repository.count_matching_names(folder, desired)
        final_name = deduplicated_name(desired, count)
        file_name = f"{final_name}{extension}"
        final_path = f"{folder}/{file_name}"

        await self._copy(temp.document_path, final_path)

        final_url = build_document_url(self.url_base, folder, file_name)
        await self.repository.update_location(document_id, final_name, final_url, final_path)
        await self.repository.delete_temp(temp.id)
        await self._discard_staged(temp.document_path)
        logger.info("Promoted temp document %s to %s", temp_document_id, final_path)
        return PromotionResult(final_url=final_url, final_path=final_path, final_name=final_name)

    async def attach(
        self,
        referrable_type: int,
        referrable_type_id: str,
        temp_document_id: str,
        dest_folder: str,
        created_by: str | None = None,
        override_name: str | None = None,
    ) -> tuple[DocumentResult, PromotionResult]:
        """Create an owner-linked document record and promote a staged upload into it."""
        document = await self.repository.create(
            referrable_type, referrable_type_id, resolve_actor(created_by)
        )
        result = await self.promote(temp_document_id, dest_folder, document.id, override_name)
        return document, result

    async def destroy(self, document: DocumentResult, folder: str) -> bool:
        """Remove the document's file from folder.

        Returns False when the file was already gone. Must run before the row
        is soft-deleted so a failed delete leaves the row for a retry.

        Raises:
            DocumentMoveError: the file exists but could not be deleted.
        """
        file_name = self._stored_file_name(document)
        if not file_name:
            return False
        storage_ref = f"{_normalize_folder(folder)}/{file_name}"
        try:
            deleted = await self.storage.delete(storage_ref)
        except ChangeTrackException as e:
            raise DocumentMoveError(storage_ref, e.message) from e
        except OSError as e:
            raise DocumentMoveError(storage_ref, str(e)) from e
        if not deleted:
            absent = DocumentAlreadyAbsent(storage_ref)
            logger.info("%s; treating delete as done", absent.message)
        return deleted

    async def remove(
        self, document_id: str, folder: str, deleted_by: str | None = None
    ) -> DocumentResult:
        """Destroy the file, then soft-delete the record."""
        document = await self.repository.get_by_id(document_id)
        if document is None:
            raise ResourceNotFoundException("Document", document_id)
        await self.destroy(document, folder)
        await self.repository.mark_deleted(document_id, resolve_actor(deleted_by))
        return document

    def document_activity(
        self,
        label: str,
        value: Scalar,
        action_type: ActionType,
        action_by: str | None = None,
        reference_name: str | None = None,
        referrable_type_id: str | None = None,
    ) -> ChangeEntry:
        """Change entry for a document added to or removed from a record."""
        return document_entry(
            label,
            value,
            action_type,
            action_by=resolve_actor(action_by),
            reference_name=reference_name,
            referrable_type_id=referrable_type_id,
        )

    async def _copy(self, source_ref: str, dest_ref: str) -> None:
        try:
            if not await self.storage.exists(source_ref) and await self.storage.exists(dest_ref):
                # A previous attempt copied the file and removed the staged one.
                logger.info("Staged file %s already moved to %s", source_ref, dest_ref)
                return
            await self.storage.copy(source_ref, dest_ref)
        except ChangeTrackException as e:
            raise DocumentMoveError(dest_ref, e.message) from e
        except OSError as e:
            raise DocumentMoveError(dest_ref, str(e)) from e

    async def _discard_staged(self, storage_ref: str) -> None:
        try:
            await self.storage.delete(storage_ref)
        except (ChangeTrackException, OSError):
            logger.warning("Could not remove staged file %s", storage_ref, exc_info=True)

    @staticmethod
    def _stored_file_name(document: DocumentResult) -> str | None:
        if document.document_url:
            return unquote(document.document_url.rstrip("/").rsplit("/", 1)[-1])
        if document.document_path:
            return PurePosixPath(document.document_path).name
        return None
