"""Tests for DocumentLifecycleManager: promotion, de-duplication, atomicity and destroy."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from changetrack.application.dtos.document import DocumentResult, TempDocumentResult
from changetrack.application.use_cases.documents import (
    DocumentLifecycleManager,
    build_document_url,
    deduplicated_name,
)
from changetrack.domain.enums import ActionType, ReferrableType
from changetrack.domain.exceptions import (
    DocumentMoveError,
    ResourceNotFoundException,
    ValidationException,
)
from changetrack.infrastructure.exceptions import StorageDeleteError, StorageWriteError
from changetrack.infrastructure.external.storage.local_storage import LocalStorageService
from changetrack.infrastructure.persistence.models import TempUploadDocument
from changetrack.infrastructure.persistence.repositories import DocumentRepository

URL_BASE = "http://files.test/docs"
FOLDER = "employees/emp_1/passport"


async def _stage(
    db: AsyncSession, storage: LocalStorageService, name: str, ref: str, content: bytes = b"%PDF"
) -> TempUploadDocument:
    """Write a staged upload to temp storage and record it."""
    path = storage.storage_root / ref
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    temp = TempUploadDocument(document_name=name, document_path=ref)
    db.add(temp)
    await db.flush()
    return temp


@pytest.fixture
def manager(db_session: AsyncSession, storage: LocalStorageService) -> DocumentLifecycleManager:
    return DocumentLifecycleManager(DocumentRepository(db_session), storage, url_base=URL_BASE)


class TestHelpers:
    def test_build_document_url_encodes_spaces(self) -> None:
        assert (
            build_document_url("http://x/docs", "a/b/", "My File.pdf")
            == "http://x/docs/a/b/My%20File.pdf"
        )

    def test_deduplicated_name(self) -> None:
        assert deduplicated_name("Passport", 0) == "Passport"
        assert deduplicated_name("Passport", 2) == "Passport- (2)"


class TestPromote:
    async def test_attach_promotes_staged_upload(
        self,
        db_session: AsyncSession,
        storage: LocalStorageService,
        manager: DocumentLifecycleManager,
    ) -> None:
        temp = await _stage(db_session, storage, "Passport Scan.pdf", "temp/abc.pdf")

        document, result = await manager.attach(
            int(ReferrableType.PASSPORT), "pp_1", temp.id, FOLDER, created_by="emp_2"
        )

        assert result.final_name == "Passport Scan"
        assert result.final_path == f"{FOLDER}/Passport Scan.pdf"
        assert result.final_url == f"{URL_BASE}/{FOLDER}/Passport%20Scan.pdf"
        assert (storage.storage_root / FOLDER / "Passport Scan.pdf").read_bytes() == b"%PDF"
        assert not (storage.storage_root / "temp/abc.pdf").exists()

        repo = DocumentRepository(db_session)
        assert await repo.get_temp(temp.id) is None
        stored = await repo.get_by_id(document.id)
        assert stored.document_path == result.final_path
        assert stored.document_name == "Passport Scan"
        assert stored.referrable_type_id == "pp_1"

    async def test_same_name_is_suffixed(
        self,
        db_session: AsyncSession,
        storage: LocalStorageService,
        manager: DocumentLifecycleManager,
    ) -> None:
        first = await _stage(db_session, storage, "Passport.pdf", "temp/one.pdf", b"one")
        second = await _stage(db_session, storage, "Passport.pdf", "temp/two.pdf", b"two")

        _, r1 = await manager.attach(int(ReferrableType.PASSPORT), "pp_1", first.id, FOLDER)
        _, r2 = await manager.attach(int(ReferrableType.PASSPORT), "pp_1", second.id, FOLDER)

        assert r1.final_name == "Passport"
        assert r2.final_name == "Passport- (1)"
        assert r1.final_path != r2.final_path
        assert (storage.storage_root / FOLDER / "Passport.pdf").read_bytes() == b"one"
        assert (storage.storage_root / FOLDER / "Passport- (1).pdf").read_bytes() == b"two"

    async def test_override_name(
        self,
        db_session: AsyncSession,
        storage: LocalStorageService,
        manager: DocumentLifecycleManager,
    ) -> None:
        temp = await _stage(db_session, storage, "IMG_001.png", "temp/img.png")
        _, result = await manager.attach(
            int(ReferrableType.VISA), "v1", temp.id, "visa", override_name="Visa Stamp"
        )
        assert result.final_path == "visa/Visa Stamp.png"

    async def test_retry_after_success_returns_existing_location(
        self,
        db_session: AsyncSession,
        storage: LocalStorageService,
        manager: DocumentLifecycleManager,
    ) -> None:
        temp = await _stage(db_session, storage, "Passport.pdf", "temp/abc.pdf")
        document, first = await manager.attach(int(ReferrableType.PASSPORT), "pp_1", temp.id, FOLDER)

        again = await manager.promote(temp.id, FOLDER, document.id)

        assert again == first
        assert await storage.list_names(FOLDER) == ["Passport.pdf"]

    async def test_unknown_temp_document(
        self, db_session: AsyncSession, manager: DocumentLifecycleManager
    ) -> None:
        document = await DocumentRepository(db_session).create(
            int(ReferrableType.PASSPORT), "pp_1", None
        )
        with pytest.raises(ResourceNotFoundException):
            await manager.promote("missing", FOLDER, document.id)

    async def test_unknown_document(self, manager: DocumentLifecycleManager) -> None:
        with pytest.raises(ResourceNotFoundException):
            await manager.promote("tmp", FOLDER, "missing")

    @pytest.mark.parametrize("folder", ["", "  ", "../outside", "a/../../b"])
    async def test_invalid_folder(self, manager: DocumentLifecycleManager, folder: str) -> None:
        with pytest.raises(ValidationException):
            await manager.promote("tmp", folder, "doc")


def _mock_repository() -> MagicMock:
    repo = MagicMock()
    repo.get_by_id = AsyncMock(
        return_value=DocumentResult(
            id="doc_1",
            document_name=None,
            document_url=None,
            document_path="temp/abc.pdf",
            referrable_type=int(ReferrableType.PASSPORT),
            referrable_type_id="pp_1",
        )
    )
    repo.get_temp = AsyncMock(
        return_value=TempDocumentResult(
            id="tmp_1", document_name="Passport.pdf", document_url=None, document_path="temp/abc.pdf"
        )
    )
    repo.count_matching_names = AsyncMock(return_value=0)
    repo.update_location = AsyncMock()
    repo.delete_temp = AsyncMock()
    repo.mark_deleted = AsyncMock()
    return repo


class TestPromoteFailures:
    async def test_failed_copy_leaves_record_untouched(self) -> None:
        repo = _mock_repository()
        storage = MagicMock()
        storage.exists = AsyncMock(return_value=True)
        storage.copy = AsyncMock(side_effect=StorageWriteError("x", "disk full"))
        manager = DocumentLifecycleManager(repo, storage, url_base=URL_BASE)

        with pytest.raises(DocumentMoveError) as exc_info:
            await manager.promote("tmp_1", FOLDER, "doc_1")

        assert exc_info.value.message == "Could not save document"
        repo.update_location.assert_not_awaited()
        repo.delete_temp.assert_not_awaited()

    async def test_os_error_is_wrapped(self) -> None:
        repo = _mock_repository()
        storage = MagicMock()
        storage.exists = AsyncMock(return_value=True)
        storage.copy = AsyncMock(side_effect=PermissionError("denied"))
        manager = DocumentLifecycleManager(repo, storage, url_base=URL_BASE)

        with pytest.raises(DocumentMoveError):
            await manager.promote("tmp_1", FOLDER, "doc_1")
        repo.update_location.assert_not_awaited()

    async def test_copy_skipped_when_already_moved(self) -> None:
        repo = _mock_repository()
        storage = MagicMock()
        storage.exists = AsyncMock(side_effect=[False, True])
        storage.copy = AsyncMock()
        storage.delete = AsyncMock(return_value=False)
        manager = DocumentLifecycleManager(repo, storage, url_base=URL_BASE)

        result = await manager.promote("tmp_1", FOLDER, "doc_1")

        storage.copy.assert_not_awaited()
        repo.update_location.assert_awaited_once_with(
            "doc_1", "Passport", result.final_url, f"{FOLDER}/Passport.pdf"
        )
        repo.delete_temp.assert_awaited_once_with("tmp_1")


class TestDestroy:
    async def test_remove_deletes_file_then_marks_row(
        self,
        db_session: AsyncSession,
        storage: LocalStorageService,
        manager: DocumentLifecycleManager,
    ) -> None:
        temp = await _stage(db_session, storage, "Passport Scan.pdf", "temp/abc.pdf")
        document, _ = await manager.attach(int(ReferrableType.PASSPORT), "pp_1", temp.id, FOLDER)

        await manager.remove(document.id, FOLDER, deleted_by="emp_2")

        assert not (storage.storage_root / FOLDER / "Passport Scan.pdf").exists()
        stored = await DocumentRepository(db_session).get_by_id(document.id)
        assert stored.deleted_at is not None

    async def test_absent_file_is_success(
        self, storage: LocalStorageService, manager: DocumentLifecycleManager
    ) -> None:
        document = DocumentResult(
            id="doc_1",
            document_name="Gone",
            document_url=f"{URL_BASE}/{FOLDER}/Gone.pdf",
            document_path=f"{FOLDER}/Gone.pdf",
            referrable_type=None,
            referrable_type_id=None,
        )
        assert await manager.destroy(document, FOLDER) is False

    async def test_file_name_from_path_when_no_url(
        self, tmp_path: Path, storage: LocalStorageService, manager: DocumentLifecycleManager
    ) -> None:
        target = storage.storage_root / FOLDER / "Scan.pdf"
        target.parent.mkdir(parents=True)
        target.write_bytes(b"x")
        document = DocumentResult(
            id="doc_1",
            document_name="Scan",
            document_url=None,
            document_path=f"{FOLDER}/Scan.pdf",
            referrable_type=None,
            referrable_type_id=None,
        )
        assert await manager.destroy(document, FOLDER) is True
        assert not target.exists()

    async def test_delete_failure_keeps_row(self) -> None:
        repo = _mock_repository()
        storage = MagicMock()
        storage.delete = AsyncMock(side_effect=StorageDeleteError("x", "busy"))
        manager = DocumentLifecycleManager(repo, storage, url_base=URL_BASE)

        with pytest.raises(DocumentMoveError):
            await manager.remove("doc_1", FOLDER)
        repo.mark_deleted.assert_not_awaited()


def test_document_activity_entry() -> None:
    manager = DocumentLifecycleManager(MagicMock(), MagicMock(), url_base=URL_BASE)
    entry = manager.document_activity(
        "Passport Document", "Passport Scan", ActionType.CREATED, action_by="emp_2"
    )
    assert entry.is_document
    assert entry.action_by == "emp_2"
    assert entry.value == "Passport Scan"
