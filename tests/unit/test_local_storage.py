"""Tests for LocalStorageService and StorageFactory."""

from pathlib import Path

import pytest

from changetrack.core.config import Settings
from changetrack.infrastructure.exceptions import StorageNotFoundError, StoragePermissionError
from changetrack.infrastructure.external.storage.factory import StorageFactory
from changetrack.infrastructure.external.storage.local_storage import LocalStorageService


class TestLocalStorageService:
    async def test_copy_creates_folders(self, storage: LocalStorageService) -> None:
        source = storage.storage_root / "temp" / "a.pdf"
        source.parent.mkdir(parents=True)
        source.write_bytes(b"abc")

        meta = await storage.copy("temp/a.pdf", "x/y/b.pdf")

        assert (storage.storage_root / "x/y/b.pdf").read_bytes() == b"abc"
        assert source.exists()
        assert meta["size"] == 3
        assert await storage.list_names("x/y") == ["b.pdf"]

    async def test_copy_missing_source(self, storage: LocalStorageService) -> None:
        with pytest.raises(StorageNotFoundError):
            await storage.copy("temp/none.pdf", "x/b.pdf")
        assert not (storage.storage_root / "x" / "b.pdf").exists()

    async def test_traversal_rejected(self, storage: LocalStorageService) -> None:
        with pytest.raises(StoragePermissionError):
            await storage.delete("../escape.pdf")
        assert await storage.exists("../escape.pdf") is False

    async def test_delete(self, storage: LocalStorageService) -> None:
        target = storage.storage_root / "a.pdf"
        target.write_bytes(b"1")
        assert await storage.delete("a.pdf") is True
        assert await storage.delete("a.pdf") is False

    async def test_list_names_ignores_temp_files(self, storage: LocalStorageService) -> None:
        folder = storage.storage_root / "f"
        folder.mkdir()
        (folder / "keep.pdf").write_bytes(b"1")
        (folder / ".tmp_partial.pdf").write_bytes(b"1")
        (folder / "sub").mkdir()

        assert await storage.list_names("f") == ["keep.pdf"]
        assert await storage.list_names("missing") == []


def test_factory_uses_storage_root(tmp_path: Path) -> None:
    settings = Settings(storage_root=str(tmp_path / "docs"))
    service = StorageFactory.create_storage_service(settings)
    assert isinstance(service, LocalStorageService)
    assert service.storage_root == (tmp_path / "docs").resolve()
