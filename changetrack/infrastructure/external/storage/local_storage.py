"""Local filesystem storage with path validation and atomic writes."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from changetrack.infrastructure.exceptions import (
    StorageDeleteError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageWriteError,
)
from changetrack.shared.utils.datetime import utc_now


class LocalStorageService:
    """Local filesystem storage with atomic writes and path traversal protection.

    Paths are validated against storage_root. Copies stream into a temp file
    beside the destination and are renamed into place, so a failed copy never
    leaves a partial file at the destination.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    def __init__(self, storage_root: str) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref, "path_validation") from e
        return full_path

    async def copy(self, source_ref: str, dest_ref: str) -> dict[str, Any]:
        """Copy source to dest via temp file + rename. Overwrites an existing dest."""
        source = self._get_full_path(source_ref)
        target = self._get_full_path(dest_ref)
        if not source.is_file():
            raise StorageNotFoundError(source_ref)
        try:
            target.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target.parent, prefix=".tmp_", suffix=target.suffix
            )
            os.close(temp_fd)
            try:
                size = 0
                async with aiofiles.open(source, "rb") as src, aiofiles.open(temp_path, "wb") as dst:
                    while True:
                        chunk = await src.read(self.CHUNK_SIZE)
                        if not chunk:
                            break
                        size += len(chunk)
                        await dst.write(chunk)
                os.chmod(temp_path, 0o640)
                os.replace(temp_path, target)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
        except OSError as e:
            raise StorageWriteError(dest_ref, str(e)) from e
        return {
            "storage_ref": dest_ref,
            "size": size,
            "copied_at": utc_now().isoformat(),
        }

    async def delete(self, storage_ref: str) -> bool:
        """Delete file. Returns True if deleted, False if it was not there."""
        file_path = self._get_full_path(storage_ref)
        if not file_path.exists():
            return False
        try:
            await aiofiles.os.remove(file_path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageDeleteError(storage_ref, str(e)) from e
        return True

    async def exists(self, storage_ref: str) -> bool:
        """Return True if file exists."""
        try:
            return self._get_full_path(storage_ref).is_file()
        except StoragePermissionError:
            return False

    async def list_names(self, folder: str) -> list[str]:
        """Names of regular files directly under folder (temp files excluded)."""
        directory = self._get_full_path(folder)
        if not directory.is_dir():
            return []
        names = await aiofiles.os.listdir(directory)
        return sorted(
            name
            for name in names
            if not name.startswith(".tmp_") and (directory / name).is_file()
        )
