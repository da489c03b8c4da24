"""Storage service protocol (DIP). Implementation: LocalStorageService."""

from typing import Any, Protocol


class StorageProtocol(Protocol):
    """Protocol for document storage backends addressed by relative path."""

    async def copy(self, source_ref: str, dest_ref: str) -> dict[str, Any]:
        """Copy bytes from source_ref to dest_ref; the destination appears atomically."""
        ...

    async def delete(self, storage_ref: str) -> bool:
        """Delete file. Returns True if deleted, False if not found."""
        ...

    async def exists(self, storage_ref: str) -> bool:
        """Return True if file exists."""
        ...

    async def list_names(self, folder: str) -> list[str]:
        """File names directly under folder; empty when the folder is missing."""
        ...
