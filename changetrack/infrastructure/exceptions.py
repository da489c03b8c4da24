"""Infrastructure exceptions for storage operations.

Storage errors extend ChangeTrackException so presentation can map them
to HTTP responses consistently. The document lifecycle manager converts
them to DocumentMoveError on the promotion path.
"""

from changetrack.domain.exceptions import ChangeTrackException


class StorageException(ChangeTrackException):
    """Base exception for storage operations."""


class StorageNotFoundError(StorageException):
    """File not found in storage."""

    def __init__(self, file_path: str) -> None:
        super().__init__(
            f"File not found: {file_path}",
            "STORAGE_NOT_FOUND",
            {"file_path": file_path},
        )


class StorageWriteError(StorageException):
    """Copying or writing a file failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to write file: {file_path}",
            "STORAGE_WRITE_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """File deletion failed."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete file: {file_path}",
            "STORAGE_DELETE_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Path escapes the storage root."""

    def __init__(self, file_path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation}: {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path, "operation": operation},
        )
