"""Storage: local filesystem backend for employee documents.

Implementations satisfy StorageProtocol (copy, delete, exists, list_names).
"""

from changetrack.infrastructure.external.storage.factory import StorageFactory
from changetrack.infrastructure.external.storage.local_storage import LocalStorageService
from changetrack.infrastructure.external.storage.protocol import StorageProtocol

__all__ = [
    "LocalStorageService",
    "StorageFactory",
    "StorageProtocol",
]
