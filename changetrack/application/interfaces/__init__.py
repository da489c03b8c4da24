"""Application ports: repository and service protocols."""

from changetrack.application.interfaces.repositories import (
    IAuditRecordRepository,
    IDocumentRepository,
)
from changetrack.application.interfaces.services import (
    IDateFormatProvider,
    ISignalPublisher,
    IStorageService,
    SignalHandler,
)

__all__ = [
    "IAuditRecordRepository",
    "IDateFormatProvider",
    "IDocumentRepository",
    "ISignalPublisher",
    "IStorageService",
    "SignalHandler",
]
