"""Document use cases: promotion from temp storage, destruction, activity entries."""

from changetrack.application.use_cases.documents.document_lifecycle import (
    DocumentLifecycleManager,
    build_document_url,
    deduplicated_name,
)

__all__ = [
    "DocumentLifecycleManager",
    "build_document_url",
    "deduplicated_name",
]
