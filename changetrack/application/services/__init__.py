"""Application services: diffing, snapshots, audit writing and reading."""

from changetrack.application.services.audit_reader import AuditReader
from changetrack.application.services.audit_writer import AuditWriter
from changetrack.application.services.snapshots import SnapshotRegistry, safe_snapshot

__all__ = ["AuditReader", "AuditWriter", "SnapshotRegistry", "safe_snapshot"]
