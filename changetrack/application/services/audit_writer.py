"""Audit writer: turns activity signals into append-only activity records.

Runs on the dispatcher worker, never on the request path. Every handler
opens its own unit of work; any failure is logged and swallowed because the
business write it describes has already committed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from changetrack.application.dtos.audit import AuditRecordCreate
from changetrack.application.dtos.change_log import ChangeEntry, Snapshot
from changetrack.application.dtos.signal import ActivitySignal
from changetrack.application.interfaces.repositories import IAuditRecordRepository
from changetrack.application.services.diff_engine import (
    DEFAULT_COLLECTION_LABEL,
    diff_collections,
    diff_snapshots,
    record_value_entry,
    serialize_change_log,
)
from changetrack.application.services.snapshots import SnapshotRegistry, safe_snapshot
from changetrack.domain.enums import ActionType, Signal
from changetrack.domain.exceptions import (
    AuditPersistenceError,
    ChangeTrackException,
    DiffSerializationError,
)

logger = logging.getLogger(__name__)

RepositoryFactory = Callable[[AsyncSession], IAuditRecordRepository]
RegistryFactory = Callable[[AsyncSession], SnapshotRegistry]


def _record_entry(snapshot: Snapshot, action_type: ActionType, action_by: str | None) -> ChangeEntry:
    """Single entry naming the whole record by its first label, e.g. "Bank Name": "Chase"."""
    label = next(iter(snapshot), "Name")
    value = snapshot.reference_name or snapshot.get(label, "")
    return record_value_entry(
        label, value, action_type, action_by=action_by, referrable_type_id=snapshot.id
    )


def _collection_label(payload: ActivitySignal) -> str:
    if payload.entity_kind is None:
        return DEFAULT_COLLECTION_LABEL
    return payload.entity_kind.collection_label


class AuditWriter:
    """Subscribed to entity-created, entity-updated and entity-deleted."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        repository_factory: RepositoryFactory,
        registry_factory: RegistryFactory | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.repository_factory = repository_factory
        self.registry_factory = registry_factory

    def register(self, dispatcher: Any) -> None:
        """Subscribe handlers on a dispatcher exposing subscribe(signal, handler)."""
        dispatcher.subscribe(Signal.ENTITY_CREATED, self.on_created)
        dispatcher.subscribe(Signal.ENTITY_UPDATED, self.on_updated)
        dispatcher.subscribe(Signal.ENTITY_DELETED, self.on_deleted)

    async def on_created(self, payload: ActivitySignal) -> None:
        await self._write_record_action(payload, ActionType.CREATED, payload.after_snapshot)

    async def on_deleted(self, payload: ActivitySignal) -> None:
        await self._write_record_action(payload, ActionType.DELETED, payload.before_snapshot)

    async def on_updated(self, payload: ActivitySignal) -> None:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    entries, action_type = await self._diff(session, payload)
                    if not entries:
                        logger.debug(
                            "No field changes for %s (owner %s); nothing recorded",
                            payload.activity_path,
                            payload.owner_id,
                        )
                        return
                    await self._append(session, payload, action_type, entries)
        except ChangeTrackException as e:
            self._log_contained(e, payload)
        except Exception as e:
            self._log_contained(AuditPersistenceError(payload.owner_id, str(e)), payload)

    async def _write_record_action(
        self,
        payload: ActivitySignal,
        action_type: ActionType,
        snapshot: Snapshot | list[Snapshot] | None,
    ) -> None:
        entries = list(payload.change_log or [])
        if not entries and isinstance(snapshot, Snapshot):
            entries = [_record_entry(snapshot, action_type, payload.actor_id)]
        elif not entries and isinstance(snapshot, list):
            # Every member of a created or deleted collection is one record entry.
            added, removed = (snapshot, []) if action_type is ActionType.CREATED else ([], snapshot)
            entries = diff_collections(
                removed, added, action_by=payload.actor_id, label=_collection_label(payload)
            )
        if not entries:
            logger.warning(
                "%s signal for owner %s carried no change log or snapshot; nothing recorded",
                action_type.label,
                payload.owner_id,
            )
            return
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    await self._append(session, payload, action_type, entries)
        except ChangeTrackException as e:
            self._log_contained(e, payload)
        except Exception as e:
            self._log_contained(AuditPersistenceError(payload.owner_id, str(e)), payload)

    async def _diff(
        self, session: AsyncSession, payload: ActivitySignal
    ) -> tuple[list[ChangeEntry], ActionType]:
        """Entries for an update signal, and the action type to record them under.

        A single record with no prior state was created, not edited.
        """
        after = payload.after_snapshot
        if after is None:
            after = await self._fetch_after(session, payload)

        before = payload.before_snapshot
        collection = isinstance(after, list) or isinstance(before, list) or (
            payload.entity_kind is not None and payload.entity_kind.is_collection
        )
        if collection:
            entries = diff_collections(
                before if isinstance(before, list) else [],
                after if isinstance(after, list) else [],
                action_by=payload.actor_id,
                label=_collection_label(payload),
            )
            return entries, ActionType.UPDATED
        if after is None:
            logger.info(
                "%s no longer exists for owner %s; update not recorded",
                payload.activity_path,
                payload.owner_id,
            )
            return [], ActionType.UPDATED
        entries = diff_snapshots(
            before, after, action_by=payload.actor_id, referrable_type_id=payload.referrable_type_id
        )
        return entries, ActionType.CREATED if before is None else ActionType.UPDATED

    async def _fetch_after(
        self, session: AsyncSession, payload: ActivitySignal
    ) -> Snapshot | list[Snapshot] | None:
        if payload.entity_kind is None or self.registry_factory is None:
            logger.warning(
                "Update signal for owner %s has neither an after snapshot nor an entity kind",
                payload.owner_id,
            )
            return None
        registry = self.registry_factory(session)
        return await safe_snapshot(registry, payload.entity_kind, payload.condition, payload.flags)

    async def _append(
        self,
        session: AsyncSession,
        payload: ActivitySignal,
        action_type: ActionType,
        entries: list[ChangeEntry],
    ) -> None:
        change_log = serialize_change_log(entries)
        repository = self.repository_factory(session)
        record = await repository.append(
            AuditRecordCreate(
                employee_id=payload.owner_id,
                action_type=action_type,
                activity=payload.activity_path,
                change_log=change_log,
                created_by=payload.actor_id,
                referrable_type=payload.referrable_type,
                referrable_type_id=payload.referrable_type_id,
            )
        )
        logger.info(
            "Recorded %s activity %s for owner %s (%d change(s))",
            action_type.label.lower(),
            record.id,
            payload.owner_id,
            len(entries),
        )

    @staticmethod
    def _log_contained(error: ChangeTrackException, payload: ActivitySignal) -> None:
        level = logging.WARNING if isinstance(error, DiffSerializationError) else logging.ERROR
        logger.log(
            level,
            "Activity not recorded for owner %s (%s): %s",
            payload.owner_id,
            error.error_code,
            error.message,
            extra={"details": error.details},
            exc_info=True,
        )
