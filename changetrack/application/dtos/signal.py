"""Payload carried by entity-created / entity-updated / entity-deleted signals."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from changetrack.application.dtos.change_log import ChangeEntry, Snapshot
from changetrack.domain.enums import ActionType, EntityKind


@dataclass(frozen=True)
class ActivitySignal:
    """What changed, published after the business write has committed.

    Update signals carry a before snapshot and either an after snapshot or
    enough (entity_kind, condition, flags) for the writer to fetch one.
    Create/delete signals carry a ready change_log, or the created or
    deleted snapshot (a list for collection kinds).
    """

    owner_id: str
    action_type: ActionType
    activity_path: str
    actor_id: str | None = None
    referrable_type: int | None = None
    referrable_type_id: str | None = None
    change_log: list[ChangeEntry] | None = None
    before_snapshot: Snapshot | list[Snapshot] | None = None
    after_snapshot: Snapshot | list[Snapshot] | None = None
    entity_kind: EntityKind | None = None
    condition: dict[str, Any] = field(default_factory=dict)
    flags: dict[str, Any] = field(default_factory=dict)
