"""Helpers business services use to publish activity signals after commit."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from changetrack.application.dtos.change_log import ChangeEntry, Snapshot
from changetrack.application.dtos.signal import ActivitySignal
from changetrack.application.interfaces.services import ISignalPublisher
from changetrack.domain.enums import ActionType, EntityKind, Signal
from changetrack.domain.referrable import ACTIVITY_PATHS, ENTITY_REFERRABLE_TYPES
from changetrack.shared.context import resolve_actor

logger = logging.getLogger(__name__)


def entity_signal(
    kind: EntityKind,
    action_type: ActionType,
    owner_id: str,
    *,
    entity_id: str | None = None,
    actor_id: str | None = None,
    before: Snapshot | list[Snapshot] | None = None,
    after: Snapshot | list[Snapshot] | None = None,
    change_log: Sequence[ChangeEntry] | None = None,
    condition: Mapping[str, Any] | None = None,
    flags: Mapping[str, Any] | None = None,
    activity_path: str | None = None,
) -> ActivitySignal:
    """Payload for a change to one tracked entity kind.

    Activity path and referrable type default to the kind's; the actor
    defaults to the current request's actor.
    """
    if condition is None:
        condition = {"employee_id": owner_id} if kind.is_collection else {"id": entity_id}
    return ActivitySignal(
        owner_id=owner_id,
        action_type=action_type,
        activity_path=activity_path or ACTIVITY_PATHS[kind],
        actor_id=resolve_actor(actor_id),
        referrable_type=int(ENTITY_REFERRABLE_TYPES[kind]),
        referrable_type_id=entity_id,
        change_log=list(change_log) if change_log is not None else None,
        before_snapshot=before,
        after_snapshot=after,
        entity_kind=kind,
        condition=dict(condition),
        flags=dict(flags or {}),
    )


def publish_activity(publisher: ISignalPublisher | None, payload: ActivitySignal) -> bool:
    """Publish on the signal matching payload.action_type.

    Call only after the business transaction has committed. Returns False
    when no publisher is configured or the signal was dropped.
    """
    if publisher is None:
        logger.warning(
            "No dispatcher configured; activity for owner %s not recorded", payload.owner_id
        )
        return False
    return publisher.publish(Signal.for_action(payload.action_type), payload)
