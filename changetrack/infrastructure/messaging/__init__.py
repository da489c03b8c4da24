"""Messaging: in-process dispatcher for activity signals."""

from changetrack.infrastructure.messaging.dispatcher import (
    EventDispatcher,
    get_dispatcher,
    set_dispatcher,
)

__all__ = ["EventDispatcher", "get_dispatcher", "set_dispatcher"]
