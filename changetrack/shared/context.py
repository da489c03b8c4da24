"""Request context management using contextvars.

Holds the acting user for the current request so audit entries can default
their action_by without threading it through every call.

Usage:
    set_current_actor("emp_123")
    actor_id = get_current_actor_id()
"""

from contextvars import ContextVar

_current_actor_id: ContextVar[str | None] = ContextVar("current_actor_id", default=None)


def set_current_actor(actor_id: str | None) -> None:
    """Set the acting user for this request (middleware or dependency)."""
    _current_actor_id.set(actor_id)


def clear_current_actor() -> None:
    """Clear the acting user."""
    _current_actor_id.set(None)


def get_current_actor_id() -> str | None:
    """Return the acting user id, or None outside a request."""
    return _current_actor_id.get()


def resolve_actor(explicit: str | None) -> str | None:
    """Return explicit actor id when given, else the request's actor."""
    return explicit if explicit else _current_actor_id.get()
