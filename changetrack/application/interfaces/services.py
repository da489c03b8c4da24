"""Service interfaces (ports) consumed by the application layer."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from changetrack.application.dtos.signal import ActivitySignal
    from changetrack.domain.enums import Signal

SignalHandler = Callable[["ActivitySignal"], Awaitable[None]]


class IDateFormatProvider(Protocol):
    """Tenant-configured date display format (moment-style pattern)."""

    async def get_date_format(self) -> str:
        """Return e.g. "MM/DD/YYYY"."""


class ISignalPublisher(Protocol):
    """Fire-and-forget publish side of the event dispatcher."""

    def publish(self, signal: Signal, payload: ActivitySignal) -> bool:
        """Enqueue a signal; False when it was dropped."""


class IStorageService(Protocol):
    """Byte storage addressed by relative path."""

    async def copy(self, source_ref: str, dest_ref: str) -> dict[str, Any]:
        """Copy bytes from source to dest (atomic at dest)."""

    async def delete(self, storage_ref: str) -> bool:
        """Delete; True if deleted, False if it did not exist."""

    async def exists(self, storage_ref: str) -> bool:
        """True if the file exists."""

    async def list_names(self, folder: str) -> list[str]:
        """File names directly under folder (empty when folder is missing)."""
