"""In-process event dispatcher for activity signals.

Business services publish after their transaction has committed; a single
worker task delivers each signal to its subscribers in subscription order.
The queue is bounded: when it is full the signal is dropped and logged, so a
slow audit path can never block or fail a business request.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict

from changetrack.application.dtos.signal import ActivitySignal
from changetrack.application.interfaces.services import SignalHandler
from changetrack.core.config import get_settings
from changetrack.domain.enums import Signal

logger = logging.getLogger(__name__)


class EventDispatcher:
    """Bounded asyncio.Queue pub/sub with one delivery worker.

    publish() never awaits handlers. Each handler is isolated: an exception
    is logged and the next handler still runs; nothing reaches the publisher.
    """

    def __init__(self, maxsize: int | None = None, drain_timeout: float | None = None) -> None:
        settings = get_settings()
        self.maxsize = maxsize if maxsize is not None else settings.dispatcher_queue_size
        self.drain_timeout = (
            drain_timeout
            if drain_timeout is not None
            else settings.dispatcher_drain_timeout_seconds
        )
        self._queue: asyncio.Queue[tuple[Signal, ActivitySignal]] = asyncio.Queue(self.maxsize)
        self._handlers: dict[Signal, list[SignalHandler]] = defaultdict(list)
        self._worker: asyncio.Task[None] | None = None
        self._closed = False
        self.dropped = 0

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def subscribe(self, signal: Signal, handler: SignalHandler) -> None:
        """Register handler for signal; handlers run in subscription order."""
        self._handlers[Signal(signal)].append(handler)

    def handlers_for(self, signal: Signal) -> list[SignalHandler]:
        return list(self._handlers.get(Signal(signal), ()))

    def publish(self, signal: Signal, payload: ActivitySignal) -> bool:
        """Enqueue a signal. Returns False when it was dropped (queue full or stopped)."""
        signal = Signal(signal)
        if self._closed:
            self.dropped += 1
            logger.warning(
                "Dispatcher stopped; dropping %s for owner %s", signal.value, payload.owner_id
            )
            return False
        try:
            self._queue.put_nowait((signal, payload))
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(
                "Dispatcher queue full (%d); dropping %s for owner %s",
                self.maxsize,
                signal.value,
                payload.owner_id,
            )
            return False
        return True

    async def start(self) -> None:
        """Start the delivery worker. Call on app startup."""
        if self.is_running:
            return
        self._closed = False
        self._worker = asyncio.create_task(self._run(), name="changetrack-dispatcher")
        logger.info("Event dispatcher started (queue size %d)", self.maxsize)

    async def join(self) -> None:
        """Wait until every queued signal has been delivered.

        Returns at once when the worker is not running, since nothing would
        drain the queue.
        """
        if not self.is_running:
            return
        await self._queue.join()

    async def stop(self, drain: bool = True) -> None:
        """Stop accepting signals; optionally deliver what is queued first.

        Draining is bounded by drain_timeout; signals still queued after it
        are dropped and counted.
        """
        self._closed = True
        if drain and self.is_running:
            try:
                await asyncio.wait_for(self._queue.join(), timeout=self.drain_timeout)
            except TimeoutError:
                logger.warning(
                    "Dispatcher drain timed out after %.1fs; %d signal(s) dropped",
                    self.drain_timeout,
                    self._queue.qsize(),
                )
        if self._worker is not None:
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
            self._worker = None
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()
            self.dropped += 1
        logger.info("Event dispatcher stopped")

    async def _run(self) -> None:
        while True:
            signal, payload = await self._queue.get()
            try:
                await self._deliver(signal, payload)
            finally:
                self._queue.task_done()

    async def _deliver(self, signal: Signal, payload: ActivitySignal) -> None:
        for handler in self.handlers_for(signal):
            try:
                await handler(payload)
            except Exception:
                logger.exception(
                    "Handler %s failed for %s (owner %s)",
                    getattr(handler, "__qualname__", repr(handler)),
                    signal.value,
                    payload.owner_id,
                )


_dispatcher: EventDispatcher | None = None


def get_dispatcher() -> EventDispatcher | None:
    """Return the global dispatcher (set at startup)."""
    return _dispatcher


def set_dispatcher(dispatcher: EventDispatcher | None) -> None:
    """Set the global dispatcher."""
    global _dispatcher
    _dispatcher = dispatcher
