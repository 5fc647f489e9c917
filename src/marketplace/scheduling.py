"""Reply timers standing in for network round-trips.

Widgets never sleep themselves; they hand a callback and a delay to a
``Scheduler``.  ``AsyncioScheduler`` fires it on the running event loop,
``ImmediateScheduler`` runs it inline so the widgets can be driven
synchronously (tests, scripts, ``simulate_latency=False``).
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable

import structlog

logger = structlog.get_logger()


class Scheduler(ABC):
    """Interface for deferring a callback by a fixed delay."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        """Run *callback* once, *delay* seconds from now.

        Args:
            delay: Seconds to wait before running the callback.
            callback: Zero-argument callable.
        """

    @property
    def pending(self) -> int:
        """Number of callbacks scheduled but not yet run."""
        return 0


class ImmediateScheduler(Scheduler):
    """Runs every callback synchronously, ignoring the delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        callback()


class AsyncioScheduler(Scheduler):
    """Schedules callbacks on the running asyncio event loop.

    Timers are neither cancellable nor retried: once scheduled, a callback
    always fires.  Must be called from within a running loop.
    """

    def __init__(self) -> None:
        self._handles: set[asyncio.TimerHandle] = set()

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        loop = asyncio.get_running_loop()
        handle: asyncio.TimerHandle | None = None

        def _run() -> None:
            self._handles.discard(handle)  # type: ignore[arg-type]
            try:
                callback()
            except Exception:
                logger.exception("scheduled_callback_failed")

        handle = loop.call_later(delay, _run)
        self._handles.add(handle)

    @property
    def pending(self) -> int:
        return len(self._handles)
