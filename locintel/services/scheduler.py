"""
Tick schedulers for driving route animation.

The animator only needs "call me back on the next frame" and "never mind".
Hosts supply the concrete timing source: an asyncio event loop for live
playback, or ManualScheduler for deterministic tests and offline rendering.
"""

import asyncio
import itertools
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from locintel.config import settings

TickCallback = Callable[[float], None]


class Scheduler(ABC):
    """Schedules one-shot tick callbacks that receive a timestamp in milliseconds."""

    @abstractmethod
    def schedule_tick(self, callback: TickCallback) -> Any:
        """Run callback on the next tick and return a handle for cancel_tick."""

    @abstractmethod
    def cancel_tick(self, handle: Any) -> None:
        """Cancel a pending tick. Unknown or already-run handles are ignored."""


class ManualScheduler(Scheduler):
    """
    Scheduler whose clock only moves when told to.

    Each call to advance() or tick() runs the callbacks that were pending
    before the call; callbacks scheduled while those run wait for the next one.
    """

    def __init__(self, start_ms: float = 0.0):
        self.now = start_ms
        self._pending: Dict[int, TickCallback] = {}
        self._ids = itertools.count(1)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def schedule_tick(self, callback: TickCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_tick(self, handle: Any) -> None:
        self._pending.pop(handle, None)

    def tick(self) -> int:
        """Run pending callbacks at the current time; return how many ran."""
        due = list(self._pending.items())
        ran = 0
        for handle, callback in due:
            # A callback may cancel a later one in the same batch
            if self._pending.pop(handle, None) is None:
                continue
            callback(self.now)
            ran += 1
        return ran

    def advance(self, ms: float) -> int:
        """Move the clock forward by ms, then run pending callbacks."""
        self.now += ms
        return self.tick()


class AsyncioScheduler(Scheduler):
    """Schedules ticks on an asyncio event loop at a fixed frame interval."""

    def __init__(self, interval_ms: Optional[float] = None, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.interval_ms = settings.FRAME_INTERVAL_MS if interval_ms is None else interval_ms
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def schedule_tick(self, callback: TickCallback) -> asyncio.TimerHandle:
        loop = self.loop
        return loop.call_later(
            self.interval_ms / 1000.0,
            lambda: callback(loop.time() * 1000.0),
        )

    def cancel_tick(self, handle: Any) -> None:
        if handle is not None:
            handle.cancel()
