"""
Time-driven marker animation along a route.

A session moves through Idle -> Running -> Completed or Cancelled. While
running, every scheduler tick maps elapsed time to a position on the route
and hands an AnimationFrame to the caller's on_update callback.
"""

import logging
import math
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence

from locintel.config import settings
from locintel.models import AnimationFrame, Coordinate
from locintel.services.geometry import initial_bearing_degrees, interpolate
from locintel.services.scheduler import AsyncioScheduler, Scheduler

logger = logging.getLogger(__name__)

FrameCallback = Callable[[AnimationFrame], None]


class AnimatorState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AnimationSession:
    """
    One playback of a route. Returned by RouteAnimator.start as the cancel handle.

    Frames are delivered with strictly increasing progress and the last one
    always has progress 1 at the route's final coordinate, unless the session
    is cancelled first.
    """

    def __init__(
        self,
        route: Sequence[Coordinate],
        duration_ms: float,
        on_update: FrameCallback,
        scheduler: Scheduler,
    ):
        self.route: List[Coordinate] = list(route)
        self.duration_ms = duration_ms
        self.state = AnimatorState.IDLE
        self.frames_delivered = 0
        self._on_update = on_update
        self._scheduler = scheduler
        self._start_ms: Optional[float] = None
        self._last_progress: Optional[float] = None
        self._handle: Any = None

    @property
    def done(self) -> bool:
        return self.state in (AnimatorState.COMPLETED, AnimatorState.CANCELLED)

    def begin(self) -> None:
        if self.state is not AnimatorState.IDLE:
            return

        if not self.route:
            self.state = AnimatorState.COMPLETED
            return

        if len(self.route) < 2:
            self._complete()
            return

        self.state = AnimatorState.RUNNING
        logger.debug("Animating %d points over %.0f ms", len(self.route), self.duration_ms)
        self._handle = self._scheduler.schedule_tick(self._on_tick)

    def cancel(self) -> None:
        """Stop the animation. Safe to call repeatedly or after completion."""
        if self.done:
            return

        self.state = AnimatorState.CANCELLED
        if self._handle is not None:
            self._scheduler.cancel_tick(self._handle)
            self._handle = None
        logger.debug("Animation cancelled after %d frames", self.frames_delivered)

    def _on_tick(self, timestamp_ms: float) -> None:
        self._handle = None
        if self.state is not AnimatorState.RUNNING:
            return

        if self._start_ms is None:
            self._start_ms = timestamp_ms

        fraction = self._fraction(timestamp_ms - self._start_ms)
        if fraction >= 1.0:
            self._complete()
            return

        if self._last_progress is None or fraction > self._last_progress:
            self._deliver(self._frame_at(fraction))

        # on_update may have cancelled us
        if self.state is AnimatorState.RUNNING:
            self._handle = self._scheduler.schedule_tick(self._on_tick)

    def _fraction(self, elapsed_ms: float) -> float:
        if self.duration_ms <= 0:
            return 1.0
        return min(max(elapsed_ms / self.duration_ms, 0.0), 1.0)

    def _frame_at(self, fraction: float) -> AnimationFrame:
        segments = len(self.route) - 1
        scaled = fraction * segments
        index = min(math.floor(scaled), segments - 1)
        start, end = self.route[index], self.route[index + 1]

        position = interpolate(start, end, scaled - index)
        return AnimationFrame(
            lat=position.lat,
            lng=position.lng,
            bearing=initial_bearing_degrees(start, end),
            progress=fraction,
        )

    def _complete(self) -> None:
        last = self.route[-1]
        self.state = AnimatorState.COMPLETED
        self._deliver(AnimationFrame(lat=last.lat, lng=last.lng, bearing=0.0, progress=1.0))
        logger.debug("Animation completed after %d frames", self.frames_delivered)

    def _deliver(self, frame: AnimationFrame) -> None:
        self._last_progress = frame.progress
        self.frames_delivered += 1
        try:
            self._on_update(frame)
        except Exception:
            if not self.done:
                logger.error("on_update failed at progress %.3f; cancelling animation", frame.progress)
                self.cancel()
            raise


class RouteAnimator:
    """Starts independent animation sessions on a shared scheduler."""

    def __init__(self, scheduler: Optional[Scheduler] = None):
        self.scheduler = scheduler if scheduler is not None else AsyncioScheduler()

    def start(
        self,
        route: Sequence[Coordinate],
        duration_ms: float,
        on_update: FrameCallback,
    ) -> AnimationSession:
        """
        Animate a marker along route over duration_ms.

        Routes with a single point complete immediately with one frame; empty
        routes complete without any frame.

        Returns:
            The running session; call its cancel() to stop updates
        """
        session = AnimationSession(route, duration_ms, on_update, self.scheduler)
        session.begin()
        return session


def animate_along_route(
    route: Sequence[Coordinate],
    on_update: FrameCallback,
    duration_ms: Optional[float] = None,
    scheduler: Optional[Scheduler] = None,
) -> AnimationSession:
    """Start an animation with configured defaults for duration and scheduler."""
    if duration_ms is None:
        duration_ms = settings.ANIMATION_DURATION_MS
    return RouteAnimator(scheduler).start(route, duration_ms, on_update)
