"""Reel: one animatable column of the odometer.

A reel rolls its render node from offset 0 to its travel distance over the
configured duration. The roll is a generator that suspends at every frame
and is resumed by the frame clock with the frame timestamp.
"""

import logging
import math
from concurrent.futures import Future
from enum import Enum
from typing import Callable, Generator, Optional

from .clock import FrameClock
from .easing import EasingFunction
from .matrix import RotatingColumn, SymbolColumn

_log = logging.getLogger(__name__)


class ReelStatus(str, Enum):
    IDLE = "idle"
    ANIMATING = "animating"
    SETTLED = "settled"
    CANCELLED = "cancelled"


class Reel:
    """A single column bound to one render node.

    Args:
        column: Symbols this reel shows for the current transition.
        node: Render node created for the column.
        renderer: Renderer owning ``node``.
        epoch: Transition epoch the reel belongs to.
        is_current: Returns False once a newer transition replaced this reel.
    """

    def __init__(
        self,
        column: SymbolColumn,
        node,
        renderer,
        epoch: int = 0,
        is_current: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.column = column
        self.node = node
        self.epoch = epoch
        self.status = ReelStatus.IDLE
        self.position = 0.0
        self.travel = 0.0
        self._renderer = renderer
        self._is_current = is_current or (lambda: True)
        self._future: Optional[Future] = None
        self._frames: Optional[Generator[None, float, None]] = None

    @property
    def is_animatable(self) -> bool:
        return isinstance(self.column, RotatingColumn) and self.column.is_animatable

    @property
    def is_live(self) -> bool:
        return self.status is not ReelStatus.CANCELLED and self._is_current()

    @property
    def symbol(self) -> str:
        """Symbol the reel ends on."""
        return self.column.final_symbol

    def animate(self, clock: FrameClock, easing: EasingFunction, duration_ms: float) -> Future:
        """Start rolling; the returned future resolves with the reel once settled.

        Reels that have nothing to roll settle at once without requesting a
        single frame.
        """
        future: Future = Future()
        self._future = future
        if not self.is_animatable:
            self.status = ReelStatus.SETTLED
            future.set_result(self)
            return future

        self.travel = (len(self.column.sequence) - 1) * self._renderer.symbol_extent
        self.status = ReelStatus.ANIMATING
        self._frames = self._roll(easing, duration_ms)
        next(self._frames)
        self._wait_frame(clock)
        return future

    def cancel(self) -> None:
        """Stop rolling; later frames for this reel become no-ops."""
        if self.status in (ReelStatus.SETTLED, ReelStatus.CANCELLED):
            return
        self.status = ReelStatus.CANCELLED
        if self._frames is not None:
            self._frames.close()
            self._frames = None
        if self._future is not None:
            self._future.cancel()

    def _wait_frame(self, clock: FrameClock) -> None:
        clock.request_tick(lambda timestamp: self._resume(clock, timestamp))

    def _resume(self, clock: FrameClock, timestamp: float) -> None:
        if not self.is_live or self._frames is None:
            # Superseded: the node may already be detached or reused.
            _log.debug("dropping frame for stale reel (epoch %d)", self.epoch)
            self.cancel()
            return
        try:
            self._frames.send(timestamp)
        except StopIteration:
            self._frames = None
            self.status = ReelStatus.SETTLED
            self._future.set_result(self)
            return
        self._wait_frame(clock)

    def _roll(self, easing: EasingFunction, duration_ms: float) -> Generator[None, float, None]:
        start = None
        while True:
            now = yield
            if start is None:
                start = now
            elapsed = math.floor(now - start)

            target = easing(elapsed, 0, self.travel, duration_ms)
            # Never regress, never overshoot.
            position = min(max(target, self.position), self.travel)
            if elapsed >= duration_ms:
                position = self.travel

            self.position = position
            self._renderer.set_offset(self.node, position)
            if position >= self.travel:
                return
