"""Frame clocks that drive reel animation.

A frame clock delivers one timestamp (milliseconds) per display refresh to
each requested callback, and runs delayed one-shot callbacks. The engine
never sleeps or spins on its own; every suspension point goes through here.
"""

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Callable, Optional

TickCallback = Callable[[float], None]


class FrameClock(ABC):
    """Scheduling capability injected into the odometer."""

    @abstractmethod
    def request_tick(self, callback: TickCallback) -> None:
        """Call ``callback(timestamp_ms)`` once, before the next refresh."""

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]):
        """Run ``callback`` after ``delay_ms``; return a handle with ``cancel()``."""


class DeferredAction:
    """One-shot action run after a delay unless cancelled first."""

    def __init__(self, clock: FrameClock, delay_ms: float, action: Callable[[], None]) -> None:
        self._action = action
        self.cancelled = False
        self.done = False
        self._handle = clock.call_later(delay_ms, self._fire)

    def _fire(self) -> None:
        if self.cancelled or self.done:
            return
        self.done = True
        self._action()

    def cancel(self) -> None:
        if self.done or self.cancelled:
            return
        self.cancelled = True
        self._handle.cancel()


class _ManualTimer:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualFrameClock(FrameClock):
    """Virtual-time clock advanced explicitly, one frame at a time.

    Usage:
        clock = ManualFrameClock(frame_ms=16)
        odo = Odometer(renderer, clock=clock)
        odo.set(42)
        clock.run_until_idle()
    """

    def __init__(self, frame_ms: float = 16.0, start_ms: float = 0.0) -> None:
        self.frame_ms = frame_ms
        self.now = start_ms
        self.frames = 0
        self._ticks: list[TickCallback] = []
        self._timers: list[tuple[float, int, _ManualTimer]] = []
        self._seq = itertools.count()

    def request_tick(self, callback: TickCallback) -> None:
        self._ticks.append(callback)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> _ManualTimer:
        timer = _ManualTimer(self.now + delay_ms, callback)
        heapq.heappush(self._timers, (timer.due, next(self._seq), timer))
        return timer

    @property
    def pending_ticks(self) -> int:
        return len(self._ticks)

    @property
    def pending_timers(self) -> int:
        return sum(1 for _, _, t in self._timers if not t.cancelled)

    @property
    def idle(self) -> bool:
        return not self._ticks and not self.pending_timers

    def tick(self) -> None:
        """Advance one frame: fire due timers, then this frame's tick callbacks."""
        self.now += self.frame_ms
        self.frames += 1
        while self._timers and self._timers[0][0] <= self.now:
            _, _, timer = heapq.heappop(self._timers)
            if not timer.cancelled:
                timer.callback()
        callbacks, self._ticks = self._ticks, []
        for callback in callbacks:
            callback(self.now)

    def advance(self, ms: float) -> None:
        """Run as many frames as fit in ``ms``."""
        target = self.now + ms
        while self.now + self.frame_ms <= target:
            self.tick()

    def run_until_idle(self, max_frames: int = 100_000) -> int:
        """Tick until nothing is scheduled; return the number of frames run."""
        start = self.frames
        while not self.idle:
            if self.frames - start >= max_frames:
                raise RuntimeError(f"clock still busy after {max_frames} frames")
            self.tick()
        return self.frames - start


class AsyncioFrameClock(FrameClock):
    """Frame clock on top of the running asyncio event loop."""

    def __init__(self, fps: float = 60.0, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self.fps = fps
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def request_tick(self, callback: TickCallback) -> None:
        loop = self.loop
        loop.call_later(1 / self.fps, lambda: callback(loop.time() * 1000))

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay_ms / 1000, callback)
