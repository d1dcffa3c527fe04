"""Rolling odometer widget.

Hosts an ``Odometer`` drawn by a ``TextRenderer`` and clocked by textual
timers. Every renderer mutation refreshes the widget.
"""

import time
from typing import Any, Mapping, Optional

from rich.text import Text
from textual.widgets import Static

from ..clock import FrameClock
from ..odometer import Odometer, Transition
from ..render import TextRenderer
from ..theme import PALETTE, Palette


class _TimerHandle:
    def __init__(self, timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class TextualFrameClock(FrameClock):
    """Frame clock backed by a widget's ``set_timer``."""

    def __init__(self, widget: Static, fps: float = 60.0) -> None:
        self._widget = widget
        self.fps = fps

    def request_tick(self, callback) -> None:
        self._widget.set_timer(1 / self.fps, lambda: callback(time.monotonic() * 1000))

    def call_later(self, delay_ms: float, callback) -> _TimerHandle:
        return _TimerHandle(self._widget.set_timer(delay_ms / 1000, callback))


class OdometerWidget(Static):
    """Single-line rolling number."""

    DEFAULT_CSS = """
    OdometerWidget {
        height: 1;
        width: 100%;
        text-align: center;
    }
    """

    def __init__(
        self,
        value=0,
        options: Optional[Mapping[str, Any]] = None,
        fps: float = 60.0,
        palette: Palette = PALETTE,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.renderer = TextRenderer(palette, on_change=self._on_render_change)
        self.clock = TextualFrameClock(self, fps)
        self.odometer = Odometer(
            self.renderer,
            {**(options or {}), "init_value": value},
            clock=self.clock,
        )

    def _on_render_change(self) -> None:
        if self.is_mounted:
            self.refresh()

    @property
    def value(self):
        return self.odometer.get_current_value()

    def set_value(self, value) -> Optional[Transition]:
        """Roll to ``value`` (no-op when unchanged)."""
        return self.odometer.set(value)

    def render(self) -> Text:
        return self.renderer.render()
