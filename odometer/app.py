"""Textual demo app: a random walk on a rolling odometer.

Keys add a random integer or decimal step, toggle an automatic loop,
cycle the grouping and decimal marks and flip the currency position.
"""

import random
from decimal import Decimal
from typing import Any, Mapping, Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Center, Middle
from textual.widgets import Static

from .options import SUPPORTED_DECIMAL_MARKS, SUPPORTED_RADIX_MARKS
from .theme import PALETTE, Palette
from .widgets.odometer import OdometerWidget

# Pause between loop steps on top of the animation itself.
LOOP_PAUSE_MS = 500


def random_step(current, decimals: int, as_float: bool, rng=random) -> str:
    """Next value of the random walk, formatted with ``decimals`` places."""
    increment = rng.random() * 99 - 49
    if not as_float:
        increment = int(increment)
    value = Decimal(str(current)) + Decimal(repr(increment))
    return f"{value:.{decimals}f}"


class _HelpLine(Static):
    """Key hints under the odometer."""

    def __init__(self, palette: Palette = PALETTE, **kwargs) -> None:
        super().__init__(**kwargs)
        self._palette = palette

    def render(self) -> Text:
        t = Text()
        for key, label in (
            ("a", "add"), ("d", "add decimal"), ("l", "loop"),
            ("r", "radix"), ("m", "decimal mark"), ("c", "currency"), ("q", "quit"),
        ):
            t.append(f" {key} ", style=f"bold {self._palette.cyan}")
            t.append(f"{label} ", style=f"dim {self._palette.text_dim}")
        return t


class _StatusLine(Static):
    """Bottom line with the current options."""

    DEFAULT_CSS = """
    _StatusLine {
        dock: bottom;
        height: 1;
        width: 100%;
        padding: 0 2;
    }
    """

    def __init__(self, palette: Palette = PALETTE, **kwargs) -> None:
        super().__init__(**kwargs)
        self._palette = palette

    def on_mount(self) -> None:
        self.styles.background = self._palette.surface

    def show(self, message: str) -> None:
        self.update(Text(message, style=f"dim {self._palette.text_dim}"))


class OdometerDemo(App):
    """Fullscreen odometer playground."""

    CSS = """
    #card {
        width: 48;
        height: auto;
        padding: 1 2;
    }
    """

    BINDINGS = [
        Binding("a", "add(False)", "Add"),
        Binding("d", "add(True)", "Add decimal"),
        Binding("l", "toggle_loop", "Loop"),
        Binding("r", "cycle_radix", "Radix"),
        Binding("m", "cycle_decimal", "Decimal mark"),
        Binding("c", "flip_currency", "Currency"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        fps: float = 60.0,
        palette: Palette = PALETTE,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._options = {
            "init_value": 123,
            "radix_mark": ",",
            "currency_symbol": "$",
            "commafy_leading_zeros": True,
            "min_integers_length": 6,
            "min_decimals_length": 2,
            **(options or {}),
        }
        self._fps = fps
        self._palette = palette
        self._loop_timer = None

    def compose(self) -> ComposeResult:
        with Middle():
            with Center():
                with Center(id="card"):
                    yield OdometerWidget(
                        self._options.get("init_value", 0),
                        self._options,
                        fps=self._fps,
                        palette=self._palette,
                        id="odometer",
                    )
                    yield Static("")
                    yield _HelpLine(self._palette)
        yield _StatusLine(self._palette, id="status")

    @property
    def odometer_widget(self) -> OdometerWidget:
        return self.query_one("#odometer", OdometerWidget)

    def on_mount(self) -> None:
        self.screen.styles.background = self._palette.bg
        card = self.query_one("#card")
        card.styles.background = self._palette.surface
        card.styles.border = ("round", self._palette.border)
        self._show_options()

    def _show_options(self) -> None:
        cfg = self.odometer_widget.odometer.get_current_options()
        radix = repr(cfg.radix_mark) if cfg.radix_mark else "none"
        self.query_one("#status", _StatusLine).show(
            f"radix {radix} . decimal {cfg.decimal_mark!r} . currency {cfg.currency_position}"
            + (" . looping" if self._loop_timer else "")
        )

    def action_add(self, as_float: bool = False) -> None:
        widget = self.odometer_widget
        decimals = widget.odometer.config.min_decimals_length
        widget.set_value(random_step(widget.value, decimals, as_float))

    def action_toggle_loop(self) -> None:
        if self._loop_timer:
            self._loop_timer.stop()
            self._loop_timer = None
        else:
            period = (self.odometer_widget.odometer.config.animation_duration_ms + LOOP_PAUSE_MS) / 1000
            self.action_add(True)
            self._loop_timer = self.set_interval(period, lambda: self.action_add(True))
        self._show_options()

    def action_cycle_radix(self) -> None:
        odometer = self.odometer_widget.odometer
        marks = [m for m in SUPPORTED_RADIX_MARKS if m != odometer.config.decimal_mark]
        current = odometer.config.radix_mark
        odometer.set_radix_mark(marks[(marks.index(current) + 1) % len(marks)])
        self._show_options()

    def action_cycle_decimal(self) -> None:
        odometer = self.odometer_widget.odometer
        current = odometer.config.decimal_mark
        nxt = SUPPORTED_DECIMAL_MARKS[(SUPPORTED_DECIMAL_MARKS.index(current) + 1) % 2]
        if nxt == odometer.config.radix_mark:
            # Swap the two marks through an empty radix mark.
            odometer.set_radix_mark("")
            odometer.set_decimal_mark(nxt)
            odometer.set_radix_mark(current)
        else:
            odometer.set_decimal_mark(nxt)
        self._show_options()

    def action_flip_currency(self) -> None:
        odometer = self.odometer_widget.odometer
        position = "end" if odometer.config.currency_position == "start" else "start"
        odometer.set_currency_position(position)
        self._show_options()
