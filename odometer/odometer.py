"""Odometer: rolls a rendered number from one value to the next.

Lifecycle:
    An ``Odometer`` is built once with a renderer, options and a frame clock.
    Its state (current value, configuration, live reels, epoch) changes only
    through ``set()`` and the ``set_*`` setters.

Each accepted ``set()`` call:
    parse -> normalize -> build matrix -> rebuild the render tree -> roll every
    reel concurrently -> once all have settled, retire leading zero and
    grouping reels that the settled value no longer needs.

The new value is committed before the first frame, so calling ``set()``
again mid-roll is fine: the newer transition bumps the epoch, which cancels
the older reels and their pending removals.
"""

import asyncio
import logging
from concurrent.futures import Future
from typing import Any, Callable, Mapping, Optional

from .clock import AsyncioFrameClock, DeferredAction, FrameClock
from .errors import ConfigurationError, OdometerError
from .matrix import Role, StaticColumn, SymbolMatrix, build_matrix
from .normalize import NormalizedValue, normalize
from .options import (
    OdometerConfig,
    config_from_options,
    currency_position_or_default,
    decimal_mark_or_default,
    duration_or_default,
    easing_or_default,
    flag_or_default,
    min_decimals_or_default,
    min_integers_or_default,
    radix_mark_or_default,
)
from .reel import Reel
from .render import Renderer, column_hints
from .value import Number, coerce_number, number_key, parse_value

_log = logging.getLogger(__name__)

# Grace period between flagging a reel as exiting and detaching it.
REMOVAL_DELAY_MS = 400


class Transition:
    """One accepted ``set()`` call: its reels and their joint completion."""

    def __init__(
        self,
        epoch: int,
        old: NormalizedValue,
        new: NormalizedValue,
        matrix: SymbolMatrix,
        config: OdometerConfig,
    ) -> None:
        self.epoch = epoch
        self.old = old
        self.new = new
        self.matrix = matrix
        self.config = config
        self.reels: list[Reel] = []
        self.removals: list[DeferredAction] = []
        self.settled: Future = Future()

    @property
    def done(self) -> bool:
        return self.settled.done()

    @property
    def cancelled(self) -> bool:
        return self.settled.cancelled()

    def add_done_callback(self, fn: Callable[[Future], None]) -> None:
        self.settled.add_done_callback(fn)

    def cancel(self) -> None:
        """Stop every reel and pending removal of this transition."""
        for reel in self.reels:
            reel.cancel()
        for removal in self.removals:
            removal.cancel()
        self.settled.cancel()

    async def wait(self) -> bool:
        """Wait on the running loop; True if settled, False if superseded."""
        loop = asyncio.get_running_loop()
        waiter = loop.create_future()

        def _resolve(ok: bool) -> None:
            if not waiter.done():
                waiter.set_result(ok)

        self.settled.add_done_callback(
            lambda fut: loop.call_soon_threadsafe(_resolve, not fut.cancelled())
        )
        return await waiter


class Odometer:
    """Mechanical-odometer display of a number.

    Args:
        renderer: Render target the reels are drawn into.
        options: Options record (snake_case or the widget's camelCase keys),
            including ``init_value``.
        clock: Frame clock; defaults to the running asyncio loop.
        **overrides: Options given as keyword arguments.

    Raises:
        ConfigurationError: unsupported or equal radix / decimal marks. The
            renderer shows the message before the error propagates.
    """

    def __init__(
        self,
        renderer: Renderer,
        options: Optional[Mapping[str, Any]] = None,
        *,
        clock: Optional[FrameClock] = None,
        **overrides,
    ) -> None:
        self._renderer = renderer
        self._clock = clock or AsyncioFrameClock()
        self._epoch = 0
        self._transition: Optional[Transition] = None
        self._reels: list[Reel] = []
        self._currency_node = None

        try:
            self._config, init_value = config_from_options(options, **overrides)
        except ConfigurationError as exc:
            self._fail(exc)

        init = coerce_number(0 if init_value is None else init_value)
        self._current_value: Number = init
        self._current_text = ""
        self._render(parse_value(init), parse_value(init))

    # -- Queries ----------------------------------------------------------

    @property
    def config(self) -> OdometerConfig:
        return self._config

    @property
    def current_value(self) -> Number:
        return self._current_value

    @property
    def current_text(self) -> str:
        """Isometric string of the committed value, as last laid out."""
        return self._current_text

    @property
    def reels(self) -> tuple[Reel, ...]:
        return tuple(self._reels)

    @property
    def transition(self) -> Optional[Transition]:
        return self._transition

    @property
    def epoch(self) -> int:
        return self._epoch

    def get_current_value(self) -> Number:
        return self._current_value

    def get_current_options(self) -> OdometerConfig:
        """A copy of the live configuration."""
        return self._config.with_changes()

    # -- Transitions ------------------------------------------------------

    def set(self, value) -> Optional[Transition]:
        """Roll to ``value``; return immediately with the transition.

        Returns None, without touching the display, when ``value`` equals
        the current value.

        Raises:
            ParseError: ``value`` is not a number; nothing is committed.
        """
        new_value = coerce_number(value)
        if number_key(new_value) == number_key(self._current_value):
            return None

        old = parse_value(self._current_value)
        new = parse_value(new_value)
        transition = self._render(old, new)

        self._current_value = new_value
        _log.debug(
            "odometer %s -> %s (%d rolling reels)",
            transition.old.isometric_str,
            transition.new.isometric_str,
            transition.matrix.rotating_count,
        )
        return transition

    def _render(self, old, new) -> Transition:
        cfg = self._config
        norm_old, norm_new = normalize(old, new, cfg)
        matrix = build_matrix(norm_old, norm_new, cfg)

        if self._transition is not None:
            if not self._transition.done:
                _log.debug("superseding transition %d", self._transition.epoch)
            self._transition.cancel()
        self._epoch += 1
        transition = Transition(self._epoch, norm_old, norm_new, matrix, cfg)
        self._transition = transition
        self._current_text = norm_new.isometric_str

        self._build_tree(transition)
        futures = [
            reel.animate(self._clock, cfg.easing, cfg.animation_duration_ms)
            for reel in transition.reels
        ]
        self._join(transition, futures)
        return transition

    def _build_tree(self, transition: Transition) -> None:
        r = self._renderer
        cfg = transition.config
        r.clear()

        self._currency_node = None
        if cfg.currency_symbol:
            self._currency_node = r.create_symbol_node(StaticColumn(cfg.currency_symbol), ("currency",))
            r.attach(None, self._currency_node)
            r.set_currency_position(cfg.currency_position)

        if transition.new.is_negative:
            r.attach(None, r.create_symbol_node(StaticColumn("-"), ("number-sign",)))

        container = r.create_container("reels-reversed" if transition.matrix.is_decreasing else "reels")
        r.attach(None, container)

        epoch = transition.epoch
        for column in transition.matrix.columns:
            node = r.create_symbol_node(column, column_hints(column))
            r.attach(container, node)
            transition.reels.append(
                Reel(column, node, r, epoch, is_current=lambda: epoch == self._epoch)
            )
        self._reels = transition.reels

    def _join(self, transition: Transition, futures: list[Future]) -> None:
        """Run cleanup once every reel future is done (fan-out / fan-in)."""
        pending = len(futures)

        def _all_done() -> None:
            if transition.epoch != self._epoch or any(f.cancelled() for f in futures):
                transition.settled.cancel()
                return
            self._prune(transition)
            if not transition.settled.done():
                transition.settled.set_result(transition)

        if not futures:
            _all_done()
            return

        def _one_done(_future: Future) -> None:
            nonlocal pending
            pending -= 1
            if pending == 0:
                _all_done()

        for future in futures:
            future.add_done_callback(_one_done)

    # -- Cleanup ----------------------------------------------------------

    def _prune(self, transition: Transition) -> None:
        """Retire leading zero reels and grouping marks the value no longer needs."""
        cfg = transition.config
        digit_reels = [r for r in transition.reels if r.column.role is Role.INTEGER]
        radix_reels = [r for r in transition.reels if r.column.role is Role.RADIX]
        digits = "".join(r.symbol for r in digit_reels)

        remaining = len(digits)
        idx = 0
        while remaining > cfg.min_integers_length and digits[idx] == "0":
            self._retire(transition, digit_reels[idx])
            idx += 1
            remaining -= 1

        groups = len(radix_reels)
        first = 0
        while groups and 3 * groups + 1 > remaining:
            self._retire(transition, radix_reels[first])
            first += 1
            groups -= 1

        if idx or first:
            _log.debug("retiring %d leading zeros and %d grouping marks", idx, first)

    def _retire(self, transition: Transition, reel: Reel) -> None:
        node = reel.node
        renderer = self._renderer
        renderer.mark_exiting(node)
        transition.removals.append(
            DeferredAction(self._clock, REMOVAL_DELAY_MS, lambda: renderer.remove(node))
        )

    # -- Setters ----------------------------------------------------------

    def _fail(self, error: OdometerError):
        _log.warning("%s", error)
        self._renderer.show_error(str(error))
        raise error

    def _live_marks(self, role: Role) -> list:
        return [r.node for r in self._reels if r.column.role is role]

    def set_radix_mark(self, character: str = "") -> None:
        """Switch the grouping mark; unsupported characters fall back to none."""
        mark = radix_mark_or_default((character or "")[:1])
        if mark and mark == self._config.decimal_mark:
            self._fail(ConfigurationError("Error: radixMark and decimalMark are equal"))
        self._config = self._config.with_changes(radix_mark=mark)
        for node in self._live_marks(Role.RADIX):
            self._renderer.set_text(node, mark)

    def set_decimal_mark(self, character: str = ".") -> None:
        """Switch the decimal mark; unsupported characters fall back to '.'."""
        mark = decimal_mark_or_default((character or "")[:1])
        if mark == self._config.radix_mark:
            self._fail(ConfigurationError("Error: radixMark and decimalMark are equal"))
        self._config = self._config.with_changes(decimal_mark=mark)
        for node in self._live_marks(Role.DECIMAL_MARK):
            self._renderer.set_text(node, mark)

    def set_leading_zeros_length(self, length: int = 0) -> None:
        self._config = self._config.with_changes(min_integers_length=min_integers_or_default(length))

    def set_trailing_zeros_length(self, length: int = 0) -> None:
        self._config = self._config.with_changes(min_decimals_length=min_decimals_or_default(length))

    def set_currency_position(self, position: str = "start") -> None:
        position = currency_position_or_default(position)
        self._config = self._config.with_changes(currency_position=position)
        self._renderer.set_currency_position(position)

    def set_currency_symbol(self, symbol: str = "") -> None:
        """Takes effect on the next transition."""
        self._config = self._config.with_changes(currency_symbol=symbol or "")

    def set_commafy_leading_zeros(self, enabled: bool = False) -> None:
        self._config = self._config.with_changes(commafy_leading_zeros=flag_or_default(enabled))

    def set_animation_duration(self, duration_ms: float) -> None:
        self._config = self._config.with_changes(animation_duration_ms=duration_or_default(duration_ms))

    def set_easing(self, easing) -> None:
        """Accepts an easing function or the name of a built-in one."""
        self._config = self._config.with_changes(easing=easing_or_default(easing))
