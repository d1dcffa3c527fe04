"""Odometer formatting and animation options.

``OdometerConfig`` is immutable: a transition reads one snapshot, and the
odometer's setters swap in a new instance between transitions.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from .easing import EasingFunction, ease_out_quad, get_easing
from .errors import ConfigurationError

_log = logging.getLogger(__name__)

# See https://docs.oracle.com/cd/E19455-01/806-0169/overview-9/index.html
SUPPORTED_RADIX_MARKS = ("", ",", "'", "˙", ".", " ")
SUPPORTED_DECIMAL_MARKS = (".", ",")
CURRENCY_POSITIONS = ("start", "end")

DEFAULT_DURATION_MS = 1800

# camelCase option keys -> field names
_ALIASES = {
    "initValue": "init_value",
    "radixMark": "radix_mark",
    "decimalMark": "decimal_mark",
    "currencySymbol": "currency_symbol",
    "currencyPosition": "currency_position",
    "commafyLeadingZeros": "commafy_leading_zeros",
    "minIntegersLength": "min_integers_length",
    "minDecimalsLength": "min_decimals_length",
    "animationDurationMs": "animation_duration_ms",
    "animationDurationInMs": "animation_duration_ms",
    "easingFunction": "easing",
    "animateFunction": "easing",
}


@dataclass(frozen=True)
class OdometerConfig:
    """Formatting and animation settings for one odometer."""

    radix_mark: str = ""
    decimal_mark: str = "."
    currency_symbol: str = ""
    currency_position: str = "start"
    commafy_leading_zeros: bool = False
    min_integers_length: int = 1
    min_decimals_length: int = 0
    animation_duration_ms: float = DEFAULT_DURATION_MS
    easing: EasingFunction = field(default=ease_out_quad, compare=False)

    @property
    def marks(self) -> Tuple[str, ...]:
        """Non-empty mark characters in use."""
        return tuple(m for m in (self.radix_mark, self.decimal_mark) if m)

    def with_changes(self, **changes) -> "OdometerConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_options(self) -> Dict[str, Any]:
        """Plain-dict view, easing reported by function name."""
        return {
            "radix_mark": self.radix_mark,
            "decimal_mark": self.decimal_mark,
            "currency_symbol": self.currency_symbol,
            "currency_position": self.currency_position,
            "commafy_leading_zeros": self.commafy_leading_zeros,
            "min_integers_length": self.min_integers_length,
            "min_decimals_length": self.min_decimals_length,
            "animation_duration_ms": self.animation_duration_ms,
            "easing": getattr(self.easing, "__name__", repr(self.easing)),
        }


def validate_marks(radix_mark: Optional[str], decimal_mark: Optional[str]) -> None:
    """Reject unsupported marks and a radix mark equal to the decimal mark.

    Raises:
        ConfigurationError: with a message suitable for display.
    """
    if radix_mark and radix_mark not in SUPPORTED_RADIX_MARKS:
        raise ConfigurationError(f"Unsupported radixMark: '{radix_mark}'")
    if decimal_mark and decimal_mark not in SUPPORTED_DECIMAL_MARKS:
        raise ConfigurationError(f"Unsupported decimalMark: '{decimal_mark}'")
    if radix_mark and decimal_mark and radix_mark == decimal_mark:
        raise ConfigurationError("Error: radixMark and decimalMark are equal")


def radix_mark_or_default(mark: Optional[str]) -> str:
    return mark if mark in SUPPORTED_RADIX_MARKS else SUPPORTED_RADIX_MARKS[0]


def decimal_mark_or_default(mark: Optional[str]) -> str:
    return mark if mark in SUPPORTED_DECIMAL_MARKS else SUPPORTED_DECIMAL_MARKS[0]


def currency_position_or_default(position: Optional[str]) -> str:
    position = (position or "").strip().lower()
    return position if position in CURRENCY_POSITIONS else CURRENCY_POSITIONS[0]


def min_integers_or_default(length) -> int:
    try:
        length = int(length)
    except (TypeError, ValueError):
        return 1
    return length if length > 0 else 1


def min_decimals_or_default(length) -> int:
    try:
        length = int(length)
    except (TypeError, ValueError):
        return 0
    return length if length > -1 else 0


_TRUE_WORDS = ("1", "true", "yes", "on")
_FALSE_WORDS = ("0", "false", "no", "off", "")


def flag_or_default(value, default: bool = False) -> bool:
    """Read a boolean option; strings from YAML or the environment are parsed."""
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        _log.warning("unrecognized boolean %r, using %s", value, default)
        return default
    if value is None:
        return default
    return bool(value)


def duration_or_default(duration) -> float:
    try:
        duration = float(duration)
    except (TypeError, ValueError):
        return DEFAULT_DURATION_MS
    return duration if duration > 0 else DEFAULT_DURATION_MS


def easing_or_default(easing) -> EasingFunction:
    if callable(easing):
        return easing
    if isinstance(easing, str):
        try:
            return get_easing(easing)
        except KeyError:
            _log.warning("unknown easing %r, using ease-out-quad", easing)
    return ease_out_quad


def _canonical_keys(options: Mapping[str, Any]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in options.items():
        name = _ALIASES.get(key, key)
        if name != "init_value" and name not in OdometerConfig.__dataclass_fields__:
            _log.debug("ignoring unknown odometer option %r", key)
            continue
        result[name] = value
    return result


def config_from_options(
    options: Optional[Mapping[str, Any]] = None, **overrides
) -> Tuple[OdometerConfig, Any]:
    """Build a validated config from a user options record.

    Accepts snake_case field names and the widget's camelCase option keys.
    Unsupported values fall back to defaults, except for marks: unsupported
    or equal marks raise.

    Returns:
        ``(config, init_value)``.

    Raises:
        ConfigurationError: for unsupported or conflicting marks.
    """
    opts = _canonical_keys({**(options or {}), **overrides})
    validate_marks(opts.get("radix_mark"), opts.get("decimal_mark"))

    config = OdometerConfig(
        radix_mark=radix_mark_or_default(opts.get("radix_mark")),
        decimal_mark=decimal_mark_or_default(opts.get("decimal_mark")),
        currency_symbol=str(opts.get("currency_symbol") or ""),
        currency_position=currency_position_or_default(opts.get("currency_position")),
        commafy_leading_zeros=flag_or_default(opts.get("commafy_leading_zeros")),
        min_integers_length=min_integers_or_default(opts.get("min_integers_length", 1)),
        min_decimals_length=min_decimals_or_default(opts.get("min_decimals_length", 0)),
        animation_duration_ms=duration_or_default(
            opts.get("animation_duration_ms", DEFAULT_DURATION_MS)
        ),
        easing=easing_or_default(opts.get("easing")),
    )
    # A supported but defaulted mark can still collide with the other one.
    validate_marks(config.radix_mark, config.decimal_mark)
    return config, opts.get("init_value", 0)
