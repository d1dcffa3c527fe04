"""Isometric normalization of two numeric values.

Pads and groups an old and a new value so both print with the same width
and with their marks at the same positions, ready for a position-by-position
comparison.
"""

from dataclasses import dataclass

from .options import OdometerConfig
from .value import NumericValue


@dataclass(frozen=True)
class NormalizedValue(NumericValue):
    """A NumericValue padded and grouped to match its counterpart."""

    isometric_str: str = ""

    @property
    def body(self) -> str:
        """``isometric_str`` without the sign."""
        return self.isometric_str[1:] if self.is_negative else self.isometric_str


def zero_pad(text: str, length: int, side: str = "left") -> str:
    """Pad ``text`` with zeros up to ``length``.

    >>> zero_pad("123", 5)
    '00123'
    >>> zero_pad("123", 5, "right")
    '12300'
    """
    if side == "left":
        return text.rjust(length, "0")
    return text.ljust(length, "0")


def group_digits(digits: str, mark: str = ",") -> str:
    """Insert ``mark`` every three digits counting from the right.

    >>> group_digits("1234")
    '1,234'
    >>> group_digits("0000012")
    '0,000,012'
    """
    if not digits:
        return digits
    head = len(digits) % 3 or 3
    groups = [digits[:head]]
    groups.extend(digits[i:i + 3] for i in range(head, len(digits), 3))
    return mark.join(groups)


def _should_group(new: NumericValue, cfg: OdometerConfig) -> bool:
    if not cfg.radix_mark:
        return False
    if cfg.commafy_leading_zeros:
        return True
    natural = zero_pad(new.integer_digits, cfg.min_integers_length)
    return len(natural) > 3


def _assemble(value: NumericValue, integer: str, decimals: str, cfg: OdometerConfig) -> NormalizedValue:
    text = ("-" if value.is_negative else "") + integer
    if decimals:
        text += cfg.decimal_mark + decimals
    return NormalizedValue(
        value=value.value,
        is_negative=value.is_negative,
        integer_digits=integer,
        has_dot=bool(decimals),
        decimal_digits=decimals,
        exponent=value.exponent,
        isometric_str=text,
    )


def normalize(
    old: NumericValue, new: NumericValue, cfg: OdometerConfig
) -> tuple[NormalizedValue, NormalizedValue]:
    """Return ``(old, new)`` laid out identically under ``cfg``.

    Integer parts are left-padded, decimal parts right-padded with zeros.
    Both integer parts are grouped when the new value at its natural width
    spans a group boundary, or when ``commafy_leading_zeros`` is set.
    Decimal digits are padded, never rounded.
    """
    int_len = max(len(old.integer_digits), len(new.integer_digits), cfg.min_integers_length)
    old_int = zero_pad(old.integer_digits, int_len)
    new_int = zero_pad(new.integer_digits, int_len)

    dec_len = max(len(old.decimal_digits), len(new.decimal_digits), cfg.min_decimals_length)
    old_dec = zero_pad(old.decimal_digits, dec_len, "right")
    new_dec = zero_pad(new.decimal_digits, dec_len, "right")

    if _should_group(new, cfg):
        old_int = group_digits(old_int, cfg.radix_mark)
        new_int = group_digits(new_int, cfg.radix_mark)

    return _assemble(old, old_int, old_dec, cfg), _assemble(new, new_int, new_dec, cfg)
