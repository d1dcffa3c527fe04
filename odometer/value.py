"""Numeric value parsing.

Splits a number (or numeric string) into sign, integer digits, decimal digits
and exponent marker. Digits are taken from the value's text, never from
arithmetic, so ``"12.50"`` keeps its trailing zero and nothing is rounded.
"""

import math
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from .errors import ParseError

Number = Union[int, float, Decimal]

_GRAMMAR = re.compile(r"(-?)(\d*)(\.?)(\d*)([eE][-+]?\d+)?")


@dataclass(frozen=True)
class NumericValue:
    """A number decomposed into its textual parts."""

    value: Number
    is_negative: bool
    integer_digits: str
    has_dot: bool
    decimal_digits: str
    exponent: Optional[str] = None


def coerce_number(value) -> Number:
    """Turn caller input into a number.

    Strings become ``Decimal`` so the digits typed by the caller survive the
    round trip into :func:`parse_value`.
    """
    if isinstance(value, bool):
        raise ParseError(value)
    if isinstance(value, (int, Decimal)):
        if isinstance(value, Decimal) and not value.is_finite():
            raise ParseError(value)
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ParseError(value)
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            number = Decimal(text)
        except InvalidOperation:
            raise ParseError(value) from None
        if not number.is_finite():
            raise ParseError(value)
        return number
    raise ParseError(value)


def number_text(value) -> str:
    """Positional text for a number (no exponent for ints, floats, Decimals)."""
    if isinstance(value, bool):
        raise ParseError(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ParseError(value)
        if value.is_integer():
            return str(int(value))
        text = repr(value)
        if "e" in text:
            text = format(Decimal(text), "f")
        return text
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ParseError(value)
        return format(value, "f")
    return str(value).strip()


def number_key(value) -> Decimal:
    """Comparison key: inputs printing the same digits compare equal.

    >>> number_key(0.1) == number_key("0.1")
    True
    """
    return Decimal(number_text(coerce_number(value)))


def parse_value(value) -> NumericValue:
    """Parse ``value`` with the grammar ``(-?)(digits)(.?)(digits)(exponent?)``.

    Raises:
        ParseError: when the text does not match or carries no digit at all.
    """
    text = number_text(value)
    match = _GRAMMAR.fullmatch(text)
    if not match or not (match.group(2) or match.group(4)):
        raise ParseError(value)

    sign, integer_digits, dot, decimal_digits, exponent = match.groups()

    if isinstance(value, (int, float, Decimal)):
        number = value
    else:
        number = coerce_number(text)

    return NumericValue(
        value=number,
        is_negative=bool(sign),
        integer_digits=integer_digits,
        has_dot=bool(dot),
        decimal_digits=decimal_digits,
        exponent=exponent,
    )
