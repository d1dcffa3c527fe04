"""Symbol matrix: what every character position shows during a transition.

Each position of the normalized strings becomes either a static symbol or a
rotating column of digits. Once a digit differs between old and new value,
every digit to its right rolls too, and each further rolling column spins one
more full revolution than the previous one, which gives the cascading roll.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .normalize import NormalizedValue
from .options import OdometerConfig
from .value import number_key

DIGITS = "0123456789"


class Direction(str, Enum):
    """Rotation direction shared by every column of one matrix."""

    ASC = "asc"
    DESC = "desc"


class Role(str, Enum):
    """What a column stands for in the printed number."""

    INTEGER = "integer"
    RADIX = "radix"
    DECIMAL_MARK = "decimal_mark"
    DECIMAL = "decimal"


@dataclass(frozen=True)
class StaticColumn:
    """A mark, or a digit that stays put."""

    symbol: str
    role: Role = Role.INTEGER
    magnitude: Optional[int] = None

    @property
    def final_symbol(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class RotatingColumn:
    """Digits a reel rolls through, old digit first, new digit last."""

    sequence: tuple[str, ...]
    direction: Direction = Direction.ASC
    role: Role = Role.INTEGER
    magnitude: Optional[int] = None

    @property
    def final_symbol(self) -> str:
        return self.sequence[-1]

    @property
    def is_animatable(self) -> bool:
        return len(self.sequence) > 1


SymbolColumn = Union[StaticColumn, RotatingColumn]


@dataclass(frozen=True)
class SymbolMatrix:
    """Ordered columns of one transition plus its direction."""

    columns: tuple[SymbolColumn, ...]
    direction: Direction

    @property
    def is_decreasing(self) -> bool:
        return self.direction is Direction.DESC

    @property
    def rotating_count(self) -> int:
        return sum(1 for c in self.columns if isinstance(c, RotatingColumn))

    def final_text(self) -> str:
        return "".join(c.final_symbol for c in self.columns)


def rotation_sequence(start, end, loops: int = 0, direction: Direction = Direction.ASC) -> tuple[str, ...]:
    """Digits from ``start`` to ``end`` stepping mod 10 in ``direction``.

    Both ends are included and ``end`` is passed ``loops`` extra times, so
    every loop adds one full revolution.

    >>> rotation_sequence(3, 7)
    ('3', '4', '5', '6', '7')
    >>> rotation_sequence(7, 3, 0, Direction.DESC)
    ('7', '6', '5', '4', '3')
    >>> rotation_sequence(8, 1, 1)[:4]
    ('8', '9', '0', '1')
    """
    digit = int(start) % 10
    end = int(end) % 10
    step = -1 if direction is Direction.DESC else 1

    digits = []
    passes = 0
    while True:
        digits.append(DIGITS[digit])
        if digit == end:
            passes += 1
            if passes > loops:
                break
        digit = (digit + step) % 10
    return tuple(digits)


def _roles(norm: NormalizedValue) -> list[tuple[Role, Optional[int]]]:
    """Role and magnitude for each body position of ``norm``."""
    integer = norm.integer_digits
    exponent = sum(1 for ch in integer if ch in DIGITS) - 1

    roles: list[tuple[Role, Optional[int]]] = []
    for ch in integer:
        if ch in DIGITS:
            roles.append((Role.INTEGER, exponent))
            exponent -= 1
        else:
            roles.append((Role.RADIX, None))

    if norm.decimal_digits:
        roles.append((Role.DECIMAL_MARK, None))
        roles.extend((Role.DECIMAL, -(i + 1)) for i in range(len(norm.decimal_digits)))
    return roles


def build_matrix(old: NormalizedValue, new: NormalizedValue, cfg: OdometerConfig) -> SymbolMatrix:
    """Build the symbol columns for a transition from ``old`` to ``new``.

    Marks are static. Leading digits equal in both values stay static until
    the first difference; from there on every digit rolls, with ``loops``
    equal to the number of rolling columns emitted before it.
    """
    direction = Direction.DESC if number_key(new.value) < number_key(old.value) else Direction.ASC
    old_body, new_body = old.body, new.body
    if len(old_body) != len(new_body):
        raise ValueError(f"values are not isometric: {old_body!r} / {new_body!r}")

    columns: list[SymbolColumn] = []
    loops = 0
    changed = False
    for (role, magnitude), old_ch, new_ch in zip(_roles(new), old_body, new_body):
        if not changed and old_ch != new_ch:
            changed = True

        if new_ch in cfg.marks or (not changed and old_ch == new_ch):
            columns.append(StaticColumn(new_ch, role, magnitude))
            continue

        columns.append(RotatingColumn(
            rotation_sequence(old_ch, new_ch, loops, direction),
            direction,
            role,
            magnitude,
        ))
        loops += 1

    return SymbolMatrix(tuple(columns), direction)
