"""Odometer - rolling-reel numeric display."""

__version__ = "0.1.0"

from .clock import AsyncioFrameClock, DeferredAction, FrameClock, ManualFrameClock
from .errors import ConfigurationError, OdometerError, ParseError
from .matrix import Direction, RotatingColumn, StaticColumn, SymbolMatrix, build_matrix, rotation_sequence
from .normalize import NormalizedValue, normalize
from .odometer import Odometer, Transition
from .options import OdometerConfig
from .reel import Reel, ReelStatus
from .render import Renderer, TextRenderer
from .value import NumericValue, parse_value

__all__ = [
    "AsyncioFrameClock",
    "DeferredAction",
    "FrameClock",
    "ManualFrameClock",
    "ConfigurationError",
    "OdometerError",
    "ParseError",
    "Direction",
    "RotatingColumn",
    "StaticColumn",
    "SymbolMatrix",
    "build_matrix",
    "rotation_sequence",
    "NormalizedValue",
    "normalize",
    "Odometer",
    "Transition",
    "OdometerConfig",
    "Reel",
    "ReelStatus",
    "Renderer",
    "TextRenderer",
    "NumericValue",
    "parse_value",
]
