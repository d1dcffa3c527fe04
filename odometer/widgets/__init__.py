"""Odometer TUI widgets -- Textual components."""

from .odometer import OdometerWidget, TextualFrameClock

__all__ = [
    "OdometerWidget",
    "TextualFrameClock",
]
