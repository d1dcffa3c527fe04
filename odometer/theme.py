"""Odometer theme: canonical color system for rendered reels.

All hex values live here. Renderers and the demo app read them from a Palette.
"""

from dataclasses import dataclass
from typing import Dict


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Palette:
    """Surface / text / functional color palette."""

    # Surfaces
    bg: str = "#0d1117"
    surface: str = "#121218"
    border: str = "#30363d"

    # Text hierarchy
    text_primary: str = "#c9d1d9"
    text_dim: str = "#6e7681"

    # Functional
    cyan: str = "#00d4e5"

    # Semantic aliases
    digit: str = "#e8e8f0"
    rolling: str = "#00d4e5"
    mark: str = "#6e7681"
    currency: str = "#e5c747"
    sign: str = "#e55a6e"
    exiting: str = "#363648"
    error: str = "#e55a6e"


PALETTE = Palette()

THEMES: Dict[str, Palette] = {
    "deep-stream": PALETTE,
    "paper": Palette(
        bg="#fafafa",
        surface="#ffffff",
        border="#d0d7de",
        text_primary="#1f2328",
        text_dim="#656d76",
        digit="#1f2328",
        rolling="#0969da",
        mark="#656d76",
        currency="#9a6700",
        sign="#cf222e",
        exiting="#afb8c1",
        error="#cf222e",
    ),
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def get_palette(name: str) -> Palette:
    """Look up a palette by theme name, falling back to the default."""
    return THEMES.get(name, PALETTE)


def style_for(kind: str, palette: Palette = PALETTE) -> str:
    """Rich style string for a node kind (digit, rolling, mark, ...)."""
    styles = {
        "digit": f"bold {palette.digit}",
        "rolling": f"bold {palette.rolling}",
        "mark": f"dim {palette.mark}",
        "currency": f"bold {palette.currency}",
        "sign": f"bold {palette.sign}",
        "exiting": f"dim {palette.exiting}",
        "error": f"bold {palette.error}",
    }
    return styles.get(kind, palette.text_primary)
