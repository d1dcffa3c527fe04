"""Tests for the odometer theme system."""

import pytest

from odometer.theme import PALETTE, THEMES, Palette, get_palette, style_for


class TestPalette:
    def test_defaults(self):
        p = Palette()
        assert p.bg == "#0d1117"
        assert p.error == "#e55a6e"
        assert p.rolling == p.cyan

    def test_frozen(self):
        p = Palette()
        with pytest.raises(AttributeError):
            p.bg = "#ffffff"


class TestThemes:
    def test_default_theme_registered(self):
        assert THEMES["deep-stream"] is PALETTE

    def test_get_palette(self):
        assert get_palette("paper").bg == "#fafafa"

    def test_unknown_theme_falls_back(self):
        assert get_palette("neon") is PALETTE


class TestStyleFor:
    @pytest.mark.parametrize("kind", ["digit", "rolling", "mark", "currency", "sign", "exiting", "error"])
    def test_known_kinds_use_palette(self, kind):
        assert getattr(PALETTE, kind) in style_for(kind)

    def test_palette_is_respected(self):
        paper = THEMES["paper"]
        assert style_for("rolling", paper) == f"bold {paper.rolling}"

    def test_unknown_kind(self):
        assert style_for("sparkle") == PALETTE.text_primary
