"""Tests for the demo app and the odometer widget."""

import asyncio

from textual.color import Color

from odometer.app import OdometerDemo, random_step
from odometer.theme import THEMES
from odometer.widgets.odometer import OdometerWidget


class _FixedRandom:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


class TestRandomStep:
    def test_integer_step(self):
        assert random_step(123, 2, False, rng=_FixedRandom(0.75)) == "148.00"

    def test_decimal_step(self):
        assert random_step(123, 2, True, rng=_FixedRandom(0.5)) == "123.50"

    def test_negative_step(self):
        assert random_step("10.25", 2, True, rng=_FixedRandom(0.0)) == "-38.75"

    def test_no_decimals(self):
        assert random_step(0, 0, False, rng=_FixedRandom(1.0)) == "50"


def test_widget_starts_on_initial_value():
    widget = OdometerWidget(42, {"min_integers_length": 3})
    assert widget.value == 42
    assert widget.render().plain == "042"


def test_demo_keys(monkeypatch):
    monkeypatch.setattr("odometer.app.random.random", lambda: 0.75)

    async def scenario():
        app = OdometerDemo()
        async with app.run_test() as pilot:
            odometer = app.odometer_widget.odometer
            assert odometer.config.radix_mark == ","

            await pilot.press("r")
            assert odometer.config.radix_mark == "'"

            await pilot.press("m")
            assert odometer.config.decimal_mark == ","

            await pilot.press("c")
            assert odometer.config.currency_position == "end"

            await pilot.press("a")
            assert app.odometer_widget.value == 148
            await pilot.press("q")

    asyncio.run(scenario())


def test_demo_colors_come_from_palette():
    paper = THEMES["paper"]

    async def scenario():
        app = OdometerDemo(palette=paper)
        async with app.run_test():
            card = app.query_one("#card")
            assert app.screen.styles.background == Color.parse(paper.bg)
            assert card.styles.background == Color.parse(paper.surface)
            assert card.styles.border_top[1] == Color.parse(paper.border)

    asyncio.run(scenario())
