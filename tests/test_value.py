"""Tests for odometer.value."""

from decimal import Decimal

import pytest

from odometer.errors import ParseError
from odometer.value import coerce_number, number_key, number_text, parse_value


def test_parse_integer():
    v = parse_value(123)
    assert v.value == 123
    assert v.is_negative is False
    assert v.integer_digits == "123"
    assert v.has_dot is False
    assert v.decimal_digits == ""
    assert v.exponent is None


def test_parse_negative_float():
    v = parse_value(-12.5)
    assert v.is_negative is True
    assert v.integer_digits == "12"
    assert v.has_dot is True
    assert v.decimal_digits == "5"


def test_parse_string_keeps_trailing_zeros():
    v = parse_value("12.50")
    assert v.decimal_digits == "50"
    assert v.value == Decimal("12.50")


def test_parse_leading_dot():
    v = parse_value(".5")
    assert v.integer_digits == ""
    assert v.decimal_digits == "5"


def test_parse_exponent_string():
    v = parse_value("1e+3")
    assert v.integer_digits == "1"
    assert v.exponent == "e+3"


def test_float_with_exponent_repr_is_positional():
    assert number_text(1e-7) == "0.0000001"
    assert number_text(1e21) == "1" + "0" * 21


def test_integral_float_has_no_dot():
    assert number_text(5.0) == "5"
    assert parse_value(5.0).has_dot is False


@pytest.mark.parametrize("bad", ["abc", "", "-", ".", "1.2.3", "12a", True, float("nan"), float("inf")])
def test_parse_failures(bad):
    with pytest.raises(ParseError):
        parse_value(bad)


def test_coerce_string_to_decimal():
    assert coerce_number(" 42.10 ") == Decimal("42.10")


def test_coerce_passes_numbers_through():
    assert coerce_number(7) == 7
    assert coerce_number(1.5) == 1.5


@pytest.mark.parametrize("bad", ["x1", "NaN", "Infinity", None, False, [1]])
def test_coerce_failures(bad):
    with pytest.raises(ParseError):
        coerce_number(bad)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_value("nope")


@pytest.mark.parametrize("a,b", [
    (0.1, "0.1"),
    (19.99, Decimal("19.99")),
    (8, 8.0),
    ("8", Decimal("8.00")),
])
def test_number_key_matches_equal_looking_inputs(a, b):
    assert number_key(a) == number_key(b)


def test_number_key_orders_values():
    assert number_key("0.1") < number_key(0.2)
    assert number_key(-1) < number_key("0")
