"""Tests for odometer.options."""

import itertools

import pytest

from odometer.easing import ease_out_cubic, ease_out_quad, linear
from odometer.errors import ConfigurationError
from odometer.options import (
    DEFAULT_DURATION_MS,
    SUPPORTED_DECIMAL_MARKS,
    SUPPORTED_RADIX_MARKS,
    OdometerConfig,
    config_from_options,
    flag_or_default,
    validate_marks,
)


def test_defaults():
    cfg, init = config_from_options()
    assert cfg == OdometerConfig()
    assert cfg.radix_mark == ""
    assert cfg.decimal_mark == "."
    assert cfg.currency_position == "start"
    assert cfg.min_integers_length == 1
    assert cfg.min_decimals_length == 0
    assert cfg.animation_duration_ms == DEFAULT_DURATION_MS
    assert cfg.easing is ease_out_quad
    assert init == 0


def test_camel_case_keys():
    cfg, init = config_from_options({
        "initValue": 123,
        "radixMark": ",",
        "currencySymbol": "$",
        "currencyPosition": "END",
        "commafyLeadingZeros": True,
        "minIntegersLength": 6,
        "minDecimalsLength": 2,
        "animationDurationInMs": 2500,
        "animateFunction": linear,
    })
    assert init == 123
    assert cfg.radix_mark == ","
    assert cfg.currency_symbol == "$"
    assert cfg.currency_position == "end"
    assert cfg.commafy_leading_zeros is True
    assert cfg.min_integers_length == 6
    assert cfg.min_decimals_length == 2
    assert cfg.animation_duration_ms == 2500
    assert cfg.easing is linear


def test_overrides_win():
    cfg, _ = config_from_options({"radix_mark": ","}, radix_mark="'")
    assert cfg.radix_mark == "'"


@pytest.mark.parametrize("field,value,expected", [
    ("min_integers_length", 0, 1),
    ("min_integers_length", -3, 1),
    ("min_integers_length", "abc", 1),
    ("min_integers_length", "4", 4),
    ("min_decimals_length", -1, 0),
    ("min_decimals_length", None, 0),
    ("animation_duration_ms", 0, DEFAULT_DURATION_MS),
    ("animation_duration_ms", "fast", DEFAULT_DURATION_MS),
    ("currency_position", "middle", "start"),
])
def test_invalid_values_fall_back(field, value, expected):
    cfg, _ = config_from_options({field: value})
    assert getattr(cfg, field) == expected


def test_easing_by_name():
    cfg, _ = config_from_options({"easing": "ease_out_cubic"})
    assert cfg.easing is ease_out_cubic
    cfg, _ = config_from_options({"easing": "bouncy"})
    assert cfg.easing is ease_out_quad


def test_unknown_keys_ignored():
    cfg, _ = config_from_options({"colour": "red"})
    assert cfg == OdometerConfig()


@pytest.mark.parametrize("radix", ["x", "_", ";;"])
def test_unsupported_radix_mark(radix):
    with pytest.raises(ConfigurationError, match="Unsupported radixMark"):
        config_from_options({"radix_mark": radix})


def test_unsupported_decimal_mark():
    with pytest.raises(ConfigurationError, match="Unsupported decimalMark"):
        config_from_options({"decimal_mark": "'"})


@pytest.mark.parametrize(
    "radix,decimal",
    [(r, d) for r, d in itertools.product(SUPPORTED_RADIX_MARKS, SUPPORTED_DECIMAL_MARKS) if r == d],
)
def test_equal_marks_always_rejected(radix, decimal):
    with pytest.raises(ConfigurationError, match="equal"):
        validate_marks(radix, decimal)
    with pytest.raises(ConfigurationError):
        config_from_options({"radix_mark": radix, "decimal_mark": decimal})


def test_radix_dot_conflicts_with_default_decimal_mark():
    with pytest.raises(ConfigurationError):
        config_from_options({"radix_mark": "."})


@pytest.mark.parametrize(
    "radix,decimal",
    [(r, d) for r, d in itertools.product(SUPPORTED_RADIX_MARKS, SUPPORTED_DECIMAL_MARKS) if r != d],
)
def test_distinct_marks_accepted(radix, decimal):
    cfg, _ = config_from_options({"radix_mark": radix, "decimal_mark": decimal})
    assert (cfg.radix_mark, cfg.decimal_mark) == (radix, decimal)


def test_config_is_frozen():
    cfg = OdometerConfig()
    with pytest.raises(AttributeError):
        cfg.radix_mark = ","


def test_with_changes_and_to_options():
    cfg = OdometerConfig().with_changes(radix_mark=",")
    assert cfg.radix_mark == ","
    opts = cfg.to_options()
    assert opts["radix_mark"] == ","
    assert opts["easing"] == "ease_out_quad"


@pytest.mark.parametrize("raw,expected", [
    ("false", False),
    ("False", False),
    ("no", False),
    ("0", False),
    ("true", True),
    (" YES ", True),
    ("on", True),
    ("maybe", False),
    (None, False),
    (1, True),
    (0, False),
])
def test_flag_parsing(raw, expected):
    assert flag_or_default(raw) is expected


def test_string_false_does_not_enable_commafy():
    cfg, _ = config_from_options({"commafyLeadingZeros": "false"})
    assert cfg.commafy_leading_zeros is False
    cfg, _ = config_from_options({"commafy_leading_zeros": "true"})
    assert cfg.commafy_leading_zeros is True
