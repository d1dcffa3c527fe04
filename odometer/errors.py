"""Exceptions raised by the odometer engine."""


class OdometerError(Exception):
    """Base class for all odometer errors."""


class ConfigurationError(OdometerError, ValueError):
    """Unsupported or conflicting radix / decimal marks."""


class ParseError(OdometerError, ValueError):
    """A value could not be decomposed into sign, digits and exponent."""

    def __init__(self, value) -> None:
        super().__init__(f"Unable to parse the value: {value!r}")
        self.value = value
