"""
Exception hierarchy for streaming indicators.

Errors fall into two groups. Configuration errors are raised while an
indicator is being built and leave no instance behind. Input errors are
raised by ``next(sample)`` before any state changes, so the indicator can
keep being fed after the caller handles them.
"""

import difflib
from typing import Any, List, Optional, Sequence


class IndicatorError(Exception):
    """Base class; messages are prefixed with ``[NAME]`` when the indicator is known."""

    def __init__(self, message: str, indicator_name: Optional[str] = None):
        self.indicator_name = indicator_name
        if indicator_name:
            message = f"[{indicator_name}] {message}"
        super().__init__(message)


class ConfigError(IndicatorError):
    """Indicator could not be constructed from the given configuration."""


class InvalidParameterError(ConfigError):
    """A constructor argument is out of range or of the wrong type."""

    def __init__(self, parameter_name: str, value: Any, expected: str, indicator_name: Optional[str] = None):
        super().__init__(f"{parameter_name}={value!r}, expected {expected}", indicator_name)
        self.parameter_name = parameter_name
        self.value = value
        self.expected = expected


class MissingInputError(IndicatorError):
    """
    Sample does not provide a field the indicator reads.

    ``sample_kind`` is 'scalar' for bare numbers, which carry every price
    field but no volume, 'mapping' for dicts, or the type name of an
    attribute object.
    """

    def __init__(self, missing_fields: Sequence[str], required_fields: Sequence[str],
                 indicator_name: Optional[str] = None, sample_kind: str = 'mapping'):
        missing_str = ", ".join(missing_fields)
        required_str = ", ".join(required_fields)
        if sample_kind == 'scalar':
            message = (f"a bare number only supplies price fields, not {missing_str}; "
                       f"feed a Bar or mapping with {required_str}")
        else:
            message = f"{sample_kind} sample lacks {missing_str} (reads {required_str})"
        super().__init__(message, indicator_name)
        self.missing_fields = list(missing_fields)
        self.required_fields = list(required_fields)
        self.sample_kind = sample_kind


class InvalidDataError(IndicatorError):
    """A sample field, or a Bar under construction, holds an unusable value."""

    def __init__(self, field_name: str, value: Any, reason: str, indicator_name: Optional[str] = None):
        super().__init__(f"{field_name}={value!r} rejected: {reason}", indicator_name)
        self.field_name = field_name
        self.value = value
        self.reason = reason


class IndicatorNotFoundError(IndicatorError):
    """The factory has no indicator registered under the requested name."""

    def __init__(self, indicator_name: str, available_indicators: Optional[List[str]] = None):
        self.available_indicators = sorted(available_indicators or [])
        self.suggestions = difflib.get_close_matches(indicator_name.lower(), self.available_indicators, n=3)

        message = f"Unknown indicator '{indicator_name}'"
        if self.suggestions:
            message += f"; did you mean {', '.join(self.suggestions)}?"
        elif self.available_indicators:
            message += f". Available indicators: {', '.join(self.available_indicators)}"
        super().__init__(message)
        self.indicator_name = indicator_name
