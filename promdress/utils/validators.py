"""
Validation utilities for promdress.

The ``is_valid_*`` predicates return booleans; the ``validate_*`` functions
raise the matching promdress exception and return the accepted value.
"""

import math
import re
from typing import Any

from ..exceptions import (
    InvalidTimestampError,
    MetricRangeError,
    MetricTypeError,
)

METRIC_NAME_RE = re.compile(r'^[a-zA-Z_:][a-zA-Z0-9_:]*$')
LABEL_NAME_RE = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')

# Prometheus stores sample timestamps as signed 64-bit milliseconds.
MAX_TIMESTAMP_MS = 2 ** 63 - 1


def is_number(value: Any) -> bool:
    """Return True for ints and floats; bools are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite(value: Any) -> bool:
    """Return True for finite numbers; ints too large for a float are not finite."""
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def is_valid_metric_name(name: Any) -> bool:
    """
    Check a metric name against the exposition format.

    Args:
        name: Candidate metric name

    Returns:
        True if valid, False otherwise
    """
    return isinstance(name, str) and bool(METRIC_NAME_RE.match(name))


def is_valid_label_name(name: Any) -> bool:
    """
    Check a label name against the exposition format.

    Args:
        name: Candidate label name

    Returns:
        True if valid, False otherwise
    """
    return isinstance(name, str) and bool(LABEL_NAME_RE.match(name))


def validate_double(value: Any) -> float:
    """Validate that ``value`` is a finite number."""
    if not is_number(value):
        raise MetricTypeError("v must be a number")
    if not is_finite(value):
        raise MetricRangeError("v must be a finite number", validation_rule="finite")
    return value


def validate_non_negative(value: Any) -> float:
    """Validate that ``value`` is a finite, non-negative number."""
    validate_double(value)
    if value < 0:
        raise MetricRangeError("v must not be a negative number", validation_rule="non_negative")
    return value


def validate_timestamp(timestamp: Any) -> int:
    """
    Validate a sample timestamp.

    Timestamps are integer milliseconds since the epoch in the range
    ``0 <= timestamp <= 2**63 - 1``.

    Args:
        timestamp: Candidate timestamp

    Returns:
        The timestamp, unchanged

    Raises:
        MetricTypeError: If the timestamp is not an integer
        InvalidTimestampError: If the timestamp is out of range
    """
    if not isinstance(timestamp, int) or isinstance(timestamp, bool):
        raise MetricTypeError("timestamp must be an integer")
    if timestamp < 0 or timestamp > MAX_TIMESTAMP_MS:
        raise InvalidTimestampError(
            f"timestamp must be between 0 and {MAX_TIMESTAMP_MS}"
        )
    return timestamp
