"""
Helper utilities for promdress.
"""

import logging
import math
from typing import Any, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Integral floats at or above this bound keep exponent notation.
_INTEGRAL_FLOAT_LIMIT = 1e21


def format_number(value: Union[int, float]) -> str:
    """
    Render a number in its shortest decimal form.

    Integral floats lose their trailing ``.0`` so that ``1`` and ``1.0``
    render identically; infinities and NaN use the exposition spellings.

    Args:
        value: Number to render

    Returns:
        Decimal string

    Example:
        format_number(10.0)          # "10"
        format_number(0.25)          # "0.25"
        format_number(float('inf'))  # "+Inf"
    """
    if isinstance(value, float):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return '+Inf' if value > 0 else '-Inf'
        if value.is_integer() and abs(value) < _INTEGRAL_FLOAT_LIMIT:
            return str(int(value))
        return repr(value)
    return str(value)


def format_label_value(value: Any) -> str:
    """
    Render a label value.

    The same string is used for the value-store key and for the exposition
    line, so ``{"code": 200}`` and ``{"code": "200"}`` address one series.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure root logging for command line use."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
