"""
Utility functions for promdress.
"""

from .validators import (
    is_number,
    is_finite,
    is_valid_metric_name,
    is_valid_label_name,
    validate_double,
    validate_non_negative,
    validate_timestamp,
    MAX_TIMESTAMP_MS,
)
from .helpers import format_number, format_label_value, setup_logging

__all__ = [
    "is_number",
    "is_finite",
    "is_valid_metric_name",
    "is_valid_label_name",
    "validate_double",
    "validate_non_negative",
    "validate_timestamp",
    "MAX_TIMESTAMP_MS",
    "format_number",
    "format_label_value",
    "setup_logging",
]
