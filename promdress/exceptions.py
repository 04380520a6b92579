"""
Exception classes for promdress.

This module defines all custom exceptions raised by collectors, registries
and the configuration layer. Type errors derive from ``TypeError`` and
range/format errors from ``ValueError`` so callers can catch either the
builtin or the promdress-specific class.
"""

from typing import Optional, Dict, Any


class PromDressError(Exception):
    """Base exception for all promdress errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'error': self.__class__.__name__,
            'message': self.message,
            'details': self.details
        }


class ConfigurationError(PromDressError, ValueError):
    """Exception raised for configuration errors."""
    pass


class MetricsError(PromDressError):
    """Base exception for metrics-related errors."""

    def __init__(
        self,
        message: str,
        metric_name: Optional[str] = None,
        labels: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.metric_name = metric_name
        self.labels = labels or {}

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            'metric_name': self.metric_name,
            'labels': self.labels
        })
        return data


class MetricTypeError(MetricsError, TypeError):
    """Exception raised when an argument has the wrong type."""
    pass


class MetricValidationError(MetricsError, ValueError):
    """Exception raised when an argument has the right type but a bad value."""

    def __init__(
        self,
        message: str,
        validation_rule: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.validation_rule = validation_rule

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['validation_rule'] = self.validation_rule
        return data


class InvalidMetricNameError(MetricValidationError):
    """Metric name does not match the exposition name pattern."""

    def __init__(self, message: str = "invalid metric name", **kwargs):
        super().__init__(message, validation_rule="metric_name", **kwargs)


class InvalidLabelNameError(MetricValidationError):
    """Label name does not match the exposition label pattern."""

    def __init__(self, message: str = "invalid label name", **kwargs):
        super().__init__(message, validation_rule="label_name", **kwargs)


class DuplicateLabelError(MetricValidationError):
    """The same label name was declared twice."""

    def __init__(self, label: str, **kwargs):
        super().__init__(
            f"duplicate label name {label}",
            validation_rule="unique_label_names",
            **kwargs
        )
        self.label = label


class ReservedLabelError(MetricValidationError):
    """A label reserved by the metric type was declared or supplied."""

    def __init__(self, label: str, metric_type: str, **kwargs):
        super().__init__(
            f'"{label}" is not allowed as a {metric_type} label',
            validation_rule="reserved_label",
            **kwargs
        )
        self.label = label


class UnknownLabelError(MetricValidationError):
    """A mutation referenced a label that the metric does not declare."""

    def __init__(self, label: str, **kwargs):
        super().__init__(
            f"unknown label {label}",
            validation_rule="declared_labels",
            **kwargs
        )
        self.label = label


class MetricRangeError(MetricValidationError):
    """A numeric argument is non-finite or out of range."""
    pass


class InvalidTimestampError(MetricValidationError):
    """A timestamp is outside the accepted millisecond range."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, validation_rule="timestamp_range", **kwargs)


class MetricRegistrationError(MetricsError):
    """Exception raised during collector registration."""
    pass


class MetricCollisionError(MetricRegistrationError):
    """Exception raised when a collector name is already registered."""

    def __init__(self, metric_name: str, **kwargs):
        super().__init__(
            f"{metric_name} is already registered",
            metric_name=metric_name,
            **kwargs
        )
