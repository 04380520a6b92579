"""
Gauge metric.

A gauge can be incremented, decremented or set to an arbitrary finite value.

Author: promdress maintainers
Version: 0.1.0
"""

import time
from collections.abc import Mapping
from typing import Any, Optional, Union

from ..utils.validators import validate_double, validate_timestamp
from .collector import BoundChild, Collector, resolve_mutator_args
from .types import MetricType, MetricValue

Number = Union[int, float]


def _amount(amount: Any, default: Number) -> Number:
    if amount is None:
        return default
    return validate_double(amount)


def _add(value: MetricValue, amount: Number, timestamp: Optional[int]) -> None:
    if value.value is None:
        value.value = amount
    else:
        value.value += amount
    if timestamp is not None:
        value.timestamp = timestamp


def _set(value: MetricValue, amount: Number, timestamp: Optional[int]) -> None:
    value.value = amount
    if timestamp is not None:
        value.timestamp = timestamp


def _check_timestamp(timestamp: Optional[int]) -> Optional[int]:
    if timestamp is not None:
        validate_timestamp(timestamp)
    return timestamp


class Gauge(Collector):
    """Gauge metric that can increase and decrease."""

    def get_type(self) -> MetricType:
        return MetricType.GAUGE

    def inc(
        self,
        amount: Optional[Union[Number, Mapping]] = None,
        labels: Optional[Union[Mapping, int]] = None,
        timestamp: Optional[int] = None
    ) -> None:
        """Increment the gauge by ``amount`` (default 1)."""
        amount, labels, timestamp = resolve_mutator_args(amount, labels, timestamp)
        amount = _amount(amount, 1)
        _check_timestamp(timestamp)
        _add(self.get_value(labels), amount, timestamp)

    def dec(
        self,
        amount: Optional[Union[Number, Mapping]] = None,
        labels: Optional[Union[Mapping, int]] = None,
        timestamp: Optional[int] = None
    ) -> None:
        """Decrement the gauge by ``amount`` (default 1)."""
        amount, labels, timestamp = resolve_mutator_args(amount, labels, timestamp)
        amount = -_amount(amount, 1)
        _check_timestamp(timestamp)
        _add(self.get_value(labels), amount, timestamp)

    def set(
        self,
        value: Number,
        labels: Optional[Mapping] = None,
        timestamp: Optional[int] = None
    ) -> None:
        """Replace the gauge value."""
        validate_double(value)
        _check_timestamp(timestamp)
        _set(self.get_value(labels), value, timestamp)

    def set_to_current_time(self, labels: Optional[Mapping] = None) -> None:
        """Set the gauge to the current unix time in seconds."""
        self.set(time.time(), labels)

    def labels(self, labels: Optional[Mapping] = None) -> "GaugeChild":
        """Return a child gauge bound to ``labels``."""
        return GaugeChild(self, labels)


class GaugeChild(BoundChild):
    """Gauge bound to one label combination."""

    __slots__ = ()

    def inc(self, amount: Optional[Number] = None, timestamp: Optional[int] = None) -> None:
        amount = _amount(amount, 1)
        _check_timestamp(timestamp)
        _add(self._value(), amount, timestamp)

    def dec(self, amount: Optional[Number] = None, timestamp: Optional[int] = None) -> None:
        amount = -_amount(amount, 1)
        _check_timestamp(timestamp)
        _add(self._value(), amount, timestamp)

    def set(self, value: Number, timestamp: Optional[int] = None) -> None:
        validate_double(value)
        _check_timestamp(timestamp)
        _set(self._value(), value, timestamp)

    def set_to_current_time(self) -> None:
        self.set(time.time())
