"""
Counter metric.

A counter only goes up. Each label combination accumulates independently.

Author: promdress maintainers
Version: 0.1.0
"""

from collections.abc import Mapping
from typing import Any, Optional, Union

from ..utils.validators import validate_non_negative, validate_timestamp
from .collector import BoundChild, Collector, resolve_mutator_args
from .types import MetricType, MetricValue

Number = Union[int, float]


def _increment_amount(amount: Any) -> Number:
    if amount is None:
        return 1
    return validate_non_negative(amount)


def _inc(value: MetricValue, amount: Number, timestamp: Optional[int]) -> None:
    if value.value is None:
        value.value = amount
    else:
        value.value += amount
    if timestamp is not None:
        value.timestamp = timestamp


class Counter(Collector):
    """Counter metric that only increases."""

    def get_type(self) -> MetricType:
        return MetricType.COUNTER

    def inc(
        self,
        amount: Optional[Union[Number, Mapping]] = None,
        labels: Optional[Union[Mapping, int]] = None,
        timestamp: Optional[int] = None
    ) -> None:
        """
        Increment the counter.

        Args:
            amount: Non-negative finite increment, defaults to 1. A mapping
                in this position is read as ``labels``.
            labels: Label values for the series to increment
            timestamp: Optional sample timestamp in milliseconds

        Raises:
            MetricTypeError: If the amount or timestamp has the wrong type
            MetricRangeError: If the amount is negative or not finite
            UnknownLabelError: If a label was not declared
        """
        amount, labels, timestamp = resolve_mutator_args(amount, labels, timestamp)
        amount = _increment_amount(amount)
        if timestamp is not None:
            validate_timestamp(timestamp)
        _inc(self.get_value(labels), amount, timestamp)

    def labels(self, labels: Optional[Mapping] = None) -> "CounterChild":
        """Return a child counter bound to ``labels``."""
        return CounterChild(self, labels)


class CounterChild(BoundChild):
    """Counter bound to one label combination."""

    __slots__ = ()

    def inc(self, amount: Optional[Number] = None, timestamp: Optional[int] = None) -> None:
        amount = _increment_amount(amount)
        if timestamp is not None:
            validate_timestamp(timestamp)
        _inc(self._value(), amount, timestamp)
