"""
Histogram metric.

A histogram tracks, per label combination, an observation count, a running
sum and cumulative bucket counts. One logical histogram is exposed as three
series families sharing the metric name: ``<name>_count``, ``<name>_sum``
and ``<name>_bucket``. Buckets are addressed through the implicit ``le``
label, which callers may neither declare nor supply.

Author: promdress maintainers
Version: 0.1.0
"""

from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Tuple, Union

from ..exceptions import MetricRangeError, MetricTypeError, ReservedLabelError
from ..utils.validators import is_finite, is_number, validate_double
from .collector import BoundChild, Collector
from .types import MetricType, MetricValue

Number = Union[int, float]

DEFAULT_BUCKETS: Tuple[Number, ...] = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10)

INF_BUCKET = '+Inf'

# Key-only ``le`` values for the count and sum series; they never reach the
# exposition output.
_COUNT_LE = '_count'
_SUM_LE = '_sum'


def linear_buckets(start: Number, width: Number, count: int) -> List[Number]:
    """
    Create ``count`` buckets, each ``width`` wide, the lowest at ``start``.

    Example:
        linear_buckets(1, 2, 3)  # [1, 3, 5]
    """
    validate_double(start)
    validate_double(width)
    if not isinstance(count, int) or isinstance(count, bool) or count < 1:
        raise MetricRangeError("count must be a positive integer", validation_rule="bucket_count")
    if width <= 0:
        raise MetricRangeError("width must be positive", validation_rule="bucket_width")
    return [start + width * i for i in range(count)]


def exponential_buckets(start: Number, factor: Number, count: int) -> List[Number]:
    """
    Create ``count`` buckets starting at ``start``, each ``factor`` times the previous.

    Example:
        exponential_buckets(1, 2, 4)  # [1, 2, 4, 8]
    """
    validate_double(start)
    validate_double(factor)
    if not isinstance(count, int) or isinstance(count, bool) or count < 1:
        raise MetricRangeError("count must be a positive integer", validation_rule="bucket_count")
    if start <= 0:
        raise MetricRangeError("start must be positive", validation_rule="bucket_start")
    if factor <= 1:
        raise MetricRangeError("factor must be greater than 1", validation_rule="bucket_factor")
    return [start * factor ** i for i in range(count)]


def _prepare_buckets(buckets: Optional[Sequence[Number]]) -> Tuple[Number, ...]:
    if buckets is None:
        return DEFAULT_BUCKETS
    if not isinstance(buckets, (list, tuple)):
        raise MetricTypeError("buckets must be a list")
    for bound in buckets:
        if not is_number(bound):
            raise MetricTypeError("buckets must contain only numbers")
        if not is_finite(bound):
            raise MetricRangeError("buckets must be finite numbers", validation_rule="finite_buckets")
    ordered = tuple(sorted(buckets))
    if len(set(ordered)) != len(ordered):
        raise MetricRangeError("buckets must be unique", validation_rule="unique_buckets")
    return ordered


class Histogram(Collector):
    """Histogram metric for measuring distributions."""

    reserved_labels = ('le',)

    def __init__(
        self,
        name: str,
        help: str,
        labels: Optional[Sequence[str]] = None,
        registries: Optional[Sequence[Any]] = None,
        buckets: Optional[Sequence[Number]] = None
    ):
        # Validated up front so a bad bucket list never leaves a registered collector.
        self.buckets: Tuple[Number, ...] = _prepare_buckets(buckets)
        super().__init__(name, help, labels=labels, registries=registries)
        self._count_name = f"{name}_count"
        self._sum_name = f"{name}_sum"
        self._bucket_name = f"{name}_bucket"

    def get_type(self) -> MetricType:
        return MetricType.HISTOGRAM

    def observe(self, value: Number, labels: Optional[Mapping] = None) -> None:
        """
        Record one observation.

        The first observation for a label combination creates the count,
        sum, ``+Inf`` and every declared bucket series at once; later
        observations only update existing entries.

        Args:
            value: Finite observed value
            labels: Label values for the series, without ``le``

        Raises:
            MetricTypeError: If the value is not a number
            MetricRangeError: If the value is not finite
            ReservedLabelError: If ``labels`` contains ``le``
            UnknownLabelError: If a label was not declared
        """
        validate_double(value)
        labels = self._check_labels(labels)
        if 'le' in labels:
            raise ReservedLabelError('le', self.get_type().value, metric_name=self.name)

        count = self._series(_COUNT_LE, labels, exposed=False)
        total = self._series(_SUM_LE, labels, exposed=False)
        inf = self._series(INF_BUCKET, labels)

        if count.value is None:
            count.value = 1
            count.name = self._count_name
            total.value = value
            total.name = self._sum_name
            inf.value = 1
            inf.name = self._bucket_name
            for bound in self.buckets:
                bucket = self._series(bound, labels)
                bucket.value = 0
                bucket.name = self._bucket_name
        else:
            count.value += 1
            inf.value += 1
            total.value += value

        # Buckets are cumulative: once a bound is below the value, so are all lower ones.
        for bound in reversed(self.buckets):
            if value > bound:
                break
            self._series(bound, labels).value += 1

    def labels(self, labels: Optional[Mapping] = None) -> "HistogramChild":
        """Return a child histogram bound to ``labels``."""
        return HistogramChild(self, labels)

    def _series(self, le: Any, labels: Mapping, exposed: bool = True) -> MetricValue:
        key_labels = {'le': le, **labels}
        return self._resolve(key_labels, key_labels if exposed else labels)


class HistogramChild(BoundChild):
    """Histogram bound to one label combination."""

    __slots__ = ()

    def __init__(self, collector: Histogram, labels: Optional[Mapping]):
        labels = collector._check_labels(labels)
        if 'le' in labels:
            raise ReservedLabelError('le', collector.get_type().value, metric_name=collector.name)
        super().__init__(collector, labels)

    def observe(self, value: Number) -> None:
        self._collector.observe(value, self._labels)
