"""
Collector base class.

A collector owns a metric identity (name, help text, declared label names)
and a value store mapping a canonical label key to a ``MetricValue``. The
label key is derived from the sorted label names, so two label mappings with
the same items always address the same series regardless of their order.

Author: promdress maintainers
Version: 0.1.0
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple

from ..exceptions import (
    DuplicateLabelError,
    InvalidLabelNameError,
    InvalidMetricNameError,
    MetricTypeError,
    ReservedLabelError,
    UnknownLabelError,
)
from ..utils.helpers import format_label_value
from ..utils.validators import is_valid_label_name, is_valid_metric_name
from .types import CollectedMetric, MetricType, MetricValue

if TYPE_CHECKING:
    from .registry import CollectorRegistry

logger = logging.getLogger("promdress.metrics.collector")


def resolve_mutator_args(amount: Any, labels: Any, timestamp: Any) -> Tuple[Any, Any, Any]:
    """
    Resolve the ``(amount, labels, timestamp)`` calling convention.

    ``inc({"method": "get"}, 5500)`` reads the mapping as labels and the
    second positional argument as the timestamp; the amount then falls back
    to its default.
    """
    if isinstance(amount, Mapping):
        if labels is not None and timestamp is not None:
            raise MetricTypeError("timestamp given twice")
        return None, amount, labels if labels is not None else timestamp
    return amount, labels, timestamp


def label_key(labels: Mapping) -> str:
    """
    Build the canonical key for an already validated label mapping.

    Names and values are joined without escaping, so a value containing
    '$' and ':' can spell out another label set: ``{"a": "x$b:y"}`` and
    ``{"a": "x", "b": "y"}`` both map to ``a:x$b:y$`` and share one series.
    Keep those characters out of label values.
    """
    return ''.join(
        f"{name}:{format_label_value(labels[name])}$" for name in sorted(labels)
    )


class Collector(ABC):
    """Base class for Counter, Gauge and Histogram."""

    reserved_labels: Tuple[str, ...] = ()

    def __init__(
        self,
        name: str,
        help: str,
        labels: Optional[Sequence[str]] = None,
        registries: Optional[Sequence["CollectorRegistry"]] = None
    ):
        if not isinstance(name, str):
            raise MetricTypeError("metric name must be a string")
        if not is_valid_metric_name(name):
            raise InvalidMetricNameError(metric_name=name)
        if not isinstance(help, str):
            raise MetricTypeError("help must be a string", metric_name=name)

        self.name = name
        self.help = help
        self.values: Dict[str, MetricValue] = {}
        self.registries: List["CollectorRegistry"] = []
        self._label_names: List[str] = []

        if isinstance(labels, (list, tuple)):
            for label in labels:
                if not is_valid_label_name(label):
                    raise InvalidLabelNameError(metric_name=name)
                if label in self.reserved_labels:
                    raise ReservedLabelError(label, self.get_type().value, metric_name=name)
                if label in self._label_names:
                    raise DuplicateLabelError(label, metric_name=name)
                self._label_names.append(label)
        elif labels is not None:
            raise MetricTypeError("labels must be a list", metric_name=name)

        self._label_names.extend(self.reserved_labels)
        self._register_all(registries)

    @abstractmethod
    def get_type(self) -> MetricType:
        """Get the metric type."""
        pass

    @property
    def label_names(self) -> Tuple[str, ...]:
        """Declared label names, including any implicit ones."""
        return tuple(self._label_names)

    def get_value(self, labels: Optional[Mapping] = None) -> MetricValue:
        """
        Return the series for ``labels``, creating it on first use.

        Raises:
            UnknownLabelError: If a label was not declared on this metric
        """
        labels = self._check_labels(labels)
        return self._resolve(labels, labels)

    def reset(self) -> None:
        """Drop every series; registrations are left untouched."""
        self.values = {}
        logger.debug(f"Reset collector {self.name}")

    def collect(self) -> CollectedMetric:
        """Return a snapshot view of the collector for serialization."""
        return CollectedMetric(
            type=self.get_type(),
            name=self.name,
            help=self.help,
            values=self.values
        )

    def _check_labels(self, labels: Optional[Mapping]) -> Mapping:
        if labels is None:
            return {}
        if not isinstance(labels, Mapping):
            raise MetricTypeError("labels must be a mapping", metric_name=self.name)
        return labels

    def _label_key(self, labels: Mapping) -> str:
        for label in labels:
            if label not in self._label_names:
                raise UnknownLabelError(label, metric_name=self.name, labels=dict(labels))
        return label_key(labels)

    def _resolve(self, key_labels: Mapping, exposed_labels: Mapping) -> MetricValue:
        key = self._label_key(key_labels)
        value = self.values.get(key)
        if value is None:
            value = MetricValue(labels=dict(exposed_labels))
            self.values[key] = value
        return value

    def _register_all(self, registries: Optional[Sequence["CollectorRegistry"]]) -> None:
        from .registry import CollectorRegistry, get_default_registry

        if registries is None:
            registries = [get_default_registry()]
        elif not isinstance(registries, (list, tuple)):
            raise MetricTypeError("registries must be a list", metric_name=self.name)

        for registry in registries:
            if not isinstance(registry, CollectorRegistry):
                raise MetricTypeError(
                    "registries must contain CollectorRegistry instances",
                    metric_name=self.name
                )

        joined = []
        try:
            for registry in registries:
                registry.register(self)
                joined.append(registry)
        except Exception:
            for registry in joined:
                registry.unregister(self)
            raise

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, labels={self._label_names!r})"


class BoundChild:
    """
    A collector pre-bound to one label mapping.

    The child keeps the canonical key rather than a reference to the value
    record, so it keeps working after the parent is reset.
    """

    __slots__ = ('_collector', '_labels', '_key')

    def __init__(self, collector: Collector, labels: Optional[Mapping]):
        labels = collector._check_labels(labels)
        self._collector = collector
        self._labels = dict(labels)
        self._key = collector._label_key(self._labels)

    @property
    def labels(self) -> Dict[str, Any]:
        return dict(self._labels)

    def _value(self) -> MetricValue:
        value = self._collector.values.get(self._key)
        if value is None:
            value = self._collector.get_value(self._labels)
        return value
