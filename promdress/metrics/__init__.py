"""
Metrics core for promdress.

Collectors (Counter, Gauge, Histogram) keep a label-keyed value store and a
CollectorRegistry serializes every registered collector into the Prometheus
text exposition format. The FastAPI integration lives in
``promdress.metrics.middleware`` and is imported on demand.

Author: promdress maintainers
Version: 0.1.0
"""

from .types import MetricType, MetricValue, CollectedMetric
from .collector import Collector, BoundChild, label_key
from .counter import Counter, CounterChild
from .gauge import Gauge, GaugeChild
from .histogram import (
    Histogram,
    HistogramChild,
    DEFAULT_BUCKETS,
    linear_buckets,
    exponential_buckets
)
from .registry import (
    CollectorRegistry,
    get_default_registry,
    set_default_registry
)
from .exporter import PrometheusFormatter, render, CONTENT_TYPE, ENCODING

__all__ = [
    # Types
    'MetricType',
    'MetricValue',
    'CollectedMetric',

    # Collectors
    'Collector',
    'BoundChild',
    'label_key',
    'Counter',
    'CounterChild',
    'Gauge',
    'GaugeChild',
    'Histogram',
    'HistogramChild',
    'DEFAULT_BUCKETS',
    'linear_buckets',
    'exponential_buckets',

    # Registry
    'CollectorRegistry',
    'get_default_registry',
    'set_default_registry',

    # Exposition
    'PrometheusFormatter',
    'render',
    'CONTENT_TYPE',
    'ENCODING',
]
