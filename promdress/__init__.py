"""
promdress

In-process Prometheus instrumentation: counters, gauges and histograms kept
in label-keyed value stores, serialized by a registry into the text
exposition format for scraping.

Example usage:
    from promdress import Counter, get_default_registry

    requests = Counter('http_requests_total', 'The total number of HTTP requests.',
                       labels=['method', 'code'])
    requests.inc({'method': 'get', 'code': '200'})

    payload = get_default_registry().report()
"""

from .version import __version__
from .metrics import (
    MetricType,
    MetricValue,
    CollectedMetric,
    Collector,
    Counter,
    Gauge,
    Histogram,
    CollectorRegistry,
    get_default_registry,
    set_default_registry,
    linear_buckets,
    exponential_buckets,
    DEFAULT_BUCKETS,
    CONTENT_TYPE,
    ENCODING,
)
from .config import ExpositionConfig, LogLevel
from .exceptions import (
    PromDressError,
    ConfigurationError,
    MetricsError,
    MetricTypeError,
    MetricValidationError,
    InvalidMetricNameError,
    InvalidLabelNameError,
    DuplicateLabelError,
    ReservedLabelError,
    UnknownLabelError,
    MetricRangeError,
    InvalidTimestampError,
    MetricRegistrationError,
    MetricCollisionError,
)

# Content negotiation values for the scrape response; the HTTP layer sets them.
exposition = {
    'encoding': ENCODING,
    'content_type': CONTENT_TYPE,
}


def __getattr__(name):
    # ``default_registry`` always follows set_default_registry().
    if name == 'default_registry':
        return get_default_registry()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",

    # Metrics
    "MetricType",
    "MetricValue",
    "CollectedMetric",
    "Collector",
    "Counter",
    "Gauge",
    "Histogram",
    "linear_buckets",
    "exponential_buckets",
    "DEFAULT_BUCKETS",

    # Registry
    "CollectorRegistry",
    "get_default_registry",
    "set_default_registry",
    "default_registry",
    "exposition",

    # Configuration
    "ExpositionConfig",
    "LogLevel",

    # Exceptions
    "PromDressError",
    "ConfigurationError",
    "MetricsError",
    "MetricTypeError",
    "MetricValidationError",
    "InvalidMetricNameError",
    "InvalidLabelNameError",
    "DuplicateLabelError",
    "ReservedLabelError",
    "UnknownLabelError",
    "MetricRangeError",
    "InvalidTimestampError",
    "MetricRegistrationError",
    "MetricCollisionError",
]
