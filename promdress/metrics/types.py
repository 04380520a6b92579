"""
Metric types and value containers.

This module defines the metric kind enumeration, the per-series value
record stored by every collector and the snapshot returned by
``Collector.collect()``.

Author: promdress maintainers
Version: 0.1.0
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Union


class MetricType(Enum):
    """Types of metrics supported by the system."""
    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"


@dataclass
class MetricValue:
    """
    One series of a collector.

    ``value`` stays ``None`` until the first write. ``name`` overrides the
    collector name on output (histograms use it for the ``_count``,
    ``_sum`` and ``_bucket`` series). ``labels`` keeps the mapping exactly
    as it was supplied, in its original order.
    """
    value: Optional[Union[int, float]] = None
    timestamp: Optional[int] = None
    name: Optional[str] = None
    labels: Dict[str, Any] = field(default_factory=dict)


class CollectedMetric(NamedTuple):
    """Snapshot view of a collector; ``values`` is the live store."""
    type: MetricType
    name: str
    help: str
    values: Dict[str, MetricValue]
