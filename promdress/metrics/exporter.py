"""
Prometheus text exposition serializer.

This module turns collector snapshots into the plaintext scrape format:

    # HELP <name> <help>
    # TYPE <name> <type>
    <series>{<label>="<value>",...} <value>[ <timestamp>]

Help text and label values are written verbatim; callers are responsible
for keeping quotes, backslashes and newlines out of them.

Author: promdress maintainers
Version: 0.1.0
"""

import logging
from io import StringIO
from typing import Any, Iterable, Mapping, TextIO

from ..utils.helpers import format_label_value, format_number
from .types import CollectedMetric, MetricValue

logger = logging.getLogger("promdress.metrics.exporter")

CONTENT_TYPE = "text/plain; version=0.0.4"
ENCODING = "utf8"


class PrometheusFormatter:
    """Formatter for Prometheus exposition format."""

    @staticmethod
    def format_labels(labels: Mapping[str, Any]) -> str:
        """Format labels in their stored order; empty mappings render as ''."""
        if not labels:
            return ""
        return "{" + ",".join(
            f'{key}="{format_label_value(value)}"' for key, value in labels.items()
        ) + "}"

    @staticmethod
    def format_value(value: Any) -> str:
        """Format a sample value."""
        return format_number(value)

    @classmethod
    def format_sample(cls, metric_name: str, value: MetricValue) -> str:
        """Format one series line, without the trailing newline."""
        series_name = value.name if isinstance(value.name, str) else metric_name
        line = f"{series_name}{cls.format_labels(value.labels)} {cls.format_value(value.value)}"
        if value.timestamp is not None:
            line += f" {value.timestamp}"
        return line


def write_metric(output: TextIO, metric: CollectedMetric) -> None:
    """Write the HELP, TYPE and series lines of one collector snapshot."""
    output.write(f"# HELP {metric.name} {metric.help}\n")
    output.write(f"# TYPE {metric.name} {metric.type.value}\n")
    for value in metric.values.values():
        # Entries looked up through get_value() but never written carry no sample.
        if value.value is None:
            continue
        output.write(PrometheusFormatter.format_sample(metric.name, value))
        output.write("\n")


def render(metrics: Iterable[CollectedMetric]) -> str:
    """Render collector snapshots into one exposition payload."""
    output = StringIO()
    rendered = 0
    for metric in metrics:
        write_metric(output, metric)
        rendered += 1
    logger.debug(f"Rendered {rendered} metric families")
    return output.getvalue()
