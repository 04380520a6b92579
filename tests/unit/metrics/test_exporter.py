"""
Unit tests for the text exposition serializer.
"""

import pytest

from promdress.metrics import CollectedMetric, MetricType, MetricValue, render
from promdress.metrics.exporter import PrometheusFormatter
from promdress.utils import format_label_value, format_number


class TestNumberFormatting:
    """Test value and label stringification."""

    @pytest.mark.parametrize('value, expected', [
        (1, '1'),
        (1.0, '1'),
        (-3.0, '-3'),
        (0.25, '0.25'),
        (99.99, '99.99'),
        (1e21, '1e+21'),
        (float('inf'), '+Inf'),
        (float('-inf'), '-Inf'),
        (float('nan'), 'NaN'),
    ])
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    @pytest.mark.parametrize('value, expected', [
        ('get', 'get'),
        (200, '200'),
        (2.0, '2'),
        (True, 'true'),
        (False, 'false'),
        (None, 'None'),
    ])
    def test_format_label_value(self, value, expected):
        assert format_label_value(value) == expected


class TestPrometheusFormatter:
    """Test series line formatting."""

    def test_format_labels_keeps_order(self):
        labels = {'method': 'get', 'code': 200}

        assert PrometheusFormatter.format_labels(labels) == '{method="get",code="200"}'

    def test_format_empty_labels(self):
        assert PrometheusFormatter.format_labels({}) == ''

    def test_label_values_are_not_escaped(self):
        assert PrometheusFormatter.format_labels({'path': 'a"b'}) == '{path="a"b"}'

    def test_format_sample_with_timestamp(self):
        value = MetricValue(value=2, timestamp=1000, labels={'code': '200'})

        assert PrometheusFormatter.format_sample('foo', value) == 'foo{code="200"} 2 1000'

    def test_format_sample_uses_series_name(self):
        value = MetricValue(value=4.5, name='latency_sum')

        assert PrometheusFormatter.format_sample('latency', value) == 'latency_sum 4.5'


class TestRender:
    """Test rendering collector snapshots."""

    def test_render_nothing(self):
        assert render([]) == ''

    def test_render_skips_unset_values(self):
        metric = CollectedMetric(
            type=MetricType.GAUGE,
            name='temperature',
            help='Current temperature.',
            values={
                'room:a$': MetricValue(labels={'room': 'a'}),
                'room:b$': MetricValue(value=21.5, labels={'room': 'b'}),
            }
        )

        assert render([metric]) == (
            '# HELP temperature Current temperature.\n'
            '# TYPE temperature gauge\n'
            'temperature{room="b"} 21.5\n'
        )

    def test_render_accepts_generators(self):
        metrics = (
            CollectedMetric(MetricType.COUNTER, name, 'help', {'': MetricValue(value=1)})
            for name in ('a', 'b')
        )

        assert render(metrics).count('# TYPE') == 2
