"""
Tests for the promdress command line interface.
"""

import httpx
import pytest
import uvicorn
from typer.testing import CliRunner

from promdress.cli import app
from promdress.cli.main import parse_samples

runner = CliRunner()

SAMPLE_TEXT = (
    '# HELP up Target is up.\n'
    '# TYPE up gauge\n'
    'up 1\n'
    '# HELP http_requests_total Requests.\n'
    '# TYPE http_requests_total counter\n'
    'http_requests_total{code="200"} 3 5500\n'
)


@pytest.fixture
def mock_scrape(monkeypatch):
    """Route httpx.Client requests through a mock transport."""
    real_client = httpx.Client

    def install(handler):
        def client(timeout=None):
            return real_client(transport=httpx.MockTransport(handler), timeout=timeout)

        monkeypatch.setattr(httpx, "Client", client)

    return install


class TestParseSamples:
    """Test exposition text parsing used by ``scrape``."""

    def test_parses_series(self):
        assert parse_samples(SAMPLE_TEXT) == [
            ('up', '1', None),
            ('http_requests_total{code="200"}', '3', '5500'),
        ]

    def test_labels_with_spaces(self):
        assert parse_samples('foo{path="/a b"} 2\n') == [('foo{path="/a b"}', '2', None)]

    def test_bare_name(self):
        assert parse_samples('foo\n\n') == [('foo', '', None)]


class TestCommands:
    """Test CLI commands."""

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "promdress Version Info" in result.output
        assert "0.1.0" in result.output

    def test_report_empty(self):
        result = runner.invoke(app, ["report"])

        assert result.exit_code == 0
        assert result.output == ""

    def test_report_demo(self, default_registry):
        result = runner.invoke(app, ["report", "--demo"])

        assert result.exit_code == 0
        assert "# TYPE demo_requests_total counter" in result.output
        assert 'demo_requests_total{method="get",code="200"} 2' in result.output
        assert "demo_in_flight_requests 3" in result.output
        assert 'demo_request_duration_seconds_count{method="get"} 3' in result.output
        assert default_registry.names() == [
            'demo_requests_total',
            'demo_in_flight_requests',
            'demo_request_duration_seconds',
        ]

    def test_scrape(self, mock_scrape):
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, text=SAMPLE_TEXT)

        mock_scrape(handler)
        result = runner.invoke(app, ["scrape", "http://exporter:9464/metrics"])

        assert result.exit_code == 0
        assert requested == ["http://exporter:9464/metrics"]
        assert "up" in result.output
        assert "5500" in result.output

    def test_scrape_failure(self, mock_scrape):
        mock_scrape(lambda request: httpx.Response(503))

        result = runner.invoke(app, ["scrape", "http://exporter:9464/metrics"])

        assert result.exit_code == 1
        assert "Scrape failed" in result.output

    def test_serve(self, monkeypatch):
        calls = {}

        def fake_run(application, host, port, log_level):
            calls.update(application=application, host=host, port=port, log_level=log_level)

        monkeypatch.setattr(uvicorn, "run", fake_run)
        monkeypatch.setenv("PROMDRESS_PORT", "9100")
        monkeypatch.delenv("PROMDRESS_HOST", raising=False)
        monkeypatch.delenv("PROMDRESS_LOG_LEVEL", raising=False)

        result = runner.invoke(app, ["serve", "--host", "127.0.0.1"])

        assert result.exit_code == 0
        assert calls['host'] == "127.0.0.1"
        assert calls['port'] == 9100
        assert calls['log_level'] == "info"
        assert calls['application'].title == "promdress"

    def test_serve_invalid_configuration(self, monkeypatch):
        monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: None)
        monkeypatch.delenv("PROMDRESS_METRICS_PATH", raising=False)

        result = runner.invoke(app, ["serve", "--path", "metrics"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
