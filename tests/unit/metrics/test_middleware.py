"""
Tests for the FastAPI scrape endpoint and request instrumentation.
"""

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from promdress.config import ExpositionConfig
from promdress.exceptions import MetricRegistrationError
from promdress.metrics import Counter, CollectorRegistry, Histogram
from promdress.metrics.middleware import (
    MEDIA_TYPE,
    PrometheusMiddleware,
    add_prometheus_middleware,
    create_app,
    create_metrics_router,
)


@pytest.fixture
def test_app(registry):
    """Create an instrumented application with a couple of routes."""
    app = create_app(ExpositionConfig(exclude_paths=["/health"]), registry=registry)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/items")
    async def items():
        return {"items": []}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("boom")

    return app


class TestMetricsEndpoint:
    """Test the scrape endpoint."""

    def test_serves_report(self, registry):
        counter = Counter('jobs_total', 'Jobs processed.', registries=[registry])
        counter.inc(3)
        app = FastAPI()
        app.include_router(create_metrics_router(registry))

        response = TestClient(app).get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"] == MEDIA_TYPE
        assert response.text == (
            '# HELP jobs_total Jobs processed.\n'
            '# TYPE jobs_total counter\n'
            'jobs_total 3\n'
        )

    def test_default_registry_is_used(self, default_registry):
        Counter('jobs_total', 'Jobs processed.').inc()
        app = FastAPI()
        app.include_router(create_metrics_router())

        response = TestClient(app).get("/metrics")

        assert 'jobs_total 1' in response.text

    def test_custom_path(self, registry):
        app = create_app(ExpositionConfig(metrics_path="/scrape"), registry=registry)
        client = TestClient(app)

        assert client.get("/scrape").status_code == 200
        assert client.get("/metrics").status_code == 404

    def test_empty_registry(self, registry):
        app = create_app(ExpositionConfig(instrument_requests=False), registry=registry)

        response = TestClient(app).get("/metrics")

        assert response.status_code == 200
        assert response.text == ''
        assert len(registry) == 0


class TestPrometheusMiddleware:
    """Test request instrumentation."""

    def test_records_requests(self, test_app, registry):
        client = TestClient(test_app)

        client.get("/items")
        client.get("/items")
        report = client.get("/metrics").text

        assert 'http_requests_total{method="GET",path="/items",code="200"} 2' in report
        assert 'http_request_duration_seconds_count{method="GET",path="/items",code="200"} 2' in report
        assert 'http_request_duration_seconds_bucket{le="+Inf",method="GET",path="/items",code="200"} 2' in report

    def test_excluded_paths_are_not_recorded(self, test_app, registry):
        client = TestClient(test_app)

        client.get("/health")
        client.get("/metrics")
        report = client.get("/metrics").text

        assert 'path="/health"' not in report
        assert 'path="/metrics"' not in report

    def test_unmatched_paths_use_request_path(self, test_app, registry):
        client = TestClient(test_app)

        client.get("/missing")

        counter = registry.get('http_requests_total')
        assert counter.values['code:404$method:GET$path:/missing$'].value == 1

    def test_failing_handler_records_server_error(self, test_app, registry):
        client = TestClient(test_app, raise_server_exceptions=False)

        response = client.get("/boom")

        assert response.status_code == 500
        counter = registry.get('http_requests_total')
        assert counter.values['code:500$method:GET$path:/boom$'].value == 1

    def test_reuses_compatible_collectors(self, registry):
        first = PrometheusMiddleware(FastAPI(), registry=registry)
        second = PrometheusMiddleware(FastAPI(), registry=registry)

        assert first.requests_total is second.requests_total
        assert first.request_duration is second.request_duration
        assert registry.names() == ['http_requests_total', 'http_request_duration_seconds']

    def test_rejects_incompatible_collectors(self, registry):
        Counter('http_requests_total', 'Clashing definition.', labels=['code'], registries=[registry])

        with pytest.raises(MetricRegistrationError):
            PrometheusMiddleware(FastAPI(), registry=registry)

    def test_rejects_collector_of_wrong_type(self, registry):
        Histogram('http_requests_total', 'Clashing type.', labels=['method', 'path', 'code'], registries=[registry])

        with pytest.raises(MetricRegistrationError):
            PrometheusMiddleware(FastAPI(), registry=registry)

    def test_custom_buckets(self, registry):
        middleware = PrometheusMiddleware(FastAPI(), registry=registry, buckets=[0.5, 1])

        assert middleware.request_duration.buckets == (0.5, 1)

    def test_add_prometheus_middleware(self):
        registry = CollectorRegistry()
        app = FastAPI()
        add_prometheus_middleware(app, registry=registry, metrics_path="/internal/metrics")

        @app.get("/ping")
        async def ping():
            return "pong"

        client = TestClient(app)
        client.get("/ping")
        report = client.get("/internal/metrics").text

        assert 'http_requests_total{method="GET",path="/ping",code="200"} 1' in report

    @pytest.mark.asyncio
    async def test_async_client(self, test_app, registry):
        transport = httpx.ASGITransport(app=test_app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            await client.get("/items")
            response = await client.get("/metrics")

        assert response.status_code == 200
        assert 'http_requests_total{method="GET",path="/items",code="200"} 1' in response.text
