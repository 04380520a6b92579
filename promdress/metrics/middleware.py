"""
FastAPI integration for metrics exposition.

This module provides the scrape endpoint that serves a registry's report and
a middleware that records request count and duration metrics for every HTTP
request handled by the application.

Author: promdress maintainers
Version: 0.1.0
"""

import logging
import time
from typing import Callable, List, Optional, Sequence

from fastapi import APIRouter, FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..config import ExpositionConfig
from ..exceptions import MetricRegistrationError
from .counter import Counter
from .exporter import CONTENT_TYPE
from .histogram import DEFAULT_BUCKETS, Histogram
from .registry import CollectorRegistry, get_default_registry

logger = logging.getLogger("promdress.metrics.middleware")

MEDIA_TYPE = f"{CONTENT_TYPE}; charset=utf-8"

REQUEST_LABELS = ['method', 'path', 'code']


def create_metrics_router(
    registry: Optional[CollectorRegistry] = None,
    path: str = "/metrics"
) -> APIRouter:
    """Create a router serving ``registry.report()`` at ``path``."""
    router = APIRouter()

    @router.get(path, include_in_schema=False)
    async def metrics() -> Response:
        target = registry if registry is not None else get_default_registry()
        try:
            content = target.report()
        except Exception as e:
            logger.error(f"Failed to render metrics: {e}")
            raise
        return Response(content=content, media_type=MEDIA_TYPE)

    return router


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware recording ``http_requests_total`` and ``http_request_duration_seconds``."""

    def __init__(
        self,
        app: ASGIApp,
        registry: Optional[CollectorRegistry] = None,
        metrics_path: str = "/metrics",
        exclude_paths: Optional[Sequence[str]] = None,
        buckets: Optional[Sequence[float]] = None
    ):
        super().__init__(app)

        self.registry = registry if registry is not None else get_default_registry()
        self.metrics_path = metrics_path
        self.exclude_paths = set(exclude_paths or [])
        self.exclude_paths.add(metrics_path)

        self.requests_total = self._collector(
            Counter,
            'http_requests_total',
            'Total number of HTTP requests.'
        )
        self.request_duration = self._collector(
            Histogram,
            'http_request_duration_seconds',
            'HTTP request duration in seconds.',
            buckets=list(buckets) if buckets is not None else list(DEFAULT_BUCKETS)
        )

    def _collector(self, cls, name: str, help: str, **kwargs):
        # Several app instances may share one registry; reuse compatible collectors.
        existing = self.registry.get(name)
        if existing is None:
            return cls(name, help, labels=REQUEST_LABELS, registries=[self.registry], **kwargs)
        if not isinstance(existing, cls) or [
            label for label in existing.label_names if label not in cls.reserved_labels
        ] != REQUEST_LABELS:
            raise MetricRegistrationError(
                f"{name} is already registered with an incompatible definition",
                metric_name=name
            )
        logger.debug(f"Reusing registered collector {name}")
        return existing

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process the request and record its count and duration."""
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        start_time = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration = time.perf_counter() - start_time
            labels = {
                'method': request.method,
                'path': self._route_path(request),
                'code': status_code
            }
            self.requests_total.inc(labels=labels)
            self.request_duration.observe(duration, labels)

    @staticmethod
    def _route_path(request: Request) -> str:
        """Prefer the route template so path parameters do not explode cardinality."""
        route = request.scope.get('route')
        return getattr(route, 'path', request.url.path)


def add_prometheus_middleware(
    app: FastAPI,
    registry: Optional[CollectorRegistry] = None,
    metrics_path: str = "/metrics",
    exclude_paths: Optional[List[str]] = None,
    buckets: Optional[Sequence[float]] = None
) -> None:
    """Add request instrumentation and the scrape endpoint to an application."""
    app.add_middleware(
        PrometheusMiddleware,
        registry=registry,
        metrics_path=metrics_path,
        exclude_paths=exclude_paths,
        buckets=buckets
    )
    app.include_router(create_metrics_router(registry, metrics_path))


def create_app(
    config: Optional[ExpositionConfig] = None,
    registry: Optional[CollectorRegistry] = None
) -> FastAPI:
    """Create a FastAPI application exposing ``registry`` for scraping."""
    config = config or ExpositionConfig()
    registry = registry if registry is not None else get_default_registry()

    app = FastAPI(title="promdress", docs_url=None, redoc_url=None, openapi_url=None)

    if config.instrument_requests:
        add_prometheus_middleware(
            app,
            registry=registry,
            metrics_path=config.metrics_path,
            exclude_paths=config.exclude_paths,
            buckets=config.request_duration_buckets
        )
    else:
        app.include_router(create_metrics_router(registry, config.metrics_path))

    logger.info(f"Serving metrics at {config.metrics_path}")
    return app
