"""
Configuration for the promdress scrape surface.

The in-process metrics core needs no configuration; these settings drive the
FastAPI scrape endpoint, the request instrumentation middleware and the CLI.
"""

import os
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .metrics.exporter import CONTENT_TYPE, ENCODING
from .metrics.histogram import DEFAULT_BUCKETS


class LogLevel(str, Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ExpositionConfig(BaseModel):
    """Configuration for metrics exposition over HTTP."""

    metrics_path: str = Field(
        default="/metrics",
        description="Path of the scrape endpoint"
    )

    host: str = Field(
        default="0.0.0.0",
        description="Host the metrics server binds to"
    )

    port: int = Field(
        default=9464,
        description="Port the metrics server listens on"
    )

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level for the CLI and server"
    )

    instrument_requests: bool = Field(
        default=True,
        description="Record request count and duration metrics for every HTTP request"
    )

    exclude_paths: List[str] = Field(
        default_factory=list,
        description="Paths that are never instrumented"
    )

    request_duration_buckets: List[float] = Field(
        default_factory=lambda: list(DEFAULT_BUCKETS),
        description="Histogram buckets for request durations in seconds"
    )

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE

    @property
    def encoding(self) -> str:
        return ENCODING

    @field_validator('metrics_path')
    @classmethod
    def validate_metrics_path(cls, v):
        if not v.startswith('/'):
            raise ValueError("metrics_path must start with '/'")
        return v

    @field_validator('port')
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator('request_duration_buckets')
    @classmethod
    def validate_buckets(cls, v):
        if not v:
            raise ValueError("request_duration_buckets must not be empty")
        if list(v) != sorted(set(v)):
            raise ValueError("request_duration_buckets must be ascending and unique")
        return v

    @classmethod
    def from_env(cls, prefix: str = "PROMDRESS_") -> 'ExpositionConfig':
        """
        Create configuration from environment variables.

        Example:
            os.environ['PROMDRESS_PORT'] = '9100'
            os.environ['PROMDRESS_EXCLUDE_PATHS'] = '/health,/ready'

            config = ExpositionConfig.from_env()
        """
        data = {}

        def env(name: str) -> Optional[str]:
            return os.getenv(f"{prefix}{name}")

        if env('METRICS_PATH') is not None:
            data['metrics_path'] = env('METRICS_PATH')
        if env('HOST') is not None:
            data['host'] = env('HOST')
        if env('PORT') is not None:
            data['port'] = env('PORT')
        if env('LOG_LEVEL') is not None:
            data['log_level'] = env('LOG_LEVEL').upper()
        if env('INSTRUMENT_REQUESTS') is not None:
            data['instrument_requests'] = env('INSTRUMENT_REQUESTS').lower() == 'true'
        if env('EXCLUDE_PATHS'):
            data['exclude_paths'] = [p.strip() for p in env('EXCLUDE_PATHS').split(',') if p.strip()]
        if env('REQUEST_DURATION_BUCKETS'):
            data['request_duration_buckets'] = [
                b.strip() for b in env('REQUEST_DURATION_BUCKETS').split(',') if b.strip()
            ]

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid {prefix}* environment configuration: {e}",
                details={'errors': e.errors(include_url=False)}
            ) from e
