"""Observability adapter: logging setup and OpenTelemetry metrics."""

from .log_config import configure_logging
from .metrics import (
    MetricsProvider,
    get_metrics_provider,
    initialize_metrics,
    shutdown_metrics,
)

__all__ = [
    "configure_logging",
    "MetricsProvider",
    "get_metrics_provider",
    "initialize_metrics",
    "shutdown_metrics",
]
