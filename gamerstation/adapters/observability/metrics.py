"""OpenTelemetry metrics provider for the GamerStation API."""

import logging
from typing import Optional

from opentelemetry import metrics
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import SERVICE_NAME, Resource

from ...config import Config
from .constants import (
    HTTP_REQUEST_DURATION,
    HTTP_REQUESTS_TOTAL,
    LABEL_ENDPOINT_TYPE,
    LABEL_ERROR_TYPE,
    LABEL_METHOD,
    LABEL_OUTCOME,
    LABEL_ROUTE,
    LABEL_STATUS_CODE,
    LABEL_UPSTREAM,
    SUMMONER_SUGGESTIONS,
    SUMMONERS_LOGGED,
    UPSTREAM_API_CALL_DURATION,
    UPSTREAM_API_CALLS_TOTAL,
    UPSTREAM_API_RATE_LIMITS,
)

logger = logging.getLogger(__name__)


class MetricsProvider:
    """Manages OpenTelemetry metrics for the GamerStation API."""

    def __init__(self, config: Config):
        """Initialize the metrics provider.

        Args:
            config: Application configuration
        """
        self.config = config
        self._meter_provider: Optional[MeterProvider] = None
        self._meter: Optional[metrics.Meter] = None
        self._initialized = False

        # Metric instruments - initialized in _create_instruments()
        self._upstream_calls_counter = None
        self._upstream_duration_histogram = None
        self._upstream_rate_limits_counter = None

        self._http_requests_counter = None
        self._http_duration_histogram = None

        self._summoners_logged_counter = None
        self._suggestions_counter = None

    @property
    def enabled(self) -> bool:
        return self._initialized and self._meter is not None

    def initialize(self) -> None:
        """Initialize the OpenTelemetry metrics provider."""
        if self._initialized:
            logger.warning("Metrics provider already initialized")
            return

        if not self.config.otel_enabled:
            logger.info("OpenTelemetry metrics disabled")
            self._initialized = True
            return

        try:
            resource = Resource.create({
                SERVICE_NAME: self.config.otel_service_name,
                "environment": self.config.environment.value,
            })

            if self.config.otel_exporter_type == "console":
                exporter = ConsoleMetricExporter()
                logger.info("Using console metric exporter")
            elif self.config.otel_exporter_type == "otlp":
                exporter = OTLPMetricExporter(
                    endpoint=self.config.otel_otlp_endpoint,
                    insecure=True,
                )
                logger.info(f"Using OTLP metric exporter: {self.config.otel_otlp_endpoint}")
            else:
                logger.info("Metrics export disabled (exporter_type='none')")
                self._initialized = True
                return

            reader = PeriodicExportingMetricReader(
                exporter=exporter,
                export_interval_millis=self.config.otel_export_interval_millis,
                export_timeout_millis=self.config.otel_export_timeout_millis,
            )

            self._meter_provider = MeterProvider(
                resource=resource,
                metric_readers=[reader],
            )
            metrics.set_meter_provider(self._meter_provider)

            self._meter = metrics.get_meter(__name__)
            self._create_instruments()

            self._initialized = True
            logger.info("Metrics provider initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize metrics provider: {e}")
            self._initialized = False
            raise

    def _create_instruments(self) -> None:
        """Create all metric instruments."""
        if not self._meter:
            return

        self._upstream_calls_counter = self._meter.create_counter(
            name=UPSTREAM_API_CALLS_TOTAL,
            description="Total number of upstream game-data API calls",
            unit="1",
        )
        self._upstream_duration_histogram = self._meter.create_histogram(
            name=UPSTREAM_API_CALL_DURATION,
            description="Duration of upstream game-data API calls in seconds",
            unit="s",
        )
        self._upstream_rate_limits_counter = self._meter.create_counter(
            name=UPSTREAM_API_RATE_LIMITS,
            description="Total number of rate limit responses from upstream APIs",
            unit="1",
        )

        self._http_requests_counter = self._meter.create_counter(
            name=HTTP_REQUESTS_TOTAL,
            description="Total number of HTTP requests served",
            unit="1",
        )
        self._http_duration_histogram = self._meter.create_histogram(
            name=HTTP_REQUEST_DURATION,
            description="Duration of HTTP requests in seconds",
            unit="s",
        )

        self._summoners_logged_counter = self._meter.create_counter(
            name=SUMMONERS_LOGGED,
            description="Total number of summoner log attempts",
            unit="1",
        )
        self._suggestions_counter = self._meter.create_counter(
            name=SUMMONER_SUGGESTIONS,
            description="Total number of summoner suggestion queries",
            unit="1",
        )

    def shutdown(self) -> None:
        """Shutdown the metrics provider and flush any pending metrics."""
        if self._meter_provider:
            try:
                self._meter_provider.shutdown()
                logger.info("Metrics provider shut down")
            except Exception as e:
                logger.error(f"Error shutting down metrics provider: {e}")

    # Upstream API metrics

    def record_upstream_call(
        self,
        upstream: str,
        endpoint_type: str,
        status_code: int,
        duration: float,
        error_type: Optional[str] = None,
    ) -> None:
        """Record an upstream API call."""
        if not self.enabled:
            return

        labels = {
            LABEL_UPSTREAM: upstream,
            LABEL_ENDPOINT_TYPE: endpoint_type,
            LABEL_STATUS_CODE: str(status_code),
        }
        if error_type:
            labels[LABEL_ERROR_TYPE] = error_type

        self._upstream_calls_counter.add(1, labels)
        self._upstream_duration_histogram.record(duration, labels)

        if status_code == 429:
            self._upstream_rate_limits_counter.add(1, {
                LABEL_UPSTREAM: upstream,
                LABEL_ENDPOINT_TYPE: endpoint_type,
            })

    # HTTP metrics

    def record_http_request(self, route: str, method: str, status_code: int, duration: float) -> None:
        """Record a served HTTP request."""
        if not self.enabled:
            return

        labels = {
            LABEL_ROUTE: route,
            LABEL_METHOD: method,
            LABEL_STATUS_CODE: str(status_code),
        }
        self._http_requests_counter.add(1, labels)
        self._http_duration_histogram.record(duration, labels)

    # Summoner index metrics

    def record_summoner_logged(self, success: bool) -> None:
        if not self.enabled:
            return
        self._summoners_logged_counter.add(1, {LABEL_OUTCOME: "ok" if success else "rejected"})

    def record_suggestion_query(self, result_count: int) -> None:
        if not self.enabled:
            return
        self._suggestions_counter.add(1, {LABEL_OUTCOME: "hit" if result_count else "empty"})


# Global metrics provider instance
_metrics_provider: Optional[MetricsProvider] = None


def get_metrics_provider() -> Optional[MetricsProvider]:
    """Get the global metrics provider instance."""
    return _metrics_provider


def initialize_metrics(config: Config) -> MetricsProvider:
    """Initialize the global metrics provider.

    Args:
        config: Application configuration

    Returns:
        The initialized MetricsProvider instance
    """
    global _metrics_provider

    if _metrics_provider is not None:
        logger.warning("Metrics provider already initialized")
        return _metrics_provider

    _metrics_provider = MetricsProvider(config)
    _metrics_provider.initialize()

    return _metrics_provider


def shutdown_metrics() -> None:
    """Shutdown the global metrics provider."""
    global _metrics_provider

    if _metrics_provider:
        _metrics_provider.shutdown()
        _metrics_provider = None
