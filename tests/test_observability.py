"""Tests for logging setup and the metrics provider."""

import logging

import pytest
import structlog

from gamerstation.adapters.observability import (
    MetricsProvider,
    configure_logging,
    get_metrics_provider,
    initialize_metrics,
    shutdown_metrics,
)
from gamerstation.config import Config


@pytest.fixture(autouse=True)
def reset_observability():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    shutdown_metrics()

    yield

    shutdown_metrics()
    structlog.reset_defaults()
    root.handlers = handlers
    root.setLevel(level)


def test_disabled_metrics_are_noops():
    provider = MetricsProvider(Config(database_url="sqlite+aiosqlite:///x.db"))
    provider.initialize()

    assert not provider.enabled
    provider.record_upstream_call("blizzard", "realm_index", 200, 0.1)
    provider.record_http_request("/api/wow-realms", "GET", 200, 0.01)
    provider.record_summoner_logged(success=True)
    provider.record_suggestion_query(3)


def test_none_exporter_leaves_metrics_disabled():
    config = Config(
        database_url="sqlite+aiosqlite:///x.db",
        otel_enabled=True,
        otel_exporter_type="none",
    )
    provider = MetricsProvider(config)
    provider.initialize()

    assert not provider.enabled


def test_global_provider_lifecycle(caplog):
    config = Config(database_url="sqlite+aiosqlite:///x.db")

    provider = initialize_metrics(config)
    again = initialize_metrics(config)

    assert provider is again
    assert get_metrics_provider() is provider
    assert "already initialized" in caplog.text

    shutdown_metrics()
    assert get_metrics_provider() is None


def test_configure_logging_filters_below_level(capsys):
    config = Config(database_url="sqlite+aiosqlite:///x.db", log_level="WARNING", log_format="json")

    configure_logging(config)
    logger = structlog.get_logger()
    logger.info("hidden event")
    logger.warning("visible event", region="eu")

    out = capsys.readouterr().out
    assert "hidden event" not in out
    assert '"event": "visible event"' in out
    assert '"region": "eu"' in out
    assert logging.getLogger("httpx").level == logging.WARNING
