"""Configuration management for the GamerStation API service."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from decouple import Choices
from decouple import config


class Environment(Enum):
    """Supported deployment environments."""

    DEVELOPMENT = "development"
    CI = "CI"
    PRODUCTION = "production"


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class Config:
    """Configuration for the GamerStation API service."""

    # Required fields
    database_url: str

    database_name: str = "gamerstation_db"

    # Environment configuration
    environment: Environment = Environment.DEVELOPMENT

    # HTTP server configuration
    http_host: str = "0.0.0.0"
    http_port: int = 8000

    # Blizzard Battle.net configuration
    bnet_client_id: str = ""
    bnet_client_secret: str = ""
    blizzard_api_timeout_seconds: int = 15

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"

    # OpenTelemetry configuration
    otel_enabled: bool = False
    otel_service_name: str = "gamerstation-api"
    otel_exporter_type: str = "none"
    otel_otlp_endpoint: str = "http://localhost:4317"
    otel_export_interval_millis: int = 60000
    otel_export_timeout_millis: int = 30000

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        # Helper function to simplify config calls
        def get_config(key: str, default=None, cast=None):
            if default is not None:
                if cast is not None:
                    return config(key, default=default, cast=cast)
                else:
                    return config(key, default=default)
            else:
                return config(key)

        env = Environment(
            get_config("ENVIRONMENT", "development", Choices(["development", "CI", "production"]))
        )

        # Production listens on all interfaces, local runs stay on loopback
        default_host = "0.0.0.0" if env == Environment.PRODUCTION else "127.0.0.1"

        return cls(
            # Required
            database_url=get_config("DATABASE_URL"),
            database_name=get_config("DATABASE_NAME", "gamerstation_db"),
            # Environment
            environment=env,
            # HTTP server
            http_host=get_config("HTTP_HOST", default_host),
            http_port=get_config("HTTP_PORT", 8000, int),
            # Blizzard
            bnet_client_id=get_config("BNET_CLIENT_ID", ""),
            bnet_client_secret=get_config("BNET_CLIENT_SECRET", ""),
            blizzard_api_timeout_seconds=get_config("BLIZZARD_API_TIMEOUT_SECONDS", 15, int),
            # Logging
            log_level=get_config("LOG_LEVEL", "INFO", Choices(LOG_LEVELS)),
            log_format=get_config("LOG_FORMAT", "json", Choices(["json", "text"])),
            # OpenTelemetry
            otel_enabled=get_config("OTEL_ENABLED", False, bool),
            otel_service_name=get_config("OTEL_SERVICE_NAME", "gamerstation-api"),
            otel_exporter_type=get_config(
                "OTEL_EXPORTER_TYPE", "none", Choices(["console", "otlp", "none"])
            ),
            otel_otlp_endpoint=get_config("OTEL_OTLP_ENDPOINT", "http://localhost:4317"),
            otel_export_interval_millis=get_config("OTEL_EXPORT_INTERVAL_MILLIS", 60000, int),
            otel_export_timeout_millis=get_config("OTEL_EXPORT_TIMEOUT_MILLIS", 30000, int),
        )

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == Environment.CI

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    def get_database_url(self) -> str:
        """Construct the full database URL by combining base URL and database name.

        Postgres URLs are switched to the asyncpg driver and pointed at
        ``database_name``. Any other scheme (sqlite+aiosqlite for tests)
        is returned untouched.
        """
        from urllib.parse import urlparse, urlunparse

        parsed = urlparse(self.database_url)

        scheme = parsed.scheme
        if scheme in ("postgres", "postgresql", "postgresql+asyncpg"):
            scheme = "postgresql+asyncpg"
        else:
            return self.database_url

        # The path includes the leading '/', so we prepend it to database_name
        path = f"/{self.database_name}"

        return urlunparse(
            (scheme, parsed.netloc, path, parsed.params, parsed.query, parsed.fragment)
        )


# Global configuration instance
_config: Optional[Config] = None


def init_config() -> Config:
    """Load configuration from the environment and store it globally."""
    global _config
    _config = Config.from_env()
    return _config


def get_config() -> Config:
    """Get the global configuration instance."""
    if _config is None:
        raise RuntimeError("Configuration not initialized. Call init_config() first.")
    return _config


def is_config_initialized() -> bool:
    return _config is not None


def reset_config() -> None:
    """Drop the global configuration. Used by tests."""
    global _config
    _config = None
