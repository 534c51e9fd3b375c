# ==============================================================================
# Application Configuration
# ==============================================================================
"""
Configuration for the analytics service.

Two layers:
- AnalyticsDataConfig: the bundle of collaborators (Loki fetch function,
  diagnostic sink) injected into AnalyticsDataService. Installed once with
  configure(); reading it before then is a usage error.
- Settings: environment-driven settings (pydantic-settings) used by the CLI
  to build an AnalyticsDataConfig. Supports .env files via python-dotenv.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from loki_analytics.base.backend import FetchFn
from loki_analytics.base.diagnostics import DiagnosticSink
from loki_analytics.core.query import DEFAULT_JOB

if TYPE_CHECKING:
    from loki_analytics.infrastructure.loki import LokiClient

# Load .env file before any settings are instantiated
load_dotenv()


# ==============================================================================
# Environment Settings
# ==============================================================================


class LokiSettings(BaseSettings):
    """Loki connection settings."""

    model_config = SettingsConfigDict(env_prefix="LOKI_")

    url: str = Field(default="http://localhost:3100", description="Loki base URL")
    job: str = Field(default=DEFAULT_JOB, description="Job label of the analytics log stream")
    timeout_seconds: float = Field(default=10.0, description="HTTP timeout per Loki request")


class PrometheusSettings(BaseSettings):
    """Prometheus settings (carried in the config bundle, not queried)."""

    model_config = SettingsConfigDict(env_prefix="PROMETHEUS_")

    url: str = Field(default="http://localhost:9090", description="Prometheus base URL")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    loki: LokiSettings = Field(default_factory=LokiSettings)
    prometheus: PrometheusSettings = Field(default_factory=PrometheusSettings)

    log_level: str = Field(default="WARNING", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once and cached for subsequent calls.
    """
    return Settings()


# ==============================================================================
# Injected Configuration
# ==============================================================================


class ConfigurationError(RuntimeError):
    """Configuration was read before configure() installed it."""


@dataclass(frozen=True)
class AnalyticsDataConfig:
    """
    Collaborators required by AnalyticsDataService.

    Attributes:
        loki_url: Loki base URL
        prometheus_url: Prometheus base URL (not queried)
        fetch_loki: Callable taking a query path and returning a response
        logger: Diagnostic sink; LoggingSink is used when None
        job: Job label selecting the analytics log stream
    """

    loki_url: str
    prometheus_url: str
    fetch_loki: FetchFn
    logger: DiagnosticSink | None = None
    job: str = DEFAULT_JOB


_config: AnalyticsDataConfig | None = None


def configure(config: AnalyticsDataConfig) -> None:
    """
    Install the configuration used by AnalyticsDataService.

    May be called again at any time; the latest call wins.
    """
    global _config
    _config = config


def get_config() -> AnalyticsDataConfig:
    """
    Return the installed configuration.

    Raises:
        ConfigurationError: If configure() has not been called (or the
            configuration was reset)
    """
    if _config is None:
        raise ConfigurationError("loki_analytics: call configure() before use")
    return _config


def reset_config() -> None:
    """Clear the installed configuration. Mainly for test teardown."""
    global _config
    _config = None


def build_config_from_settings(
    settings: Settings | None = None,
    logger: DiagnosticSink | None = None,
    client: "LokiClient | None" = None,
) -> AnalyticsDataConfig:
    """
    Build an AnalyticsDataConfig backed by a real Loki HTTP client.

    Args:
        settings: Settings to use. If None, loads from get_settings().
        logger: Optional diagnostic sink
        client: Optional pre-built LokiClient (defaults to one from settings)

    Returns:
        Configuration ready for configure()
    """
    # Import here to avoid pulling requests into pure config consumers
    from loki_analytics.infrastructure.loki import LokiClient

    if settings is None:
        settings = get_settings()
    if client is None:
        client = LokiClient(settings.loki.url, timeout_seconds=settings.loki.timeout_seconds)

    return AnalyticsDataConfig(
        loki_url=settings.loki.url,
        prometheus_url=settings.prometheus.url,
        fetch_loki=client.fetch,
        logger=logger,
        job=settings.loki.job,
    )
