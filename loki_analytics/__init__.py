# ==============================================================================
# Loki Analytics
# ==============================================================================
"""
Web traffic analytics (page views, visitors, sessions, bounce rate, traffic
sources) computed on demand from page view events stored in Loki.

Typical use:

    from loki_analytics import AnalyticsDataConfig, LokiClient, configure
    from loki_analytics import create_analytics_data_service

    client = LokiClient("http://loki:3100")
    configure(AnalyticsDataConfig(
        loki_url="http://loki:3100",
        prometheus_url="http://prometheus:9090",
        fetch_loki=client.fetch,
    ))
    metrics = create_analytics_data_service().get_analytics_metrics("7d")
"""

from loki_analytics.base import DiagnosticSink, FetchFn, FetchResponse, LoggingSink
from loki_analytics.core import AnalyticsMetrics, PageViewEvent, TopPage, TrafficSource
from loki_analytics.core.time_range import parse_time_range
from loki_analytics.infrastructure.loki import LokiClient
from loki_analytics.service import (
    AnalyticsDataService,
    MetricResult,
    create_analytics_data_service,
    get_analytics_data_service,
)
from loki_analytics.utils.config import (
    AnalyticsDataConfig,
    ConfigurationError,
    configure,
    get_config,
    reset_config,
)

__all__ = [
    # Configuration
    "AnalyticsDataConfig",
    "ConfigurationError",
    "configure",
    "get_config",
    "reset_config",
    # Service
    "AnalyticsDataService",
    "MetricResult",
    "create_analytics_data_service",
    "get_analytics_data_service",
    "parse_time_range",
    # Collaborators
    "DiagnosticSink",
    "FetchFn",
    "FetchResponse",
    "LoggingSink",
    "LokiClient",
    # Models
    "AnalyticsMetrics",
    "PageViewEvent",
    "TopPage",
    "TrafficSource",
]
