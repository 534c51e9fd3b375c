# ==============================================================================
# Analytics Data Service
# ==============================================================================
"""
Web traffic analytics computed from Loki page view logs.

Every call recomputes its metric from a fresh Loki query; nothing is cached
between calls. Each public method is independently fail-safe:

- A malformed log line drops that line (warning)
- A failed or malformed Loki response empties that fetch (error)
- A failed metric computation returns the metric's empty value (error)
- The rollup never raises for operational reasons

Only a missing configuration (ConfigurationError) reaches the caller.
"""

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from loki_analytics.base.backend import LokiQueryError
from loki_analytics.base.diagnostics import DiagnosticSink, LoggingSink
from loki_analytics.core import aggregations
from loki_analytics.core.decoder import decode_streams, extract_streams
from loki_analytics.core.models import AnalyticsMetrics, PageViewEvent, TopPage, TrafficSource
from loki_analytics.core.query import build_query_path, page_view_query
from loki_analytics.core.time_range import parse_time_range
from loki_analytics.utils.config import AnalyticsDataConfig, get_config

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIME_RANGE = "24h"
DEFAULT_PAGE_VIEW_LIMIT = 1000
DEFAULT_RANKING_LIMIT = 10

# Raw entries requested from Loki when a metric aggregates the whole window
AGGREGATION_FETCH_LIMIT = 10_000

ACTIVE_USERS_TIME_RANGE = "5m"
ACTIVE_USERS_FETCH_LIMIT = 1000

UNKNOWN_ERROR = "Unknown error"


# ==============================================================================
# Metric Results
# ==============================================================================


def describe_error(error: BaseException) -> str:
    """Error message for diagnostics, or a placeholder if the error has none."""
    return str(error) or UNKNOWN_ERROR


@dataclass(frozen=True)
class MetricResult(Generic[T]):
    """
    Outcome of one metric computation: a value or an error message.

    Attributes:
        value: Computed value (None on failure)
        error: Error message (None on success)
    """

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the computation succeeded."""
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        """The computed value, or ``default`` if the computation failed."""
        return self.value if self.ok else default


def evaluate(func: Callable[..., T], *args: Any) -> MetricResult[T]:
    """Run ``func(*args)``, capturing any exception as a failed MetricResult."""
    try:
        return MetricResult(value=func(*args))
    except Exception as e:
        return MetricResult(error=describe_error(e))


# ==============================================================================
# Service
# ==============================================================================


class AnalyticsDataService:
    """
    Computes page view analytics over Loki log windows.

    Args:
        config: Collaborators to use. If None, reads the configuration
            installed with configure().
        clock: Returns the current Unix time in seconds (default time.time)

    Raises:
        ConfigurationError: If no config is given and none is installed
    """

    def __init__(
        self,
        config: AnalyticsDataConfig | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if config is None:
            config = get_config()
        self.loki_url = config.loki_url
        self.prometheus_url = config.prometheus_url
        self.job = config.job
        self._fetch_loki = config.fetch_loki
        self.logger: DiagnosticSink = config.logger or LoggingSink()
        self._clock = clock or time.time

    # ==========================================================================
    # Event Fetch Pipeline
    # ==========================================================================

    def fetch_events(
        self, time_range: str = DEFAULT_TIME_RANGE, limit: int = DEFAULT_PAGE_VIEW_LIMIT
    ) -> list[PageViewEvent]:
        """
        Query Loki once and decode the page views in the window.

        Any transport, status or body failure is reported once through the
        diagnostic sink and yields an empty list.

        Args:
            time_range: Window length ending now (e.g. "24h", "5m")
            limit: Maximum number of raw entries requested from Loki

        Returns:
            Page views sorted by timestamp, most recent first
        """
        try:
            end_ms = int(self._clock() * 1000)
            start_ms = end_ms - parse_time_range(time_range, self.logger)

            query = page_view_query(self.job)
            path = build_query_path(query, start_ms, end_ms, limit)

            self.logger.info(
                {"time_range": time_range, "limit": limit, "query": query},
                "Fetching page views from Loki",
            )

            response = self._fetch_loki(path)
            if not response.ok:
                raise LokiQueryError(response.status_code, response.reason)

            events = decode_streams(extract_streams(response.json()), self.logger)
        except Exception as e:
            self.logger.error({"error": describe_error(e)}, "Failed to fetch page views from Loki")
            return []

        self.logger.info({"count": len(events)}, "Fetched page views from Loki")
        return sorted(events, key=lambda event: event.timestamp, reverse=True)

    def _run_metric(self, message: str, default: T, func: Callable[..., T], *args: Any) -> T:
        """Evaluate a metric, logging ``message`` and returning ``default`` on failure."""
        result = evaluate(func, *args)
        if not result.ok:
            self.logger.error({"error": result.error}, message)
        return result.unwrap_or(default)

    # ==========================================================================
    # Metrics
    # ==========================================================================

    def get_page_views(
        self, time_range: str = DEFAULT_TIME_RANGE, limit: int = DEFAULT_PAGE_VIEW_LIMIT
    ) -> list[PageViewEvent]:
        """Page views in the window, most recent first."""
        return self._run_metric(
            "Failed to fetch page views from Loki", [], self.fetch_events, time_range, limit
        )

    def get_top_pages(
        self, time_range: str = DEFAULT_TIME_RANGE, limit: int = DEFAULT_RANKING_LIMIT
    ) -> list[TopPage]:
        """
        Most viewed paths in the window.

        ``limit`` bounds the ranking only; the fetch always requests
        AGGREGATION_FETCH_LIMIT entries.
        """

        def compute() -> list[TopPage]:
            events = self.fetch_events(time_range, AGGREGATION_FETCH_LIMIT)
            return aggregations.top_pages(events, limit)

        return self._run_metric("Failed to get top pages", [], compute)

    def get_unique_visitors(self, time_range: str = DEFAULT_TIME_RANGE) -> int:
        """Distinct visitors, identified by session_id falling back to client_ip."""

        def compute() -> int:
            events = self.fetch_events(time_range, AGGREGATION_FETCH_LIMIT)
            return aggregations.unique_visitors(events)

        return self._run_metric("Failed to get unique visitors", 0, compute)

    def get_active_users(self) -> int:
        """Distinct sessions seen in the last five minutes."""

        def compute() -> int:
            events = self.fetch_events(ACTIVE_USERS_TIME_RANGE, ACTIVE_USERS_FETCH_LIMIT)
            return aggregations.active_sessions(events)

        return self._run_metric("Failed to get active users", 0, compute)

    def get_average_session_duration(self, time_range: str = DEFAULT_TIME_RANGE) -> int:
        """Mean session duration in whole seconds."""

        def compute() -> int:
            events = self.fetch_events(time_range, AGGREGATION_FETCH_LIMIT)
            return aggregations.average_session_duration(events)

        return self._run_metric("Failed to calculate average session duration", 0, compute)

    def get_bounce_rate(self, time_range: str = DEFAULT_TIME_RANGE) -> int:
        """Percentage of sessions with a single page view."""

        def compute() -> int:
            events = self.fetch_events(time_range, AGGREGATION_FETCH_LIMIT)
            return aggregations.bounce_rate(events)

        return self._run_metric("Failed to calculate bounce rate", 0, compute)

    def get_traffic_sources(
        self, time_range: str = DEFAULT_TIME_RANGE, limit: int = DEFAULT_RANKING_LIMIT
    ) -> list[TrafficSource]:
        """Referrer sources ranked by distinct sessions."""

        def compute() -> list[TrafficSource]:
            events = self.fetch_events(time_range, AGGREGATION_FETCH_LIMIT)
            return aggregations.traffic_sources(events, limit)

        return self._run_metric("Failed to get traffic sources", [], compute)

    # ==========================================================================
    # Rollup
    # ==========================================================================

    def get_analytics_metrics(self, time_range: str = DEFAULT_TIME_RANGE) -> AnalyticsMetrics:
        """
        Combined metrics for the window.

        Runs five independent queries in parallel (page views, top pages,
        unique visitors, average session duration, bounce rate) and waits for
        all of them. Each one already falls back to its own empty value, so a
        failing branch never affects the others.

        Returns:
            The rollup, or AnalyticsMetrics.empty() if orchestration fails
        """
        try:
            with ThreadPoolExecutor(max_workers=5, thread_name_prefix="analytics") as executor:
                futures = {
                    "page_views": executor.submit(self.get_page_views, time_range),
                    "top_pages": executor.submit(
                        self.get_top_pages, time_range, DEFAULT_RANKING_LIMIT
                    ),
                    "unique_visitors": executor.submit(self.get_unique_visitors, time_range),
                    "average_session_duration": executor.submit(
                        self.get_average_session_duration, time_range
                    ),
                    "bounce_rate": executor.submit(self.get_bounce_rate, time_range),
                }
                results = {name: future.result() for name, future in futures.items()}

            return AnalyticsMetrics(
                total_page_views=len(results["page_views"]),
                unique_visitors=results["unique_visitors"],
                top_pages=results["top_pages"],
                average_session_duration=results["average_session_duration"],
                bounce_rate=results["bounce_rate"],
            )
        except Exception as e:
            self.logger.error({"error": describe_error(e)}, "Failed to get analytics metrics")
            return AnalyticsMetrics.empty()


# ==============================================================================
# Module-level default instance
# ==============================================================================

_default_service: AnalyticsDataService | None = None


def create_analytics_data_service() -> AnalyticsDataService:
    """
    Create a service from the installed configuration and make it the default.

    Raises:
        ConfigurationError: If configure() has not been called
    """
    global _default_service
    _default_service = AnalyticsDataService()
    logger.debug("Created default analytics data service for %s", _default_service.loki_url)
    return _default_service


def get_analytics_data_service() -> AnalyticsDataService:
    """Get the default service, creating it from the installed configuration if needed."""
    if _default_service is None:
        return create_analytics_data_service()
    return _default_service
