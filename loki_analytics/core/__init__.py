# ==============================================================================
# Core Domain Logic
# ==============================================================================
"""
Pure domain logic with no I/O.

This module contains:
- Domain models (PageViewEvent, TopPage, TrafficSource, AnalyticsMetrics)
- Time range parsing and Loki log entry decoding
- Session reconstruction and metric aggregations
- Referrer classification

All code here is framework-agnostic and easily unit-testable.
"""

from loki_analytics.core.aggregations import (
    active_sessions,
    average_session_duration,
    bounce_rate,
    round_half_up,
    top_pages,
    traffic_sources,
    unique_visitors,
)
from loki_analytics.core.decoder import (
    LogEntryDecodeError,
    MalformedResponseError,
    decode_log_entry,
    decode_streams,
    extract_streams,
)
from loki_analytics.core.models import AnalyticsMetrics, PageViewEvent, TopPage, TrafficSource
from loki_analytics.core.referrers import classify_referrer
from loki_analytics.core.sessions import SessionWindow, build_session_windows
from loki_analytics.core.time_range import parse_time_range

__all__ = [
    # Models
    "AnalyticsMetrics",
    "PageViewEvent",
    "SessionWindow",
    "TopPage",
    "TrafficSource",
    # Decoding
    "LogEntryDecodeError",
    "MalformedResponseError",
    "decode_log_entry",
    "decode_streams",
    "extract_streams",
    "parse_time_range",
    # Aggregations
    "active_sessions",
    "average_session_duration",
    "bounce_rate",
    "build_session_windows",
    "classify_referrer",
    "round_half_up",
    "top_pages",
    "traffic_sources",
    "unique_visitors",
]
