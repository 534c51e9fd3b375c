# ==============================================================================
# Web Analytics Domain Models
# ==============================================================================
"""
Pydantic models for decoded page-view events and computed analytics.

These models are used for:
- Validating fields decoded from Loki log lines
- Shaping the results returned by the analytics service
- JSON output from the CLI

This module is part of the core domain layer and has no external dependencies
beyond Pydantic.
"""

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class PageViewEvent(BaseModel):
    """
    Represents a single page view decoded from a Loki log line.

    Only ``path`` is guaranteed; every other field is best-effort and is
    carried through exactly as it appeared in the log payload.

    Attributes:
        timestamp: When the page view was logged (UTC)
        path: URL path, "/" when the payload has none
        session_id: Session identifier assigned by the web tier
        user_id: Authenticated user identifier
        client_ip: Client network address
        referrer: Raw referrer URL, possibly empty or malformed
        user_agent: Raw User-Agent header
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    timestamp: datetime = Field(..., description="Event time (UTC)")
    path: str = Field(default="/", description="URL path")
    session_id: str | None = Field(default=None, description="Session identifier")
    user_id: str | None = Field(default=None, description="User identifier")
    client_ip: str | None = Field(default=None, description="Client IP address")
    referrer: str | None = Field(default=None, description="Referrer URL")
    user_agent: str | None = Field(default=None, description="User-Agent header")

    @property
    def timestamp_ms(self) -> int:
        """Event time as Unix milliseconds."""
        return (self.timestamp - EPOCH) // timedelta(milliseconds=1)


class TopPage(BaseModel):
    """A path and how many times it was viewed."""

    path: str
    views: int


class TrafficSource(BaseModel):
    """A classified referrer source and its distinct session count."""

    source: str
    visits: int


class AnalyticsMetrics(BaseModel):
    """
    Aggregated analytics for a time range.

    Dumps with camelCase keys when ``by_alias=True`` so the JSON shape is
    ``{"totalPageViews", "uniqueVisitors", "topPages",
    "averageSessionDuration", "bounceRate"}``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_page_views: int = Field(default=0, description="Page views in the window")
    unique_visitors: int = Field(default=0, description="Distinct visitor identities")
    top_pages: list[TopPage] = Field(default_factory=list, description="Most viewed paths")
    average_session_duration: int = Field(
        default=0, description="Mean session duration in whole seconds"
    )
    bounce_rate: int = Field(default=0, description="Single-view sessions, percent (0-100)")

    @classmethod
    def empty(cls) -> "AnalyticsMetrics":
        """The zeroed rollup returned when nothing could be computed."""
        return cls()
