# ==============================================================================
# Metric Aggregations - Pure Domain Logic
# ==============================================================================
"""
Pure metric computations over a collection of PageViewEvent.

Nothing here talks to Loki or logs: every function takes already decoded
events and returns a plain value, so each metric can be unit tested without
mocks. The analytics service supplies the events and handles failures.
"""

import math
from collections import Counter
from collections.abc import Iterable, Sequence

from loki_analytics.core.models import PageViewEvent, TopPage, TrafficSource
from loki_analytics.core.referrers import classify_referrer
from loki_analytics.core.sessions import build_session_windows


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up (15.5 -> 16)."""
    return math.floor(value + 0.5)


def top_pages(events: Iterable[PageViewEvent], limit: int = 10) -> list[TopPage]:
    """
    Rank paths by view count, most viewed first.

    Paths with equal counts keep the order in which they were first seen.
    """
    counts = Counter(event.path for event in events)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [TopPage(path=path, views=views) for path, views in ranked[:limit]]


def visitor_identity(event: PageViewEvent) -> str | None:
    """session_id if present, else client_ip, else None (not counted)."""
    return event.session_id or event.client_ip or None


def unique_visitors(events: Iterable[PageViewEvent]) -> int:
    """Count distinct visitor identities."""
    identities = {visitor_identity(event) for event in events}
    identities.discard(None)
    return len(identities)


def active_sessions(events: Iterable[PageViewEvent]) -> int:
    """Count distinct non-empty session_ids. No client_ip fallback."""
    return len({event.session_id for event in events if event.session_id})


def average_session_duration(events: Iterable[PageViewEvent]) -> int:
    """
    Mean session duration in whole seconds.

    Returns:
        0 when no event carries a session_id
    """
    windows = build_session_windows(events)
    if not windows:
        return 0
    total_ms = sum(window.duration_ms for window in windows.values())
    return round_half_up(total_ms / len(windows) / 1000)


def bounce_rate(events: Iterable[PageViewEvent]) -> int:
    """
    Percentage (0-100) of sessions with exactly one page view.

    Returns:
        0 when no event carries a session_id
    """
    windows = build_session_windows(events)
    if not windows:
        return 0
    bounced = sum(1 for window in windows.values() if window.is_bounce)
    return round_half_up(bounced / len(windows) * 100)


def traffic_sources(events: Sequence[PageViewEvent], limit: int = 10) -> list[TrafficSource]:
    """
    Count distinct sessions per classified referrer source.

    Every event creates its bucket, but only events with a session_id add to
    its visit count. Buckets are ranked by visits, most first.
    """
    sessions_by_source: dict[str, set[str]] = {}
    for event in events:
        sessions = sessions_by_source.setdefault(classify_referrer(event.referrer), set())
        if event.session_id:
            sessions.add(event.session_id)

    ranked = sorted(sessions_by_source.items(), key=lambda item: len(item[1]), reverse=True)
    return [TrafficSource(source=source, visits=len(sessions)) for source, sessions in ranked[:limit]]
