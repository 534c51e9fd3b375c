# ==============================================================================
# Session Windows - Pure Domain Logic
# ==============================================================================
"""
Reconstruct per-session windows from an unordered page view collection.

Loki hands back an append-only window that may be out of order, so a session's
extent is the min/max over all of its events rather than first/last by arrival.
Only events with a non-empty session_id take part.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

from loki_analytics.core.models import PageViewEvent


@dataclass
class SessionWindow:
    """
    Extent and size of one session within the queried window.

    Attributes:
        first_seen: Earliest event time seen for the session
        last_seen: Latest event time seen for the session
        view_count: Number of page views folded into the session
    """

    first_seen: datetime
    last_seen: datetime
    view_count: int = 0

    @classmethod
    def start(cls, event: PageViewEvent) -> "SessionWindow":
        """Open a window for a session's first observed event."""
        return cls(first_seen=event.timestamp, last_seen=event.timestamp, view_count=1)

    def add(self, event: PageViewEvent) -> None:
        """Fold another event of the same session into the window."""
        self.first_seen = min(self.first_seen, event.timestamp)
        self.last_seen = max(self.last_seen, event.timestamp)
        self.view_count += 1

    @property
    def duration_ms(self) -> int:
        """Session duration in whole milliseconds."""
        return (self.last_seen - self.first_seen) // timedelta(milliseconds=1)

    @property
    def is_bounce(self) -> bool:
        """A session bounces when it has exactly one page view."""
        return self.view_count == 1


def build_session_windows(events: Iterable[PageViewEvent]) -> dict[str, SessionWindow]:
    """
    Fold events into one SessionWindow per session_id.

    Events without a session_id (or with an empty one) are skipped.

    Args:
        events: Page views in any order

    Returns:
        Dict mapping session_id to its window
    """
    windows: dict[str, SessionWindow] = {}
    for event in events:
        if not event.session_id:
            continue
        window = windows.get(event.session_id)
        if window is None:
            windows[event.session_id] = SessionWindow.start(event)
        else:
            window.add(event)
    return windows
