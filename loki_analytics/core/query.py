# ==============================================================================
# Loki Query Construction
# ==============================================================================
"""
Build Loki query_range request paths for page view events.
"""

from urllib.parse import quote

QUERY_RANGE_ENDPOINT = "/loki/api/v1/query_range"
DEFAULT_JOB = "stonewall-observability"

NANOS_PER_MILLI = 1_000_000

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def page_view_query(job: str = DEFAULT_JOB) -> str:
    """LogQL selecting analytics page view events from the given job."""
    return f'{{job="{job}"}} | json | component="analytics" | event_type="page_view"'


def encode_uri_component(value: str) -> str:
    """Percent-encode a URL component (RFC 3986, encodeURIComponent-compatible)."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_query_path(query: str, start_ms: int, end_ms: int, limit: int) -> str:
    """
    Build the query_range path for a LogQL query and time window.

    Args:
        query: LogQL expression
        start_ms: Window start, Unix milliseconds
        end_ms: Window end, Unix milliseconds
        limit: Maximum number of entries Loki should return

    Returns:
        Path with query string, relative to the Loki base URL
    """
    return (
        f"{QUERY_RANGE_ENDPOINT}?query={encode_uri_component(query)}"
        f"&start={start_ms * NANOS_PER_MILLI}&end={end_ms * NANOS_PER_MILLI}&limit={limit}"
    )
