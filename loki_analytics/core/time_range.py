# ==============================================================================
# Time Range Parsing
# ==============================================================================
"""
Parse human-readable duration tokens ("30s", "5m", "24h", "7d") into milliseconds.

Invalid tokens are not an error: they fall back to 24 hours and, when a
diagnostic sink is supplied, emit a single warning naming the token.
"""

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loki_analytics.base.diagnostics import DiagnosticSink

_TIME_RANGE_PATTERN = re.compile(r"^(\d+)([smhd])$", re.ASCII)

_MULTIPLIERS = {
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
}

DEFAULT_TIME_RANGE_MS = 24 * 60 * 60 * 1000


def parse_time_range(time_range: str, logger: "DiagnosticSink | None" = None) -> int:
    """Parse a time range token (e.g., '24h', '5m', '30s', '7d') to milliseconds.

    Args:
        time_range: Duration token with unit suffix (s, m, h or d)
        logger: Optional diagnostic sink warned about invalid tokens

    Returns:
        Duration in milliseconds, or 24 hours for an invalid token
    """
    match = _TIME_RANGE_PATTERN.fullmatch(time_range) if isinstance(time_range, str) else None
    if not match:
        if logger is not None:
            logger.warning({"time_range": time_range}, "Invalid time range format, defaulting to 24h")
        return DEFAULT_TIME_RANGE_MS

    value = int(match.group(1))
    unit = match.group(2)
    return value * _MULTIPLIERS[unit]
