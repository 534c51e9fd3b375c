# ==============================================================================
# Tests for Time Range Parsing
# ==============================================================================
"""
Unit tests for parse_time_range().

Tests cover:
- Each unit suffix (s, m, h, d)
- Zero and very large values
- Fallback to 24 hours for invalid tokens
- Exactly one warning per invalid token when a sink is given
"""

import pytest

from loki_analytics.core.time_range import DEFAULT_TIME_RANGE_MS, parse_time_range


# ==============================================================================
# Valid tokens
# ==============================================================================


class TestValidTokens:
    """Tokens matching N{s,m,h,d} parse exactly."""

    def test_seconds(self):
        assert parse_time_range("30s") == 30_000

    def test_minutes(self):
        assert parse_time_range("5m") == 300_000

    def test_hours(self):
        assert parse_time_range("24h") == 86_400_000

    def test_days(self):
        assert parse_time_range("7d") == 604_800_000

    def test_single_unit_values(self):
        assert parse_time_range("1s") == 1000
        assert parse_time_range("1m") == 60_000
        assert parse_time_range("1h") == 3_600_000
        assert parse_time_range("1d") == 86_400_000

    def test_zero(self):
        """Zero is a valid value, not an error."""
        assert parse_time_range("0h") == 0

    def test_large_values_parse_exactly(self):
        assert parse_time_range("999999d") == 999_999 * 86_400_000
        assert parse_time_range("123456789012345678901s") == 123456789012345678901 * 1000

    def test_valid_token_does_not_warn(self, sink):
        parse_time_range("15m", sink)
        assert sink.records == []


# ==============================================================================
# Invalid tokens
# ==============================================================================


class TestInvalidTokens:
    """Anything else falls back to 24 hours."""

    @pytest.mark.parametrize(
        "token",
        ["", "abc", "100", "5x", "-5m", "5.5h", "h", " 5m", "5m ", "5M", "5mm", "５m"],
    )
    def test_defaults_to_24h(self, token):
        assert parse_time_range(token) == DEFAULT_TIME_RANGE_MS == 86_400_000

    def test_warns_once_with_token(self, sink):
        parse_time_range("bogus", sink)
        assert sink.records == [
            ("warning", {"time_range": "bogus"}, "Invalid time range format, defaulting to 24h")
        ]

    def test_no_sink_does_not_raise(self):
        assert parse_time_range("nope") == 86_400_000
