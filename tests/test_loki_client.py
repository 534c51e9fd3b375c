# ==============================================================================
# Tests for the Loki HTTP Client
# ==============================================================================
"""
Unit tests for LokiClient with a mocked requests.Session.

No real Loki instance is needed.
"""

from unittest.mock import MagicMock

import pytest
import requests

from loki_analytics.infrastructure.loki import LokiClient


def _client(**kwargs) -> tuple[LokiClient, MagicMock]:
    session = MagicMock(spec=requests.Session)
    return LokiClient("http://loki:3100/", session=session, **kwargs), session


class TestFetch:
    def test_joins_path_onto_base_url(self):
        client, session = _client(timeout_seconds=4)
        client.fetch("/loki/api/v1/query_range?query=x&limit=5")
        session.get.assert_called_once_with(
            "http://loki:3100/loki/api/v1/query_range?query=x&limit=5", timeout=4
        )

    def test_adds_missing_leading_slash(self):
        client, session = _client()
        client.fetch("ready")
        assert session.get.call_args.args[0] == "http://loki:3100/ready"

    def test_returns_response_unchanged(self):
        client, session = _client()
        response = MagicMock(ok=False, status_code=500, reason="Internal Server Error")
        session.get.return_value = response
        assert client.fetch("/x") is response

    def test_single_attempt_on_error(self):
        client, session = _client()
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(requests.exceptions.ConnectionError):
            client.fetch("/x")
        assert session.get.call_count == 1


class TestIsReady:
    def test_ready(self):
        client, session = _client()
        session.get.return_value = MagicMock(ok=True)
        assert client.is_ready() is True
        assert session.get.call_args.args[0] == "http://loki:3100/ready"

    def test_not_ready_status(self):
        client, session = _client()
        session.get.return_value = MagicMock(ok=False)
        assert client.is_ready() is False

    def test_unreachable(self):
        client, session = _client()
        session.get.side_effect = requests.exceptions.Timeout()
        assert client.is_ready() is False


class TestClose:
    def test_closes_session(self):
        client, session = _client()
        client.close()
        session.close.assert_called_once()
