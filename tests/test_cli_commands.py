# ==============================================================================
# Tests for CLI Commands
# ==============================================================================
"""
Unit tests for the analytics, report, status and config commands.

open_service() is patched to yield an AnalyticsDataService backed by a
FakeFetch, so no Loki instance is needed. CLI output is captured via
typer.testing.CliRunner.
"""

import json
from contextlib import nullcontext
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from loki_analytics.app import app
from loki_analytics.cli.shared import open_service
from loki_analytics.service import AnalyticsDataService

from conftest import (
    NOW_MS,
    NOW_SECONDS,
    FakeFetch,
    RecordingSink,
    entry,
    error_response,
    loki_body,
    make_config,
    ok_response,
)

runner = CliRunner()

# Paths to mock in the CLI modules (where they are imported)
_ANALYTICS_SERVICE_PATH = "loki_analytics.cli.analytics.open_service"
_REPORTS_SERVICE_PATH = "loki_analytics.cli.reports.open_service"
_STATUS_CLIENT_PATH = "loki_analytics.cli.status.LokiClient"
_SHARED_CLIENT_PATH = "loki_analytics.cli.shared.LokiClient"


def _service(response) -> nullcontext:
    """open_service() stand-in yielding a service backed by a canned response."""
    config = make_config(FakeFetch(response=response), RecordingSink())
    return nullcontext(AnalyticsDataService(config, clock=lambda: NOW_SECONDS))


def _sample_body() -> dict:
    return loki_body(
        entry(NOW_MS - 10_000, path="/", session_id="a", referrer="https://www.google.com/"),
        entry(NOW_MS - 1000, path="/docs", session_id="a", referrer="https://www.google.com/"),
        entry(NOW_MS - 5000, path="/docs", session_id="b", referrer=""),
    )


# ==============================================================================
# analytics
# ==============================================================================


class TestAnalyticsCommand:
    @patch(_ANALYTICS_SERVICE_PATH)
    def test_json_output(self, mock_service):
        mock_service.return_value = _service(ok_response(_sample_body()))
        result = runner.invoke(app, ["analytics", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data == {
            "totalPageViews": 3,
            "uniqueVisitors": 2,
            "topPages": [{"path": "/docs", "views": 2}, {"path": "/", "views": 1}],
            "averageSessionDuration": 5,
            "bounceRate": 50,
        }

    @patch(_ANALYTICS_SERVICE_PATH)
    def test_table_output(self, mock_service):
        mock_service.return_value = _service(ok_response(_sample_body()))
        result = runner.invoke(app, ["analytics", "--range", "7d"])
        assert result.exit_code == 0
        assert "WEB ANALYTICS (7d)" in result.output
        assert "Bounce Rate" in result.output
        assert "50%" in result.output
        assert "/docs" in result.output

    @patch(_ANALYTICS_SERVICE_PATH)
    def test_backend_failure_shows_zeroes(self, mock_service):
        mock_service.return_value = _service(error_response(500, "Internal Server Error"))
        result = runner.invoke(app, ["analytics", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["totalPageViews"] == 0


# ==============================================================================
# reports
# ==============================================================================


class TestReportCommands:
    @patch(_REPORTS_SERVICE_PATH)
    def test_pages_json(self, mock_service):
        mock_service.return_value = _service(ok_response(_sample_body()))
        result = runner.invoke(app, ["pages", "--limit", "1", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [{"path": "/docs", "views": 2}]

    @patch(_REPORTS_SERVICE_PATH)
    def test_pages_table(self, mock_service):
        mock_service.return_value = _service(ok_response(_sample_body()))
        result = runner.invoke(app, ["pages"])
        assert result.exit_code == 0
        assert "Top Pages" in result.output
        assert "/docs" in result.output

    @patch(_REPORTS_SERVICE_PATH)
    def test_pages_empty(self, mock_service):
        mock_service.return_value = _service(ok_response(loki_body()))
        result = runner.invoke(app, ["pages"])
        assert result.exit_code == 0
        assert "No page views" in result.output

    @patch(_REPORTS_SERVICE_PATH)
    def test_sources_json(self, mock_service):
        mock_service.return_value = _service(ok_response(_sample_body()))
        result = runner.invoke(app, ["sources", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [
            {"source": "Google", "visits": 1},
            {"source": "Direct", "visits": 1},
        ]

    @patch(_REPORTS_SERVICE_PATH)
    def test_views_json(self, mock_service):
        mock_service.return_value = _service(ok_response(_sample_body()))
        result = runner.invoke(app, ["views", "--json"])
        assert result.exit_code == 0
        views = json.loads(result.output)
        assert [view["path"] for view in views] == ["/docs", "/docs", "/"]
        assert views[0]["session_id"] == "a"

    @patch(_REPORTS_SERVICE_PATH)
    def test_visitors_json(self, mock_service):
        mock_service.return_value = _service(ok_response(_sample_body()))
        result = runner.invoke(app, ["visitors", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"uniqueVisitors": 2}

    @patch(_REPORTS_SERVICE_PATH)
    def test_active_text(self, mock_service):
        mock_service.return_value = _service(ok_response(_sample_body()))
        result = runner.invoke(app, ["active"])
        assert result.exit_code == 0
        assert "Active users (last 5m)" in result.output
        assert "2" in result.output


# ==============================================================================
# status
# ==============================================================================


class TestStatusCommand:
    @patch(_STATUS_CLIENT_PATH)
    def test_ready(self, mock_client_cls):
        mock_client_cls.return_value = MagicMock(is_ready=MagicMock(return_value=True))
        result = runner.invoke(app, ["status", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["loki"]["ready"] is True

    @patch(_STATUS_CLIENT_PATH)
    def test_not_ready_exits_1(self, mock_client_cls):
        mock_client_cls.return_value = MagicMock(is_ready=MagicMock(return_value=False))
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 1
        assert "Loki not ready" in result.output


# ==============================================================================
# config show
# ==============================================================================


class TestConfigShow:
    def test_json(self):
        result = runner.invoke(app, ["config", "show", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert set(data) == {"loki", "prometheus", "log_level"}
        assert "component=\"analytics\"" in data["loki"]["query"]

    def test_text(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "Loki" in result.output
        assert "Prometheus" in result.output


# ==============================================================================
# open_service
# ==============================================================================


class TestOpenService:
    @patch(_SHARED_CLIENT_PATH)
    def test_yields_service_backed_by_client(self, mock_client_cls):
        client = mock_client_cls.return_value
        client.fetch.return_value = ok_response(_sample_body())

        with open_service() as service:
            assert len(service.get_page_views()) == 3

        client.fetch.assert_called_once()
        client.close.assert_called_once()

    @patch(_SHARED_CLIENT_PATH)
    def test_closes_client_when_command_fails(self, mock_client_cls):
        client = mock_client_cls.return_value

        with pytest.raises(RuntimeError):
            with open_service():
                raise RuntimeError("boom")

        client.close.assert_called_once()

    @patch(_SHARED_CLIENT_PATH)
    def test_cli_command_closes_client(self, mock_client_cls):
        client = mock_client_cls.return_value
        client.fetch.return_value = ok_response(_sample_body())

        result = runner.invoke(app, ["visitors", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"uniqueVisitors": 2}
        client.close.assert_called_once()
