# ==============================================================================
# Shared Test Fixtures
# ==============================================================================
"""
Pytest fixtures and helpers shared across all test modules.

Provides:
- RecordingSink capturing diagnostics as (level, context, message) triples
- Fake Loki responses and a recording fetch function
- Clean module-level configuration per test (automatic reset)
"""

import json
from dataclasses import dataclass, field
from typing import Any

import pytest

import loki_analytics.service as service_module
from loki_analytics.base.diagnostics import DiagnosticSink
from loki_analytics.service import AnalyticsDataService
from loki_analytics.utils.config import AnalyticsDataConfig, reset_config

# Fixed "now" for the service clock: 2023-11-14T22:13:20Z
NOW_SECONDS = 1_700_000_000.0
NOW_MS = 1_700_000_000_000


# ==============================================================================
# Helpers
# ==============================================================================


class RecordingSink(DiagnosticSink):
    """DiagnosticSink that records every call for assertions."""

    def __init__(self):
        self.records: list[tuple[str, dict, str]] = []

    def info(self, context, message):
        self.records.append(("info", context, message))

    def warning(self, context, message):
        self.records.append(("warning", context, message))

    def error(self, context, message):
        self.records.append(("error", context, message))

    def at(self, level: str) -> list[tuple[dict, str]]:
        """Records at one level as (context, message) pairs."""
        return [(context, message) for lvl, context, message in self.records if lvl == level]


@dataclass
class FakeResponse:
    """Stand-in for requests.Response."""

    body: Any = None
    ok: bool = True
    status_code: int = 200
    reason: str = "OK"
    json_error: Exception | None = None

    def json(self):
        if self.json_error is not None:
            raise self.json_error
        return self.body


@dataclass
class FakeFetch:
    """Fetch function returning a canned response (or raising) and recording paths."""

    response: FakeResponse | None = None
    error: BaseException | None = None
    paths: list[str] = field(default_factory=list)

    def __call__(self, path: str) -> FakeResponse:
        self.paths.append(path)
        if self.error is not None:
            raise self.error
        return self.response


def nano_ts(ms: int) -> str:
    """Loki-style nanosecond timestamp string from Unix milliseconds."""
    return f"{ms}000000"


def entry(ts_ms: int, **overrides) -> list[str]:
    """A Loki [timestamp, line] entry for a page view with sensible defaults."""
    payload = {
        "path": "/",
        "session_id": "sess-1",
        "client_ip": "1.2.3.4",
        "referrer": "",
        "user_agent": "Mozilla/5.0",
    }
    payload.update(overrides)
    payload = {key: value for key, value in payload.items() if value is not None}
    return [nano_ts(ts_ms), json.dumps(payload)]


def loki_body(*entries: list[str]) -> dict:
    """A query_range response body holding one stream with the given entries."""
    return {"data": {"result": [{"stream": {"job": "test"}, "values": list(entries)}]}}


def ok_response(body: Any) -> FakeResponse:
    return FakeResponse(body=body)


def error_response(status_code: int, reason: str) -> FakeResponse:
    return FakeResponse(body={}, ok=False, status_code=status_code, reason=reason)


def make_config(fetch, logger: DiagnosticSink | None = None) -> AnalyticsDataConfig:
    return AnalyticsDataConfig(
        loki_url="http://loki:3100",
        prometheus_url="http://prometheus:9090",
        fetch_loki=fetch,
        logger=logger,
    )


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def clean_config():
    """Every test starts and ends with no installed configuration."""
    reset_config()
    service_module._default_service = None
    yield
    reset_config()
    service_module._default_service = None


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def make_service(sink):
    """Factory building a service around a canned response or fetch error."""

    def _make(
        response: FakeResponse | None = None, error: BaseException | None = None
    ) -> tuple[AnalyticsDataService, FakeFetch]:
        fetch = FakeFetch(response=response, error=error)
        service = AnalyticsDataService(make_config(fetch, sink), clock=lambda: NOW_SECONDS)
        return service, fetch

    return _make
