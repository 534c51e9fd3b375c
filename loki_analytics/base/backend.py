# ==============================================================================
# Log Backend Contracts
# ==============================================================================
"""
Structural contracts for the injected log-query backend.

The analytics service only needs a callable that takes an opaque query path
and returns a response object. The response contract mirrors the parts of
``requests.Response`` the service reads, so a ``requests`` call can be
injected as-is.

Implementations: LokiClient.fetch
"""

from collections.abc import Callable
from typing import Any, Protocol


class FetchResponse(Protocol):
    """Minimal HTTP response as seen by the fetch pipeline."""

    ok: bool
    status_code: int
    reason: str

    def json(self) -> Any:
        """Decode the response body. May raise on malformed content."""
        ...


FetchFn = Callable[[str], FetchResponse]


class LokiQueryError(RuntimeError):
    """The log backend answered with a non-success status."""

    def __init__(self, status_code: int, reason: str):
        super().__init__(f"Loki query failed: {status_code} {reason}")
        self.status_code = status_code
        self.reason = reason
