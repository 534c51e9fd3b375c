# ==============================================================================
# Loki HTTP Client
# ==============================================================================
"""
Thin requests-based client for the Loki HTTP API.

LokiClient.fetch is the default backend-fetch collaborator injected into
AnalyticsDataService. It issues exactly one GET per call with a configurable
timeout and hands the raw response back; interpreting the status and body is
the analytics service's job. Requests are never retried.

API Documentation: https://grafana.com/docs/loki/latest/reference/loki-http-api/
"""

import logging

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10  # seconds
READY_ENDPOINT = "/ready"


class LokiClient:
    """
    HTTP client bound to one Loki base URL.

    Args:
        base_url: Loki base URL, e.g. "http://loki:3100"
        timeout_seconds: Timeout applied to every request
        session: Optional requests.Session (created if omitted)
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    def url_for(self, path: str) -> str:
        """Join a request path onto the base URL."""
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def fetch(self, path: str) -> requests.Response:
        """
        GET a Loki API path.

        Args:
            path: Path with query string, relative to the base URL

        Returns:
            The response, whatever its status

        Raises:
            requests.exceptions.RequestException: On connection errors and timeouts
        """
        url = self.url_for(path)
        logger.debug("GET %s", url)
        return self._session.get(url, timeout=self.timeout_seconds)

    def is_ready(self) -> bool:
        """
        Check Loki's readiness endpoint.

        Returns:
            True if Loki answered /ready with a success status, False if it
            answered otherwise or could not be reached.
        """
        try:
            response = self._session.get(self.url_for(READY_ENDPOINT), timeout=self.timeout_seconds)
        except requests.exceptions.RequestException as e:
            logger.debug("Loki readiness check failed: %s", e)
            return False
        return response.ok

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()
