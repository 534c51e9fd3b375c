# ==============================================================================
# Diagnostic Sink Abstract Base Class
# ==============================================================================
"""
Abstract interface for structured diagnostics.

The analytics service reports query progress and recovered failures through
three channels (info, warning, error), each taking a context dict and a short
fixed message. Callers may inject their own sink; otherwise the service uses
LoggingSink, which forwards to the standard library logging module.

Implementations: LoggingSink
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

DEFAULT_LOGGER_NAME = "loki_analytics"


class DiagnosticSink(ABC):
    """
    Structured diagnostics channel.

    Every method receives a context dict (offending payload, counts, error
    detail) and a short fixed message describing what happened.
    """

    @abstractmethod
    def info(self, context: dict[str, Any], message: str) -> None:
        """Report query progress (start, finish, counts)."""
        ...

    @abstractmethod
    def warning(self, context: dict[str, Any], message: str) -> None:
        """Report a recovered per-item problem (bad log line, bad time range)."""
        ...

    @abstractmethod
    def error(self, context: dict[str, Any], message: str) -> None:
        """Report a recovered failure of a whole fetch or computation."""
        ...


class LoggingSink(DiagnosticSink):
    """
    DiagnosticSink backed by a standard library logger.

    Records are formatted as ``"<message> <context>"``; the context dict is
    also attached to the record as ``record.context``.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)

    def info(self, context: dict[str, Any], message: str) -> None:
        self._logger.info("%s %s", message, context, extra={"context": context})

    def warning(self, context: dict[str, Any], message: str) -> None:
        self._logger.warning("%s %s", message, context, extra={"context": context})

    def error(self, context: dict[str, Any], message: str) -> None:
        self._logger.error("%s %s", message, context, extra={"context": context})
