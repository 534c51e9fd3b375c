# ==============================================================================
# Base Abstractions
# ==============================================================================
"""
Abstract base classes and protocols for the collaborators injected into the
analytics service: the log backend fetch function and the diagnostic sink.
"""

from loki_analytics.base.backend import FetchFn, FetchResponse, LokiQueryError
from loki_analytics.base.diagnostics import DiagnosticSink, LoggingSink

__all__ = [
    "DiagnosticSink",
    "FetchFn",
    "FetchResponse",
    "LokiQueryError",
    "LoggingSink",
]
