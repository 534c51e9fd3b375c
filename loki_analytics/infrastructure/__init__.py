# ==============================================================================
# Infrastructure Layer
# ==============================================================================
"""
Concrete adapters for external services.

Currently provides:
- loki: requests-based Loki HTTP client
"""

from loki_analytics.infrastructure.loki import LokiClient

__all__ = ["LokiClient"]
