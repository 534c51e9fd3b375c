# ==============================================================================
# Loki Analytics Utilities
# ==============================================================================
"""
Shared utilities for loki-analytics.

This module exports configuration for use throughout the package.
"""

from loki_analytics.utils.config import (
    AnalyticsDataConfig,
    ConfigurationError,
    LokiSettings,
    PrometheusSettings,
    Settings,
    build_config_from_settings,
    configure,
    get_config,
    get_settings,
    reset_config,
)

__all__ = [
    # Injected configuration
    "AnalyticsDataConfig",
    "ConfigurationError",
    "configure",
    "get_config",
    "reset_config",
    "build_config_from_settings",
    # Environment settings
    "LokiSettings",
    "PrometheusSettings",
    "Settings",
    "get_settings",
]
