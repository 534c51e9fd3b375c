# ==============================================================================
# CLI Commands Module
# ==============================================================================
"""
CLI commands for loki-analytics.

Commands are organized into separate modules for maintainability:
- shared.py: Common utilities, constants, and helpers
- analytics.py: Combined rollup command
- reports.py: Single-metric report commands
- config.py: Configuration display
- status.py: Loki readiness check
"""

from loki_analytics.cli.shared import (
    # Constants
    BOX_WIDTH,
    # Classes
    Box,
    Colors,
    Icons,
    # Aliases
    B,
    C,
    I,
    # Box drawing helpers (private)
    _box_bottom,
    _box_header,
    _box_line,
    _empty_line,
    _section_header,
    _visible_len,
    # Service helpers
    open_service,
    setup_logging,
)

__all__ = [
    # Constants
    "BOX_WIDTH",
    # Classes
    "Box",
    "Colors",
    "Icons",
    # Aliases
    "B",
    "C",
    "I",
    # Box drawing helpers (private - kept for internal use)
    "_box_bottom",
    "_box_header",
    "_box_line",
    "_empty_line",
    "_section_header",
    "_visible_len",
    # Service helpers
    "open_service",
    "setup_logging",
]
