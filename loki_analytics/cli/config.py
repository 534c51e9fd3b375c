# ==============================================================================
# Config Commands
# ==============================================================================
"""
Configuration commands for the loki-analytics CLI.
"""

import json
from typing import Annotated

import typer

from loki_analytics.cli.shared import C
from loki_analytics.core.query import page_view_query
from loki_analytics.utils.config import get_settings


# ==============================================================================
# Commands
# ==============================================================================


def config_show(
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output configuration as JSON")
    ] = False,
) -> None:
    """Display the effective configuration."""
    settings = get_settings()
    query = page_view_query(settings.loki.job)

    # JSON output mode
    if json_output:
        config = {
            "loki": {
                "url": settings.loki.url,
                "job": settings.loki.job,
                "timeout_seconds": settings.loki.timeout_seconds,
                "query": query,
            },
            "prometheus": {
                "url": settings.prometheus.url,
            },
            "log_level": settings.log_level,
        }
        print(json.dumps(config, indent=2))
        return

    # Human-readable output
    print()
    print(f"{C.BOLD}Configuration{C.RESET}")
    print()

    print(f"{C.CYAN}Loki{C.RESET}")
    print(f"  URL:        {C.WHITE}{settings.loki.url}{C.RESET}")
    print(f"  Job:        {C.WHITE}{settings.loki.job}{C.RESET}")
    print(f"  Timeout:    {C.WHITE}{settings.loki.timeout_seconds:g}s{C.RESET}")
    print(f"  Query:      {C.DIM}{query}{C.RESET}")
    print()

    print(f"{C.CYAN}Prometheus{C.RESET}")
    print(f"  URL:        {C.WHITE}{settings.prometheus.url}{C.RESET}")
    print()

    print(f"{C.CYAN}Logging{C.RESET}")
    print(f"  Level:      {C.WHITE}{settings.log_level}{C.RESET}")
    print()
