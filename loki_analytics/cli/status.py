# ==============================================================================
# Status Command
# ==============================================================================
"""
Status command for the loki-analytics CLI.

Checks whether the configured Loki instance is ready to serve queries.
"""

import json
import time
from typing import Annotated

import typer

from loki_analytics.cli.shared import C, I
from loki_analytics.infrastructure.loki import LokiClient
from loki_analytics.utils.config import get_settings


# ==============================================================================
# Commands
# ==============================================================================


def show_status(
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Check that Loki is reachable and ready.

    Exits with code 1 when Loki is not ready.

    Examples:
        loki-analytics status
        loki-analytics status --json
    """
    settings = get_settings()
    client = LokiClient(settings.loki.url, timeout_seconds=settings.loki.timeout_seconds)

    started = time.monotonic()
    try:
        ready = client.is_ready()
    finally:
        client.close()
    elapsed_ms = (time.monotonic() - started) * 1000

    if json_output:
        print(
            json.dumps(
                {"loki": {"url": settings.loki.url, "ready": ready, "elapsed_ms": round(elapsed_ms)}}
            )
        )
    elif ready:
        print(
            f"\n  {C.BRIGHT_GREEN}{I.CHECK} Loki ready{C.RESET}  "
            f"{C.DIM}{settings.loki.url} ({elapsed_ms:.0f} ms){C.RESET}\n"
        )
    else:
        print(f"\n  {C.BRIGHT_RED}{I.CROSS} Loki not ready{C.RESET}  {C.DIM}{settings.loki.url}{C.RESET}\n")

    if not ready:
        raise typer.Exit(1)
