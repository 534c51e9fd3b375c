# ==============================================================================
# Loki Analytics CLI
# ==============================================================================
"""
Command-line interface for web traffic analytics computed from Loki logs.

Usage:
    loki-analytics --help
    loki-analytics analytics --range 24h
    loki-analytics pages --limit 20
    loki-analytics sources --range 7d
    loki-analytics views --range 15m
    loki-analytics visitors
    loki-analytics active
    loki-analytics status
    loki-analytics config show
"""

# ==============================================================================
# App Configuration
# ==============================================================================
# Set consistent terminal width for help output formatting
import os
from typing import Annotated

import typer

if "COLUMNS" not in os.environ:
    os.environ["COLUMNS"] = "115"

app = typer.Typer(
    name="loki-analytics",
    help="Web traffic analytics from Loki page view logs",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

from loki_analytics.cli.shared import setup_logging


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable INFO logging")] = False,
) -> None:
    """Web traffic analytics from Loki page view logs."""
    setup_logging(verbose)


# Analytics command is imported from loki_analytics.cli.analytics
from loki_analytics.cli.analytics import show_analytics

app.command("analytics")(show_analytics)

# Report commands are imported from loki_analytics.cli.reports
from loki_analytics.cli.reports import (
    report_active,
    report_pages,
    report_sources,
    report_views,
    report_visitors,
)

app.command("pages")(report_pages)
app.command("sources")(report_sources)
app.command("views")(report_views)
app.command("visitors")(report_visitors)
app.command("active")(report_active)

# Status command is imported from loki_analytics.cli.status
from loki_analytics.cli.status import show_status

app.command("status")(show_status)

config_app = typer.Typer(
    help="Configuration management",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

# Register config commands from cli.config module
from loki_analytics.cli.config import config_show

config_app.command("show")(config_show)


# ==============================================================================
# Entry Point
# ==============================================================================


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
