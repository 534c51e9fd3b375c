# ==============================================================================
# Analytics Command
# ==============================================================================
"""
Analytics command for the loki-analytics CLI.

Displays the combined traffic rollup (page views, visitors, session metrics,
top pages) computed from Loki page view logs.
"""

import json
from typing import Annotated

import typer

from loki_analytics.cli.shared import (
    BOX_WIDTH,
    C,
    _box_bottom,
    _box_header,
    _box_line,
    _empty_line,
    _section_header,
    open_service,
)


# ==============================================================================
# Commands
# ==============================================================================


def show_analytics(
    time_range: Annotated[
        str, typer.Option("--range", "-r", help="Time range, e.g. 30s, 15m, 24h, 7d")
    ] = "24h",
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output as JSON for scripting")
    ] = False,
) -> None:
    """Show the traffic rollup for a time range.

    Displays total page views, unique visitors, average session duration,
    bounce rate and the ten most viewed pages. Every run queries Loki afresh.

    Examples:
        loki-analytics analytics              # Last 24 hours
        loki-analytics analytics --range 7d   # Last week
        loki-analytics analytics --json       # JSON output for scripting
    """
    with open_service() as service:
        metrics = service.get_analytics_metrics(time_range)

    # JSON output mode
    if json_output:
        print(json.dumps(metrics.model_dump(by_alias=True), indent=2))
        return

    W = BOX_WIDTH

    print()
    print(_box_header(f"WEB ANALYTICS ({time_range})", W))
    print(_empty_line(W))

    rows = [
        ("Page Views", f"{metrics.total_page_views:,}"),
        ("Unique Visitors", f"{metrics.unique_visitors:,}"),
        ("Avg Session Duration", f"{metrics.average_session_duration:,}s"),
        ("Bounce Rate", f"{metrics.bounce_rate}%"),
    ]
    for label, value in rows:
        print(_box_line(f"  {label:<26}{C.WHITE}{value:>12}{C.RESET}", W))

    print(_empty_line(W))
    print(_section_header("Top Pages", W))

    if not metrics.top_pages:
        print(_box_line(f"  {C.DIM}No page views in this range{C.RESET}", W))
    else:
        # Leave room for the view count column
        path_width = W - 2 - 16
        for page in metrics.top_pages:
            path = page.path if len(page.path) <= path_width else page.path[: path_width - 1] + "…"
            print(_box_line(f"  {path:<{path_width}}{page.views:>12,}", W))

    print(_empty_line(W))
    print(_box_bottom(W))
    print()
