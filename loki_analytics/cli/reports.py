# ==============================================================================
# Report Commands
# ==============================================================================
"""
Single-metric report commands for the loki-analytics CLI.

Tables are rendered with rich; every command also supports --json.
"""

import json as _json
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from loki_analytics.cli.shared import C, open_service


def _print_counter(label: str, value: int, json_key: str, json_output: bool) -> None:
    if json_output:
        print(_json.dumps({json_key: value}))
        return
    print(f"\n  {C.BOLD}{label}:{C.RESET}  {value:,}\n")


# ==============================================================================
# Commands
# ==============================================================================


def report_pages(
    time_range: Annotated[
        str, typer.Option("--range", "-r", help="Time range, e.g. 30s, 15m, 24h, 7d")
    ] = "24h",
    limit: Annotated[int, typer.Option("--limit", "-n", help="Number of pages to show")] = 10,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show the most viewed pages.

    Examples:
        loki-analytics pages
        loki-analytics pages --range 7d --limit 25
    """
    with open_service() as service:
        pages = service.get_top_pages(time_range, limit)

    if json_output:
        print(_json.dumps([page.model_dump() for page in pages], indent=2))
        return

    if not pages:
        print(f"\n  {C.BRIGHT_YELLOW}No page views in the last {time_range}{C.RESET}\n")
        return

    table = Table(title=f"Top Pages — last {time_range}", show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Path")
    table.add_column("Views", justify="right")
    for rank, page in enumerate(pages, start=1):
        table.add_row(str(rank), page.path, f"{page.views:,}")

    print()
    Console().print(table)
    print()


def report_sources(
    time_range: Annotated[
        str, typer.Option("--range", "-r", help="Time range, e.g. 30s, 15m, 24h, 7d")
    ] = "24h",
    limit: Annotated[int, typer.Option("--limit", "-n", help="Number of sources to show")] = 10,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show traffic sources ranked by distinct sessions.

    Referrers are grouped into Google, Bing, DuckDuckGo, Twitter, Facebook,
    Reddit and GitHub; other referrers are listed by hostname and visits with
    no usable referrer count as Direct.

    Examples:
        loki-analytics sources
        loki-analytics sources --range 30d --json
    """
    with open_service() as service:
        sources = service.get_traffic_sources(time_range, limit)

    if json_output:
        print(_json.dumps([source.model_dump() for source in sources], indent=2))
        return

    if not sources:
        print(f"\n  {C.BRIGHT_YELLOW}No traffic in the last {time_range}{C.RESET}\n")
        return

    table = Table(
        title=f"Traffic Sources — last {time_range}", show_header=True, header_style="bold"
    )
    table.add_column("Source")
    table.add_column("Visits", justify="right")
    for source in sources:
        table.add_row(source.source, f"{source.visits:,}")

    print()
    Console().print(table)
    print()


def report_views(
    time_range: Annotated[
        str, typer.Option("--range", "-r", help="Time range, e.g. 30s, 15m, 24h, 7d")
    ] = "1h",
    limit: Annotated[int, typer.Option("--limit", "-n", help="Maximum entries to fetch")] = 1000,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """List recent page views, newest first.

    Examples:
        loki-analytics views
        loki-analytics views --range 15m --limit 50
    """
    with open_service() as service:
        views = service.get_page_views(time_range, limit)

    if json_output:
        print(_json.dumps([view.model_dump(mode="json") for view in views], indent=2))
        return

    if not views:
        print(f"\n  {C.BRIGHT_YELLOW}No page views in the last {time_range}{C.RESET}\n")
        return

    table = Table(title=f"Page Views — last {time_range}", show_header=True, header_style="bold")
    table.add_column("Time")
    table.add_column("Path")
    table.add_column("Session")
    table.add_column("Referrer")
    for view in views:
        table.add_row(
            view.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            view.path,
            view.session_id or "-",
            view.referrer or "-",
        )

    print()
    Console().print(table)
    print(f"  {C.DIM}{len(views):,} page views{C.RESET}")
    print()


def report_visitors(
    time_range: Annotated[
        str, typer.Option("--range", "-r", help="Time range, e.g. 30s, 15m, 24h, 7d")
    ] = "24h",
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show the number of unique visitors.

    Examples:
        loki-analytics visitors --range 7d
    """
    with open_service() as service:
        visitors = service.get_unique_visitors(time_range)
    _print_counter(f"Unique visitors (last {time_range})", visitors, "uniqueVisitors", json_output)


def report_active(
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show sessions active in the last five minutes.

    Examples:
        loki-analytics active
    """
    with open_service() as service:
        active = service.get_active_users()
    _print_counter("Active users (last 5m)", active, "activeUsers", json_output)
