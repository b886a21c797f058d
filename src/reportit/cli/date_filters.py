"""CLI helpers for date range resolution."""

from datetime import date
from typing import Optional

import click

from reportit.utils.date_parser import parse_date


def parse_cli_date(ctx: click.Context, value: Optional[str], label: str) -> Optional[date]:
    """Parse an optional date option, exiting with an error if it is invalid."""
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: Optional[str],
    end_date: Optional[str],
) -> tuple[Optional[date], Optional[date]]:
    """Resolve CLI start and end dates.

    Rejects a range whose start falls after its end.
    """
    start = parse_cli_date(ctx, start_date, "start date")
    end = parse_cli_date(ctx, end_date, "end date")

    if start is not None and end is not None and start > end:
        click.echo("Error: Start date must not be after end date.", err=True)
        ctx.exit(1)

    return start, end
