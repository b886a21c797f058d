"""Custom report commands."""

import json

import click
from sqlalchemy.exc import SQLAlchemyError

from reportit.cli.date_filters import resolve_cli_date_range
from reportit.cli.error_handling import handle_domain_error, handle_store_error
from reportit.domain.entities import ExecuteReportOverrides, TimeframeType
from reportit.domain.errors import DomainError
from reportit.domain.reports import ReportsService
from reportit.domain.results import ReportResult


def _format_value(value) -> str:
    # COUNT metrics are plain integers
    if isinstance(value, int):
        return str(value)
    return f"{value:,.2f}"


def _display_result(result: ReportResult) -> None:
    """Print a report result as a plain text table."""
    timeframe = result.timeframe
    click.echo(f"{result.name}")
    click.echo(
        f"{timeframe.label} ({timeframe.start_date.isoformat()} to "
        f"{timeframe.end_date.isoformat()})"
    )
    click.echo()

    if not result.data:
        click.echo("No transactions found.")
        return

    for point in result.data:
        value_str = _format_value(point.value)
        if point.date is not None:
            # Row listing
            click.echo(f"{point.date.isoformat()}  {point.label:<40} {value_str:>14}")
        else:
            percentage = f"{point.percentage:.2f}%" if point.percentage is not None else ""
            click.echo(f"{point.label:<40} {value_str:>14} {percentage:>8}")

    summary = result.summary
    click.echo()
    click.echo(
        f"Total: {summary.total:,.2f}  Count: {summary.count}  "
        f"Average: {summary.average:,.2f}"
    )


@click.command("run")
@click.argument("report_id")
@click.option("--user", "owner_id", required=True, help="ID of the user running the report")
@click.option(
    "--timeframe",
    type=click.Choice([t.value for t in TimeframeType], case_sensitive=False),
    help="Override the saved timeframe",
)
@click.option("--start-date", help="Override start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="Override end date (YYYY-MM-DD or relative like 'today')")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def run_report(
    ctx,
    report_id: str,
    owner_id: str,
    timeframe: str | None,
    start_date: str | None,
    end_date: str | None,
    as_json: bool,
):
    """Execute a saved report.

    Examples:
        reportit run 3f2a... --user alice
        reportit run 3f2a... --user alice --timeframe CUSTOM --start-date 2025-01-01 --end-date 2025-03-31
    """
    db = ctx.obj["db"]
    service = ReportsService(db)

    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)
    overrides = ExecuteReportOverrides(
        timeframe_type=TimeframeType(timeframe.upper()) if timeframe else None,
        start_date=start,
        end_date=end,
    )

    try:
        result = service.execute(owner_id, report_id, overrides)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    except SQLAlchemyError as e:
        handle_store_error(ctx, e)
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    _display_result(result)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(run_report)
