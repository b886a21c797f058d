"""Built-in spending report commands."""

from datetime import date

import click
from sqlalchemy.exc import SQLAlchemyError

from reportit.cli.date_filters import resolve_cli_date_range
from reportit.cli.error_handling import handle_domain_error, handle_store_error
from reportit.domain.errors import DomainError
from reportit.domain.spending import SpendingReportsService


def _date_options(func):
    func = click.option("--end-date", help="End date (defaults to today)")(func)
    func = click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this year')")(func)
    func = click.option("--user", "owner_id", required=True, help="ID of the user")(func)
    return func


def _run(ctx, start_date, end_date, build):
    """Resolve dates and run a report builder, handling failures."""
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)
    try:
        return build(start, end or date.today())
    except DomainError as e:
        handle_domain_error(ctx, e)
    except SQLAlchemyError as e:
        handle_store_error(ctx, e)


@click.group()
def spending_group():
    """Built-in spending reports."""
    pass


@spending_group.command("categories")
@_date_options
@click.pass_context
def spending_categories(ctx, owner_id: str, start_date: str | None, end_date: str | None):
    """Spending by top-level category (top 15)."""
    service = SpendingReportsService(ctx.obj["db"])
    report = _run(
        ctx,
        start_date,
        end_date,
        lambda start, end: service.spending_by_category(owner_id, start, end),
    )

    if not report.data:
        click.echo("No spending found.")
        return

    for item in report.data:
        click.echo(f"{item.category_name:<40} {item.total:>14,.2f}")
    click.echo(f"{'Total':<40} {report.total_spending:>14,.2f}")


@spending_group.command("payees")
@_date_options
@click.pass_context
def spending_payees(ctx, owner_id: str, start_date: str | None, end_date: str | None):
    """Spending by payee (top 20)."""
    service = SpendingReportsService(ctx.obj["db"])
    report = _run(
        ctx,
        start_date,
        end_date,
        lambda start, end: service.spending_by_payee(owner_id, start, end),
    )

    if not report.data:
        click.echo("No spending found.")
        return

    for item in report.data:
        click.echo(f"{item.payee_name:<40} {item.total:>14,.2f}")
    click.echo(f"{'Total':<40} {report.total_spending:>14,.2f}")


@spending_group.command("trend")
@_date_options
@click.pass_context
def spending_trend(ctx, owner_id: str, start_date: str | None, end_date: str | None):
    """Monthly spending for the top 10 categories."""
    service = SpendingReportsService(ctx.obj["db"])
    report = _run(
        ctx,
        start_date,
        end_date,
        lambda start, end: service.monthly_spending_trend(owner_id, start, end),
    )

    if not report.data:
        click.echo("No spending found.")
        return

    for month in report.data:
        click.echo(f"{month.month}  {month.total_spending:>14,.2f}")
        for item in month.categories:
            click.echo(f"    {item.category_name:<36} {item.total:>14,.2f}")


def register_commands(cli):
    """Register spending commands with main CLI."""
    cli.add_command(spending_group, name="spending")
