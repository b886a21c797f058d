"""Main CLI entry point."""

import click
from reportit.database.factories import create_sqlite_database
from reportit.utils.logging_config import setup_logging

# Import and register all commands at module level
from reportit.cli.commands import report, spending


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides REPORTIT_DB_PATH environment variable)",
    envvar="REPORTIT_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level (overrides REPORTIT_LOG_LEVEL environment variable)",
    envvar="REPORTIT_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Reportit - Financial report engine.

    Run saved custom reports and built-in spending breakdowns over a
    multi-currency ledger.
    """
    ctx.ensure_object(dict)
    setup_logging(level=log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
report.register_commands(cli)
spending.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
