"""CLI error handling helpers."""

import click
from sqlalchemy.exc import SQLAlchemyError

from reportit.domain.errors import DomainError
from reportit.utils.logging_config import get_logger

logger = get_logger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_store_error(ctx: click.Context, error: SQLAlchemyError) -> None:
    """Render a database failure and exit with status 2."""
    logger.error("Database error: %s", error)
    click.echo(f"Error: Database error: {error}", err=True)
    ctx.exit(2)
