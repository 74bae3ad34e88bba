"""Error reporting for the lifeos-finance commands."""

import click

from lifeos_finance.domain.errors import DomainError
from lifeos_finance.logging_setup import get_logger

logger = get_logger(__name__)


def fail(ctx: click.Context, message: str) -> None:
    """Print message to stderr and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Report an error raised by a repository or input parser.

    The traceback is only logged at DEBUG level, so it shows with --verbose.
    """
    logger.debug("%s failed", ctx.command_path, exc_info=error)
    fail(ctx, str(error))
