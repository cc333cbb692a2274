"""Mapping of domain failures to CLI output and exit codes."""

import click
import structlog

from taxpj.domain.errors import DomainError

logger = structlog.get_logger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print ``Error: <message>`` on stderr and stop the command with exit code 1.

    Nothing is retried; the message is shown as the domain produced it.
    """
    logger.debug(
        "command_failed",
        command=ctx.command_path,
        error_type=type(error).__name__,
    )
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
