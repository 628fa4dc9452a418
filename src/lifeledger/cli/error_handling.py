"""CLI error handling helpers."""

import click

from lifeledger.domain.entities import OperationResult
from lifeledger.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def report_result(ctx: click.Context, result: OperationResult) -> None:
    """Print the message of an operation result, exiting with failure if it failed."""
    if not result.success:
        handle_domain_error(ctx, result.error)
    click.echo(result.message)
