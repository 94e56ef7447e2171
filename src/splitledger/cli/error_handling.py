"""CLI error handling helpers."""

import click

from splitledger.domain.errors import DomainError, StoreError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_store_error(ctx: click.Context, error: StoreError) -> None:
    """Render a store failure and exit with failure.

    The summary may be out of sync after a partial write, so point the user
    at the repair command.
    """
    click.echo(f"Error: ledger store failure: {error}", err=True)
    click.echo("Run 'splitledger summary check' to verify the summary.", err=True)
    ctx.exit(1)
