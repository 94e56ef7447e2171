"""Settings commands."""

import click

from splitledger.cli.error_handling import handle_domain_error, handle_store_error
from splitledger.domain.entities import Settings
from splitledger.domain.errors import DomainError, StoreError
from splitledger.domain.ledger import LedgerService
from splitledger.utils.amount_parser import parse_percentage


@click.group()
def settings_group():
    """Show and change ledger settings."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx) -> None:
    """Show the current settings."""
    service = LedgerService(ctx.obj["store"])
    settings = service.get_settings(ctx.obj["owner_id"])
    click.echo(f"Profit percentage: {settings.profit_percentage}%")


@settings_group.command("set")
@click.option("--profit-percentage", required=True, help="Share of each sale booked as profit (0-100)")
@click.pass_context
def set_settings(ctx, profit_percentage: str) -> None:
    """Change the settings.

    Existing summary totals are not recalculated; run
    'splitledger summary recompute' to fold the ledger at the new percentage.
    """
    service = LedgerService(ctx.obj["store"])
    try:
        percentage = parse_percentage(profit_percentage)
    except ValueError as e:
        click.echo(f"Error: Invalid profit percentage: {e}", err=True)
        ctx.exit(1)

    try:
        service.update_settings(ctx.obj["owner_id"], Settings(profit_percentage=percentage))
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StoreError as e:
        handle_store_error(ctx, e)
    click.echo(f"Profit percentage set to {percentage}%")


def register_commands(cli: click.Group) -> None:
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
