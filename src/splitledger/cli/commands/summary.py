"""Summary commands."""

import click

from splitledger.cli.error_handling import handle_store_error
from splitledger.cli.formatting import echo_summary, format_money
from splitledger.domain.errors import StoreError
from splitledger.domain.ledger import LedgerService


@click.group()
def summary_group():
    """Show and repair the capital/profit summary."""
    pass


@summary_group.command("show")
@click.pass_context
def show_summary(ctx) -> None:
    """Show available capital and accumulated profits."""
    service = LedgerService(ctx.obj["store"])
    echo_summary(service.get_summary(ctx.obj["owner_id"]))


@summary_group.command("check")
@click.pass_context
def check_summary(ctx) -> None:
    """Compare the stored summary with a fresh fold over the ledger.

    Exits with status 1 when they differ.
    """
    service = LedgerService(ctx.obj["store"])
    drift = service.check_drift(ctx.obj["owner_id"])
    if drift.is_zero:
        click.echo("Summary is consistent with the ledger.")
        return

    click.echo("Summary differs from the ledger:")
    click.echo(f"  Capital drift: {format_money(drift.capital)}")
    click.echo(f"  Profit drift:  {format_money(drift.profit)}")
    click.echo("Run 'splitledger summary recompute' to repair it.")
    ctx.exit(1)


@summary_group.command("recompute")
@click.pass_context
def recompute_summary(ctx) -> None:
    """Rebuild the summary from every transaction and payment.

    Payments are counted at the current profit percentage.
    """
    service = LedgerService(ctx.obj["store"])
    try:
        summary = service.recompute_summary(ctx.obj["owner_id"])
    except StoreError as e:
        handle_store_error(ctx, e)
    click.echo("Summary recomputed.")
    echo_summary(summary)


def register_commands(cli: click.Group) -> None:
    """Register summary commands with main CLI."""
    cli.add_command(summary_group, name="summary")
