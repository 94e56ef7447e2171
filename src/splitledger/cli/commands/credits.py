"""Outstanding credit command."""

import click

from splitledger.cli.formatting import format_money, short_id
from splitledger.domain.entities import TransactionType
from splitledger.domain.reports import ReportService


@click.command("credits")
@click.option("--receivables", "kind", flag_value="receivables", help="Only credit sales")
@click.option("--payables", "kind", flag_value="payables", help="Only credit purchases")
@click.pass_context
def list_credits(ctx, kind: str | None) -> None:
    """List credit transactions that are not fully paid.

    Examples:
        splitledger credits
        splitledger credits --payables
    """
    service = ReportService(ctx.obj["store"])
    credits = service.outstanding_credits(ctx.obj["owner_id"])
    if kind == "receivables":
        credits = [c for c in credits if c.transaction.type == TransactionType.SALE]
    elif kind == "payables":
        credits = [c for c in credits if c.transaction.type != TransactionType.SALE]

    if not credits:
        click.echo("No outstanding credits.")
        return

    click.echo(
        f"{'ID':<10} {'Type':<10} {'Client':<20} {'Amount':>12} {'Paid':>12} {'Remaining':>12} {'Progress':>9}"
    )
    click.echo("-" * 90)
    for credit in credits:
        txn = credit.transaction
        click.echo(
            f"{short_id(txn.id):<10} {txn.type.value:<10} {(txn.client_name or '')[:20]:<20} "
            f"{format_money(txn.amount):>12} {format_money(credit.paid):>12} "
            f"{format_money(credit.remaining):>12} {credit.progress:>8.0f}%"
        )
    total = sum((c.remaining for c in credits))
    click.echo("-" * 90)
    click.echo(f"Total remaining: {format_money(total)} | Count: {len(credits)}")


def register_commands(cli: click.Group) -> None:
    """Register credits command with main CLI."""
    cli.add_command(list_credits)
