"""Transaction management commands."""

from dataclasses import replace

import click

from splitledger.cli.commands.add import (
    EXTRA_INCOME_CHOICE,
    TYPE_CHOICE,
    parse_percentage_option,
)
from splitledger.cli.error_handling import handle_domain_error, handle_store_error
from splitledger.cli.formatting import (
    echo_transaction_detail,
    echo_transaction_row,
    format_money,
    short_id,
)
from splitledger.cli.transaction_resolution import resolve_transaction_or_exit
from splitledger.domain.entities import TransactionDraft
from splitledger.domain.errors import DomainError, StoreError
from splitledger.domain.ledger import LedgerService
from splitledger.utils.amount_parser import parse_amount


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--limit", type=int, help="Show only the most recent N transactions")
@click.pass_context
def list_transactions(ctx, limit: int | None) -> None:
    """List transactions, newest first."""
    service = LedgerService(ctx.obj["store"])
    transactions = service.list_transactions(ctx.obj["owner_id"])
    if limit is not None:
        transactions = transactions[:limit]

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(f"{'ID':<10} {'Date':<17} {'Type':<28} {'Amount':>14}  Description")
    click.echo("-" * 100)
    for txn in transactions:
        echo_transaction_row(txn)


@transaction_group.command("show")
@click.argument("transaction_ref")
@click.pass_context
def show_transaction(ctx, transaction_ref: str) -> None:
    """Show one transaction with its payments."""
    service = LedgerService(ctx.obj["store"])
    txn = resolve_transaction_or_exit(ctx, service, ctx.obj["owner_id"], transaction_ref)
    echo_transaction_detail(txn)


@transaction_group.command("edit")
@click.argument("transaction_ref")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="New transaction type")
@click.option("--amount", help="New amount")
@click.option("--description", help="New description")
@click.option("--credit/--no-credit", default=None, help="Mark as credit or cash")
@click.option("--client", help="Customer or supplier name")
@click.option(
    "--extra-income",
    type=EXTRA_INCOME_CHOICE,
    help="Route the whole sale to capital or profit",
)
@click.option("--no-extra-income", is_flag=True, help="Split the sale normally again")
@click.option("--profit-percentage", help="Override the configured profit percentage")
@click.pass_context
def edit_transaction(
    ctx,
    transaction_ref: str,
    txn_type: str | None,
    amount: str | None,
    description: str | None,
    credit: bool | None,
    client: str | None,
    extra_income: str | None,
    no_extra_income: bool,
    profit_percentage: str | None,
) -> None:
    """Edit a transaction and rebalance the summary.

    Updates only the fields that are provided.

    Examples:
        splitledger transaction edit 3f2a --amount 120
        splitledger transaction edit 3f2a --type expense
        splitledger transaction edit 3f2a --credit --client Ana
    """
    owner_id = ctx.obj["owner_id"]
    service = LedgerService(ctx.obj["store"])
    original = resolve_transaction_or_exit(ctx, service, owner_id, transaction_ref)

    if extra_income is not None and no_extra_income:
        click.echo("Error: --extra-income and --no-extra-income cannot be combined", err=True)
        ctx.exit(1)

    draft = TransactionDraft.from_transaction(original)
    if txn_type is not None:
        draft = replace(draft, type=txn_type.lower())
    if amount is not None:
        try:
            draft = replace(draft, amount=parse_amount(amount))
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)
    if description is not None:
        draft = replace(draft, description=description)
    if credit is not None:
        draft = replace(draft, is_credit=credit)
    if client is not None:
        draft = replace(draft, client_name=client)
    if extra_income is not None:
        draft = replace(draft, is_extra_income=True, extra_income_type=extra_income.lower())
    if no_extra_income:
        draft = replace(draft, is_extra_income=False, extra_income_type=None)

    percentage = parse_percentage_option(ctx, profit_percentage)

    try:
        updated = service.edit_transaction(owner_id, original, draft, percentage)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StoreError as e:
        handle_store_error(ctx, e)

    click.echo(f"Updated transaction {updated.id}")
    echo_transaction_detail(updated)


@transaction_group.command("delete")
@click.argument("transaction_ref")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.option("--profit-percentage", help="Override the configured profit percentage")
@click.pass_context
def delete_transaction(ctx, transaction_ref: str, yes: bool, profit_percentage: str | None) -> None:
    """Delete a transaction and reverse its effect on the summary.

    Examples:
        splitledger transaction delete 3f2a
    """
    owner_id = ctx.obj["owner_id"]
    service = LedgerService(ctx.obj["store"])
    txn = resolve_transaction_or_exit(ctx, service, owner_id, transaction_ref)
    percentage = parse_percentage_option(ctx, profit_percentage)

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {short_id(txn.id)} ({txn.description})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(owner_id, txn, percentage)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StoreError as e:
        handle_store_error(ctx, e)
    click.echo(f"Deleted transaction {txn.id}")


@transaction_group.command("pay")
@click.argument("transaction_ref")
@click.option("--amount", required=True, help="Payment amount")
@click.option("--note", help="Optional note")
@click.option("--profit-percentage", help="Override the configured profit percentage")
@click.pass_context
def pay_transaction(
    ctx, transaction_ref: str, amount: str, note: str | None, profit_percentage: str | None
) -> None:
    """Record a payment against a credit transaction.

    Examples:
        splitledger transaction pay 3f2a --amount 100 --note "First installment"
    """
    owner_id = ctx.obj["owner_id"]
    service = LedgerService(ctx.obj["store"])
    txn = resolve_transaction_or_exit(ctx, service, owner_id, transaction_ref)

    try:
        payment_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)
    percentage = parse_percentage_option(ctx, profit_percentage)

    try:
        updated = service.add_payment(owner_id, txn.id, payment_amount, note, percentage)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StoreError as e:
        handle_store_error(ctx, e)

    click.echo(f"Recorded payment of {format_money(payment_amount)} on {short_id(updated.id)}")
    click.echo(f"  Paid: {format_money(updated.amount_paid)} of {format_money(updated.amount)}")
    click.echo(f"  Status: {'paid' if updated.is_paid else 'pending'}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
