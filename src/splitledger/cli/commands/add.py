"""Add transaction command."""

import click

from splitledger.cli.error_handling import handle_domain_error, handle_store_error
from splitledger.cli.formatting import echo_transaction_detail, format_money
from splitledger.domain.entities import TransactionDraft, TransactionType
from splitledger.domain.errors import DomainError, StoreError
from splitledger.domain.ledger import LedgerService
from splitledger.utils.amount_parser import parse_amount, parse_percentage

TYPE_CHOICE = click.Choice([t.value for t in TransactionType], case_sensitive=False)
EXTRA_INCOME_CHOICE = click.Choice(["capital", "profit"], case_sensitive=False)


def build_draft(
    ctx: click.Context,
    txn_type: str,
    amount: str,
    description: str,
    credit: bool,
    client: str | None,
    extra_income: str | None,
) -> TransactionDraft:
    """Turn CLI option values into a transaction draft, or exit on bad input."""
    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    return TransactionDraft(
        amount=txn_amount,
        description=description,
        type=txn_type.lower(),
        is_credit=credit,
        client_name=client,
        is_extra_income=extra_income is not None,
        extra_income_type=extra_income.lower() if extra_income else None,
    )


def parse_percentage_option(ctx: click.Context, value: str | None):
    """Parse an optional --profit-percentage value, or exit on bad input."""
    if value is None:
        return None
    try:
        return parse_percentage(value)
    except ValueError as e:
        click.echo(f"Error: Invalid profit percentage: {e}", err=True)
        ctx.exit(1)


@click.command("add")
@click.option("--type", "txn_type", required=True, type=TYPE_CHOICE, help="Transaction type")
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45)")
@click.option("--description", required=True, help="Transaction description")
@click.option("--credit", is_flag=True, help="Record as a credit sale/purchase (paid later)")
@click.option("--client", help="Customer or supplier name (required with --credit)")
@click.option(
    "--extra-income",
    type=EXTRA_INCOME_CHOICE,
    help="Route the whole sale to capital or profit instead of splitting it",
)
@click.option("--profit-percentage", help="Override the configured profit percentage")
@click.pass_context
def add_transaction(
    ctx,
    txn_type: str,
    amount: str,
    description: str,
    credit: bool,
    client: str | None,
    extra_income: str | None,
    profit_percentage: str | None,
):
    """Add a transaction.

    Examples:
        splitledger add --type sale --amount 100 --description "Counter sale"
        splitledger add --type sale --amount 200 --description "Order" --credit --client Ana
        splitledger add --type sale --amount 50 --description "Loan" --extra-income capital
    """
    owner_id = ctx.obj["owner_id"]
    service = LedgerService(ctx.obj["store"])

    draft = build_draft(ctx, txn_type, amount, description, credit, client, extra_income)
    percentage = parse_percentage_option(ctx, profit_percentage)

    try:
        transaction = service.create_transaction(owner_id, draft, percentage)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StoreError as e:
        handle_store_error(ctx, e)

    click.echo(f"Created transaction {transaction.id}")
    echo_transaction_detail(transaction)
    summary = service.get_summary(owner_id)
    click.echo(
        f"Capital: {format_money(summary.available_capital)}  "
        f"Profits: {format_money(summary.accumulated_profits)}"
    )


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
