"""Shared output formatting for CLI commands."""

from decimal import Decimal

import click

from splitledger.domain.entities import FinancialSummary, Transaction

SHORT_ID_LENGTH = 8


def format_money(amount: Decimal) -> str:
    """Format an amount with two decimals and thousands separators."""
    return f"{amount:,.2f}"


def short_id(transaction_id: str) -> str:
    return transaction_id[:SHORT_ID_LENGTH]


def describe_kind(txn: Transaction) -> str:
    """Return the type plus credit/extra-income markers."""
    kind = txn.type.value
    if txn.is_credit:
        kind += " (credit)"
    if txn.is_extra_income and txn.extra_income_type is not None:
        kind += f" (extra {txn.extra_income_type.value})"
    return kind


def echo_summary(summary: FinancialSummary) -> None:
    click.echo(f"Available capital:    {format_money(summary.available_capital)}")
    click.echo(f"Accumulated profits:  {format_money(summary.accumulated_profits)}")


def echo_transaction_row(txn: Transaction) -> None:
    click.echo(
        f"{short_id(txn.id):<10} {txn.date:%Y-%m-%d %H:%M}  {describe_kind(txn):<28} "
        f"{format_money(txn.amount):>14}  {txn.description}"
    )


def echo_transaction_detail(txn: Transaction) -> None:
    """Print every field of a transaction, including its payments."""
    click.echo(f"Transaction ID: {txn.id}")
    click.echo(f"  Date: {txn.date.isoformat()}")
    click.echo(f"  Type: {describe_kind(txn)}")
    click.echo(f"  Amount: {format_money(txn.amount)}")
    click.echo(f"  Description: {txn.description}")
    if txn.is_credit:
        click.echo(f"  Client: {txn.client_name}")
        click.echo(f"  Paid: {format_money(txn.amount_paid or Decimal('0'))}")
        click.echo(f"  Remaining: {format_money(txn.remaining_debt)}")
        click.echo(f"  Status: {'paid' if txn.is_paid else 'pending'}")
        for payment in txn.payments:
            note = f" - {payment.note}" if payment.note else ""
            click.echo(
                f"    {payment.date:%Y-%m-%d %H:%M}  {format_money(payment.amount):>14}{note}"
            )
