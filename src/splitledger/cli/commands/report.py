"""Report commands."""

from datetime import datetime, UTC

import click

from splitledger.cli.commands.add import TYPE_CHOICE
from splitledger.cli.date_filters import PERIOD_CHOICE, resolve_cli_date_range
from splitledger.cli.formatting import describe_kind, format_money, short_id
from splitledger.domain.entities import TransactionType
from splitledger.domain.reports import ReportService


@click.group()
def report_group():
    """Reports over the ledger."""
    pass


@report_group.command("list")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="Only this transaction type")
@click.option("--start-date", help="Start date (YYYY-MM-DD or 'today', 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or 'today', 'yesterday'), inclusive")
@click.option("--period", type=PERIOD_CHOICE, help="Named period instead of explicit dates")
@click.pass_context
def list_report(
    ctx,
    txn_type: str | None,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
) -> None:
    """List transactions with their capital/profit split.

    Examples:
        splitledger report list --period this-month
        splitledger report list --type sale --start-date 2024-01-01 --end-date 2024-01-31
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period=period,
    )
    service = ReportService(ctx.obj["store"])
    rows = service.transaction_breakdowns(
        ctx.obj["owner_id"],
        type=TransactionType(txn_type.lower()) if txn_type else None,
        start_date=start,
        end_date=end,
    )

    if not rows:
        click.echo("No transactions found.")
        return

    click.echo(
        f"{'ID':<10} {'Date':<17} {'Type':<28} {'Amount':>12} {'Capital':>12} {'Profit':>12}  Description"
    )
    click.echo("-" * 120)
    for row in rows:
        txn = row.transaction
        click.echo(
            f"{short_id(txn.id):<10} {txn.date:%Y-%m-%d %H:%M}  {describe_kind(txn):<28} "
            f"{format_money(txn.amount):>12} {format_money(row.capital):>12} "
            f"{format_money(row.profit):>12}  {txn.description}"
        )
    click.echo("-" * 120)
    click.echo(
        f"Capital: {format_money(sum(r.capital for r in rows))} | "
        f"Profit: {format_money(sum(r.profit for r in rows))} | Count: {len(rows)}"
    )


@report_group.command("daily")
@click.option("--year", type=int, help="Year (defaults to the current year)")
@click.option("--month", type=click.IntRange(1, 12), help="Month (defaults to the current month)")
@click.pass_context
def daily_report(ctx, year: int | None, month: int | None) -> None:
    """Show sale totals per day for one month."""
    today = datetime.now(UTC).date()
    year = year or today.year
    month = month or today.month

    service = ReportService(ctx.obj["store"])
    sales = service.daily_sales(ctx.obj["owner_id"], year, month)
    if not sales.totals:
        click.echo(f"No sales in {year}-{month:02d}.")
        return

    click.echo(f"Sales for {year}-{month:02d}:")
    for day in sorted(sales.totals):
        click.echo(f"  {year}-{month:02d}-{day:02d}  {format_money(sales.totals[day]):>14}")
    click.echo(f"Best day total: {format_money(sales.max_total)}")


def register_commands(cli: click.Group) -> None:
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
