"""Date range options shared by report commands."""

from datetime import date

import click

from splitledger.utils.date_parser import PERIODS, get_date_range, parse_date

PERIOD_CHOICE = click.Choice(list(PERIODS), case_sensitive=False)


def _parse_bound(ctx: click.Context, label: str, value: str | None) -> date | None:
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label} date: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
) -> tuple[date | None, date | None]:
    """Turn --period or --start-date/--end-date into an inclusive day range.

    A named period cannot be combined with explicit dates.
    """
    if period is not None:
        if start_date or end_date:
            click.echo(
                "Error: --period cannot be combined with --start-date or --end-date.",
                err=True,
            )
            ctx.exit(1)
        return get_date_range(period)

    return _parse_bound(ctx, "start", start_date), _parse_bound(ctx, "end", end_date)
