"""Date parsing utilities for report filters."""

from datetime import date, timedelta
from typing import Callable

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

RELATIVE_DAYS = {"today": 0, "yesterday": -1, "tomorrow": 1}


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse an absolute date ("2024-01-15", "January 15, 2024") or a
    relative word ("today", "yesterday", "tomorrow").

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if date_str in RELATIVE_DAYS:
        return (today or date.today()) + timedelta(days=RELATIVE_DAYS[date_str])

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def _last_month(today: date) -> tuple[date, date]:
    first_of_month = today.replace(day=1)
    return first_of_month - relativedelta(months=1), first_of_month - timedelta(days=1)


PERIODS: dict[str, Callable[[date], tuple[date, date]]] = {
    "this-week": lambda today: (today - timedelta(days=today.weekday()), today),
    "this-month": lambda today: (today.replace(day=1), today),
    "last-month": _last_month,
    "this-year": lambda today: (today.replace(month=1, day=1), today),
}


def get_date_range(period: str, today: date | None = None) -> tuple[date, date]:
    """Return the inclusive (start, end) days of a named period.

    Periods up to "this" end on ``today``; "last-month" is the whole
    previous calendar month.

    Raises:
        ValueError: If period string is not recognized
    """
    builder = PERIODS.get(period.strip().lower())
    if builder is None:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
        )
    return builder(today or date.today())
