"""Parsing of money amounts and percentages typed on the command line."""

import re
from decimal import Decimal, InvalidOperation

CURRENCY_PREFIX = re.compile(r"^(-?)\s*[$€£¥Q]")


def _to_decimal(text: str, what: str) -> Decimal:
    if not text or not text.strip():
        raise ValueError(f"Empty {what} string")
    cleaned = text.strip()
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse {what} '{cleaned}'")
    if not value.is_finite():
        raise ValueError(f"Could not parse {what} '{cleaned}'")
    return value


def parse_amount(amount_str: str) -> Decimal:
    """Parse "123.45", "$123.45", "Q1,234.50" or "-5" into a Decimal.

    A leading currency symbol and thousands separators are dropped. The sign
    is kept; the ledger validator decides whether it is acceptable.

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")
    cleaned = CURRENCY_PREFIX.sub(r"\1", amount_str.strip()).replace(",", "")
    return _to_decimal(cleaned, "amount")


def parse_percentage(percentage_str: str) -> Decimal:
    """Parse a percentage such as "20" or "12.5%" into a Decimal."""
    if not percentage_str or not percentage_str.strip():
        raise ValueError("Empty percentage string")
    return _to_decimal(percentage_str.strip().rstrip("%"), "percentage")
