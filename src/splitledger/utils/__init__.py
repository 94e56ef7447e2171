"""Utility functions for splitledger."""

from splitledger.utils.date_parser import parse_date, get_date_range
from splitledger.utils.amount_parser import parse_amount, parse_percentage

__all__ = ["parse_date", "get_date_range", "parse_amount", "parse_percentage"]
