"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested ledger record does not exist."""


class StoreError(Exception):
    """Reading from or writing to the ledger store failed.

    The failed operation may have left partial state behind (for example a
    transaction written without its summary update). Run a full recompute
    to repair the summary.
    """


class ConflictError(StoreError):
    """Atomic update kept losing against concurrent writers."""


AMOUNT_NOT_POSITIVE = "amount must be a positive number"
DESCRIPTION_REQUIRED = "description is required"
INVALID_TRANSACTION_TYPE = "invalid transaction type"
CLIENT_NAME_REQUIRED = "client name is required for credit transactions"
EXTRA_INCOME_ONLY_FOR_SALES = "extra income is only allowed for sales"
INVALID_EXTRA_INCOME_TYPE = "extra income type must be 'capital' or 'profit'"
PROFIT_PERCENTAGE_OUT_OF_RANGE = "profit percentage must be between 0 and 100"
PAYMENT_NOT_POSITIVE = "payment amount must be a positive number"
PAYMENT_ON_CASH_TRANSACTION = "payments can only be recorded against credit transactions"


def payment_exceeds_debt(remaining: Decimal) -> str:
    """Return message for a payment larger than what is still owed."""
    return f"payment amount exceeds remaining debt of {remaining}"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def conflict_retries_exhausted(record: str, attempts: int) -> str:
    """Return message when an atomic update could not win its race."""
    return f"Could not update {record} after {attempts} attempts due to concurrent writes"
