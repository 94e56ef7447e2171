"""Shape checks applied to drafts, settings and payments before any write."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from splitledger.domain import errors
from splitledger.domain.entities import (
    ExtraIncomeType,
    NewTransaction,
    Settings,
    Transaction,
    TransactionDraft,
    TransactionType,
)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation: ``valid`` or ``invalid`` with a reason."""

    valid: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def invalid(cls, reason: str) -> "ValidationResult":
        return cls(valid=False, reason=reason)


def to_decimal(value: Any) -> Optional[Decimal]:
    """Convert a numeric value to a finite Decimal, or None if it is not one."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        return None
    if not result.is_finite():
        return None
    return result


def _is_positive_number(value: Any) -> bool:
    amount = to_decimal(value)
    return amount is not None and amount > 0


def _transaction_type(value: Any) -> Optional[TransactionType]:
    try:
        return TransactionType(value)
    except ValueError:
        return None


def _extra_income_type(value: Any) -> Optional[ExtraIncomeType]:
    try:
        return ExtraIncomeType(value)
    except ValueError:
        return None


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def validate_transaction(draft: TransactionDraft) -> ValidationResult:
    """Check a transaction draft. The first failing rule wins."""
    if not _is_positive_number(draft.amount):
        return ValidationResult.invalid(errors.AMOUNT_NOT_POSITIVE)

    if _is_blank(draft.description):
        return ValidationResult.invalid(errors.DESCRIPTION_REQUIRED)

    txn_type = _transaction_type(draft.type)
    if txn_type is None:
        return ValidationResult.invalid(errors.INVALID_TRANSACTION_TYPE)

    if draft.is_credit and _is_blank(draft.client_name):
        return ValidationResult.invalid(errors.CLIENT_NAME_REQUIRED)

    if draft.is_extra_income:
        if txn_type != TransactionType.SALE:
            return ValidationResult.invalid(errors.EXTRA_INCOME_ONLY_FOR_SALES)
        if _extra_income_type(draft.extra_income_type) is None:
            return ValidationResult.invalid(errors.INVALID_EXTRA_INCOME_TYPE)

    return ValidationResult.ok()


def require_valid(draft: TransactionDraft) -> NewTransaction:
    """Validate a draft and return its normalized form.

    Raises:
        ValidationError: If any rule fails
    """
    result = validate_transaction(draft)
    if not result.valid:
        raise errors.ValidationError(result.reason)

    is_credit = bool(draft.is_credit)
    is_extra_income = bool(draft.is_extra_income)
    return NewTransaction(
        amount=to_decimal(draft.amount),
        description=draft.description.strip(),
        type=TransactionType(draft.type),
        is_credit=is_credit,
        client_name=draft.client_name.strip() if draft.client_name else None,
        is_extra_income=is_extra_income,
        extra_income_type=(
            ExtraIncomeType(draft.extra_income_type) if is_extra_income else None
        ),
    )


def validate_settings(settings: Settings) -> ValidationResult:
    """Check that the profit percentage lies in [0, 100]."""
    percentage = to_decimal(settings.profit_percentage)
    if percentage is None or percentage < 0 or percentage > 100:
        return ValidationResult.invalid(errors.PROFIT_PERCENTAGE_OUT_OF_RANGE)
    return ValidationResult.ok()


def validate_payment(transaction: Transaction, amount: Any) -> ValidationResult:
    """Check a payment against the transaction it is recorded on."""
    if not _is_positive_number(amount):
        return ValidationResult.invalid(errors.PAYMENT_NOT_POSITIVE)
    if not transaction.is_credit:
        return ValidationResult.invalid(errors.PAYMENT_ON_CASH_TRANSACTION)
    remaining = transaction.remaining_debt
    if to_decimal(amount) > remaining:
        return ValidationResult.invalid(errors.payment_exceeds_debt(remaining))
    return ValidationResult.ok()
