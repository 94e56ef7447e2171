"""Capital/profit impact rules.

Every function here is pure. The summary of an owner must always equal
``sum(transaction_impact(t)) + sum(realized_payments_impact(t))`` over all of
that owner's transactions.
"""

from decimal import Decimal
from typing import Optional

from splitledger.domain.entities import (
    ExtraIncomeType,
    Impact,
    Transaction,
    TransactionType,
    ZERO,
)

HUNDRED = Decimal("100")


def split_sale(amount: Decimal, profit_percentage: Decimal) -> Impact:
    """Split a sale amount into its capital and profit portions."""
    profit = amount * profit_percentage / HUNDRED
    return Impact(capital=amount - profit, profit=profit)


def calculate_impact(
    type: TransactionType,
    amount: Decimal,
    is_credit: bool,
    is_extra_income: bool,
    extra_income_type: Optional[ExtraIncomeType],
    profit_percentage: Decimal,
) -> Impact:
    """Return the immediate summary impact of a transaction.

    Rules are checked in order and the first match wins:
    credit entries have no effect until paid, extra income goes entirely to
    its bucket, and everything else follows its type.
    """
    if is_credit:
        return Impact()
    if is_extra_income and extra_income_type == ExtraIncomeType.CAPITAL:
        return Impact(capital=amount)
    if is_extra_income and extra_income_type == ExtraIncomeType.PROFIT:
        return Impact(profit=amount)

    if type == TransactionType.SALE:
        return split_sale(amount, profit_percentage)
    if type == TransactionType.PURCHASE:
        return Impact(capital=-amount)
    if type == TransactionType.EXPENSE:
        return Impact(profit=-amount)
    raise ValueError(f"Unknown transaction type: {type!r}")


def payment_impact(
    type: TransactionType, amount: Decimal, profit_percentage: Decimal
) -> Impact:
    """Return the summary impact of a payment on a credit transaction.

    Purchase and expense payments are cash leaving capital. Sale payments
    are split like a cash sale; this is where credit sale profit is realized.
    """
    if type in (TransactionType.PURCHASE, TransactionType.EXPENSE):
        return Impact(capital=-amount)
    return split_sale(amount, profit_percentage)


def transaction_impact(transaction: Transaction, profit_percentage: Decimal) -> Impact:
    """Impact of a stored transaction, excluding its payments."""
    return calculate_impact(
        type=transaction.type,
        amount=transaction.amount,
        is_credit=transaction.is_credit,
        is_extra_income=transaction.is_extra_income,
        extra_income_type=transaction.extra_income_type,
        profit_percentage=profit_percentage,
    )


def realized_payments_impact(
    transaction: Transaction, profit_percentage: Decimal
) -> Impact:
    """Impact of all payments recorded on a credit transaction."""
    total = Impact()
    if not transaction.is_credit:
        return total
    for payment in transaction.payments:
        total = total + payment_impact(transaction.type, payment.amount, profit_percentage)
    return total


def fold_impacts(
    transactions: "list[Transaction] | tuple[Transaction, ...]",
    profit_percentage: Decimal,
) -> Impact:
    """Fold every transaction and its payments into one impact."""
    total = Impact(ZERO, ZERO)
    for transaction in transactions:
        total = total + transaction_impact(transaction, profit_percentage)
        total = total + realized_payments_impact(transaction, profit_percentage)
    return total
