"""Read-only views over the ledger: pending credits, filtered listings, sales by day."""

from calendar import monthrange
from datetime import date, datetime, time, UTC
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from splitledger.domain.entities import (
    DailySales,
    OutstandingCredit,
    Transaction,
    TransactionBreakdown,
    TransactionType,
    ZERO,
)
from splitledger.domain.impact import HUNDRED, calculate_impact

if TYPE_CHECKING:
    from splitledger.database.base import LedgerStore


class ReportService:
    """Service for building reports from stored transactions."""

    def __init__(self, store: "LedgerStore"):
        """Initialize report service.

        Args:
            store: Ledger store instance
        """
        self.store = store

    def outstanding_credits(
        self, owner_id: str, type: Optional[TransactionType] = None
    ) -> list[OutstandingCredit]:
        """List unpaid credit transactions, oldest first.

        Args:
            owner_id: Ledger owner
            type: Only sales (receivables) or purchases/expenses (payables)
                when given

        Returns:
            Outstanding credits with paid amount, remaining debt and
            progress percentage
        """
        credits = []
        for transaction in reversed(self.store.list_transactions(owner_id)):
            if not transaction.is_credit or transaction.is_paid:
                continue
            if type is not None and transaction.type != type:
                continue
            paid = transaction.amount_paid or ZERO
            credits.append(
                OutstandingCredit(
                    transaction=transaction,
                    paid=paid,
                    remaining=transaction.amount - paid,
                    progress=paid * HUNDRED / transaction.amount,
                )
            )
        return credits

    def filter_transactions(
        self,
        owner_id: str,
        type: Optional[TransactionType] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions matching a type and an inclusive date range.

        The end date covers the whole day. Dates are compared in UTC.
        """
        start = datetime.combine(start_date, time.min, tzinfo=UTC) if start_date else None
        end = datetime.combine(end_date, time.max, tzinfo=UTC) if end_date else None

        result = []
        for transaction in self.store.list_transactions(owner_id):
            if type is not None and transaction.type != type:
                continue
            if start is not None and transaction.date < start:
                continue
            if end is not None and transaction.date > end:
                continue
            result.append(transaction)
        return result

    def transaction_breakdowns(
        self,
        owner_id: str,
        type: Optional[TransactionType] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        profit_percentage: Optional[Decimal] = None,
    ) -> list[TransactionBreakdown]:
        """Pair each filtered sale with its capital/profit split.

        Purchases and expenses are listed with a zero split. Credit sales are
        split by their full amount, as the report describes the sale itself
        rather than what has been collected so far.
        """
        if profit_percentage is None:
            profit_percentage = self.store.get_settings(owner_id).profit_percentage

        breakdowns = []
        for transaction in self.filter_transactions(owner_id, type, start_date, end_date):
            capital = profit = ZERO
            if transaction.type == TransactionType.SALE:
                split = calculate_impact(
                    type=transaction.type,
                    amount=transaction.amount,
                    is_credit=False,
                    is_extra_income=transaction.is_extra_income,
                    extra_income_type=transaction.extra_income_type,
                    profit_percentage=profit_percentage,
                )
                capital, profit = split.capital, split.profit
            breakdowns.append(
                TransactionBreakdown(transaction=transaction, capital=capital, profit=profit)
            )
        return breakdowns

    def daily_sales(self, owner_id: str, year: int, month: int) -> DailySales:
        """Total sale amounts per day of a month."""
        days_in_month = monthrange(year, month)[1]
        start = date(year, month, 1)
        end = date(year, month, days_in_month)

        totals: dict[int, Decimal] = {}
        for transaction in self.filter_transactions(
            owner_id, TransactionType.SALE, start_date=start, end_date=end
        ):
            day = transaction.date.astimezone(UTC).day
            totals[day] = totals.get(day, ZERO) + transaction.amount
        return DailySales(year=year, month=month, totals=totals)
