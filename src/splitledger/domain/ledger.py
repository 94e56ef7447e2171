"""Ledger reconciliation service.

Every operation that changes a transaction is paired with exactly one atomic
update of the owner's summary. The two writes hit different records and are
not wrapped in one transaction: if the second one fails the error propagates
and the summary drifts until ``recompute_summary`` is run.
"""

import itertools
import time
from datetime import datetime, UTC
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Optional

import structlog

from splitledger.database.events import Topic
from splitledger.domain import errors
from splitledger.domain.entities import (
    FinancialSummary,
    Impact,
    PaymentAppend,
    PaymentRecord,
    Settings,
    Transaction,
    TransactionDraft,
    TransactionEdit,
)
from splitledger.domain.impact import (
    fold_impacts,
    payment_impact,
    realized_payments_impact,
    transaction_impact,
)
from splitledger.domain.validation import (
    require_valid,
    to_decimal,
    validate_payment,
    validate_settings,
)

if TYPE_CHECKING:
    from splitledger.database.base import LedgerStore

logger = structlog.get_logger(__name__)

_payment_sequence = itertools.count()


def new_payment_id() -> str:
    """Return a time-derived payment id that stays distinct within a process."""
    return f"{time.time_ns()}-{next(_payment_sequence)}"


def _impact_fields(impact: Impact) -> dict[str, str]:
    return {"capital_delta": str(impact.capital), "profit_delta": str(impact.profit)}


class LedgerService:
    """Service for mutating the ledger and keeping the summary reconciled."""

    def __init__(self, store: "LedgerStore"):
        """Initialize ledger service.

        Args:
            store: Ledger store instance
        """
        self.store = store

    def _profit_percentage(self, owner_id: str, profit_percentage: Optional[Decimal]) -> Decimal:
        if profit_percentage is not None:
            percentage = to_decimal(profit_percentage)
            if percentage is None or percentage < 0 or percentage > 100:
                raise errors.ValidationError(errors.PROFIT_PERCENTAGE_OUT_OF_RANGE)
            return percentage
        return self.store.get_settings(owner_id).profit_percentage

    def _apply_to_summary(self, owner_id: str, impact: Impact) -> FinancialSummary:
        return self.store.update_summary(owner_id, lambda current: current.apply(impact))

    # Reads
    def get_transaction(self, owner_id: str, transaction_id: str) -> Transaction:
        """Get a transaction.

        Raises:
            NotFoundError: If the transaction does not exist
        """
        transaction = self.store.get_transaction(owner_id, transaction_id)
        if transaction is None:
            raise errors.NotFoundError(errors.transaction_not_found(transaction_id))
        return transaction

    def list_transactions(self, owner_id: str) -> list[Transaction]:
        """List transactions newest first."""
        return self.store.list_transactions(owner_id)

    def get_summary(self, owner_id: str) -> FinancialSummary:
        return self.store.get_summary(owner_id)

    def get_settings(self, owner_id: str) -> Settings:
        return self.store.get_settings(owner_id)

    # Mutations
    def create_transaction(
        self,
        owner_id: str,
        draft: TransactionDraft,
        profit_percentage: Optional[Decimal] = None,
    ) -> Transaction:
        """Validate and store a transaction, then apply its impact to the summary.

        Credit transactions are stored with nothing paid and leave the summary
        untouched; their impact arrives through payments.

        Args:
            owner_id: Ledger owner
            draft: Transaction fields
            profit_percentage: Split to use for sales (stored setting if None)

        Returns:
            The stored transaction, with its id

        Raises:
            ValidationError: If the draft is invalid (nothing is written)
            StoreError: If either write fails
        """
        fields = require_valid(draft)
        percentage = self._profit_percentage(owner_id, profit_percentage)

        try:
            transaction = self.store.insert_transaction(owner_id, fields)
            impact = transaction_impact(transaction, percentage)
            self._apply_to_summary(owner_id, impact)
        except errors.StoreError:
            logger.exception("transaction_create_failed", owner_id=owner_id)
            raise

        logger.info(
            "transaction_created",
            owner_id=owner_id,
            transaction_id=transaction.id,
            type=transaction.type.value,
            is_credit=transaction.is_credit,
            **_impact_fields(impact),
        )
        return transaction

    def edit_transaction(
        self,
        owner_id: str,
        original: Transaction,
        updated: TransactionDraft,
        profit_percentage: Optional[Decimal] = None,
    ) -> Transaction:
        """Rewrite a transaction's mutable fields and rebalance the summary.

        The previous impact is reversed with the previous record's own type
        and flags and the new impact applied, in a single summary update.
        Payments already recorded keep counting only while the transaction is
        credit, so flipping the credit flag or changing the type of a credit
        transaction also moves their realized impact.

        Raises:
            ValidationError: If the updated fields are invalid
            NotFoundError: If the transaction no longer exists
            StoreError: If either write fails
        """
        fields = require_valid(updated)
        percentage = self._profit_percentage(owner_id, profit_percentage)

        def build_edit(current: Transaction) -> TransactionEdit:
            amount_paid = current.amount_paid
            is_paid = current.is_paid
            if fields.is_credit:
                amount_paid = amount_paid if amount_paid is not None else Decimal("0")
                is_paid = amount_paid >= fields.amount
            return TransactionEdit(
                amount=fields.amount,
                description=fields.description,
                type=fields.type,
                is_credit=fields.is_credit,
                client_name=fields.client_name,
                is_extra_income=fields.is_extra_income,
                extra_income_type=fields.extra_income_type,
                amount_paid=amount_paid,
                is_paid=is_paid,
            )

        try:
            previous, stored = self.store.update_transaction(owner_id, original.id, build_edit)
            delta = (
                transaction_impact(stored, percentage)
                - transaction_impact(previous, percentage)
                + realized_payments_impact(stored, percentage)
                - realized_payments_impact(previous, percentage)
            )
            self._apply_to_summary(owner_id, delta)
        except errors.StoreError:
            logger.exception(
                "transaction_edit_failed", owner_id=owner_id, transaction_id=original.id
            )
            raise

        logger.info(
            "transaction_edited",
            owner_id=owner_id,
            transaction_id=stored.id,
            previous_type=previous.type.value,
            type=stored.type.value,
            **_impact_fields(delta),
        )
        return stored

    def delete_transaction(
        self,
        owner_id: str,
        transaction: Transaction,
        profit_percentage: Optional[Decimal] = None,
    ) -> None:
        """Remove a transaction and reverse everything it contributed.

        Payments on a credit transaction are reversed at the given (current)
        profit percentage, which only matches what was applied if the
        percentage has not changed since they were recorded.

        Raises:
            NotFoundError: If the transaction does not exist
            StoreError: If either write fails
        """
        percentage = self._profit_percentage(owner_id, profit_percentage)

        try:
            removed = self.store.delete_transaction(owner_id, transaction.id)
            reversal = -(
                transaction_impact(removed, percentage)
                + realized_payments_impact(removed, percentage)
            )
            self._apply_to_summary(owner_id, reversal)
        except errors.StoreError:
            logger.exception(
                "transaction_delete_failed", owner_id=owner_id, transaction_id=transaction.id
            )
            raise

        logger.info(
            "transaction_deleted",
            owner_id=owner_id,
            transaction_id=removed.id,
            payments=len(removed.payments),
            **_impact_fields(reversal),
        )

    def add_payment(
        self,
        owner_id: str,
        transaction_id: str,
        amount: Decimal,
        note: Optional[str] = None,
        profit_percentage: Optional[Decimal] = None,
    ) -> Transaction:
        """Record a payment on a credit transaction and realize its impact.

        The payment is appended atomically on the transaction record, then
        its impact is applied atomically on the summary. These are two
        separate steps.

        Returns:
            The updated transaction

        Raises:
            ValidationError: If the amount is not positive, exceeds the
                remaining debt, or the transaction is not credit
            NotFoundError: If the transaction does not exist
            StoreError: If either write fails
        """
        percentage = self._profit_percentage(owner_id, profit_percentage)
        note = note.strip() if note and note.strip() else None

        def build_payment(current: Transaction) -> PaymentAppend:
            result = validate_payment(current, amount)
            if not result.valid:
                raise errors.ValidationError(result.reason)
            paid_amount = to_decimal(amount)
            amount_paid = (current.amount_paid or Decimal("0")) + paid_amount
            return PaymentAppend(
                payment=PaymentRecord(
                    id=new_payment_id(),
                    date=datetime.now(UTC),
                    amount=paid_amount,
                    note=note,
                ),
                amount_paid=amount_paid,
                is_paid=amount_paid >= current.amount,
            )

        try:
            _, stored = self.store.update_transaction(owner_id, transaction_id, build_payment)
            payment = stored.payments[-1]
            impact = payment_impact(stored.type, payment.amount, percentage)
            self._apply_to_summary(owner_id, impact)
        except errors.StoreError:
            logger.exception(
                "payment_record_failed", owner_id=owner_id, transaction_id=transaction_id
            )
            raise

        logger.info(
            "payment_recorded",
            owner_id=owner_id,
            transaction_id=transaction_id,
            payment_id=payment.id,
            amount=str(payment.amount),
            is_paid=stored.is_paid,
            **_impact_fields(impact),
        )
        return stored

    def update_settings(self, owner_id: str, settings: Settings) -> None:
        """Overwrite the owner's settings.

        Raises:
            ValidationError: If the profit percentage is outside [0, 100]
        """
        result = validate_settings(settings)
        if not result.valid:
            raise errors.ValidationError(result.reason)
        self.store.put_settings(
            owner_id, Settings(profit_percentage=to_decimal(settings.profit_percentage))
        )
        logger.info(
            "settings_updated",
            owner_id=owner_id,
            profit_percentage=str(settings.profit_percentage),
        )

    # Repair
    def compute_summary(self, owner_id: str) -> FinancialSummary:
        """Fold the whole ledger into a summary without writing it."""
        snapshot = self.store.snapshot(owner_id)
        total = fold_impacts(snapshot.transactions, snapshot.settings.profit_percentage)
        return FinancialSummary().apply(total)

    def recompute_summary(self, owner_id: str) -> FinancialSummary:
        """Rebuild the summary from scratch and overwrite the stored one.

        Payments are folded at the current profit percentage, not the one in
        effect when each was recorded. The ledger is re-read inside the atomic
        update, so a summary delta committed while the fold runs makes the
        store retry with a fresh fold instead of being overwritten.
        """
        rebuilt = self.store.update_summary(
            owner_id, lambda _current: self.compute_summary(owner_id)
        )
        logger.info(
            "summary_recomputed",
            owner_id=owner_id,
            available_capital=str(rebuilt.available_capital),
            accumulated_profits=str(rebuilt.accumulated_profits),
        )
        return rebuilt

    def check_drift(self, owner_id: str) -> Impact:
        """Return stored summary minus the recomputed one (zero when consistent)."""
        stored = self.store.get_summary(owner_id)
        return stored.as_impact() - self.compute_summary(owner_id).as_impact()

    # Subscriptions
    def subscribe_transactions(
        self, owner_id: str, on_change: Callable[[list[Transaction]], None]
    ) -> Callable[[], None]:
        """Deliver the transaction list now and after every change."""

        def deliver() -> None:
            on_change(self.store.list_transactions(owner_id))

        unsubscribe = self.store.subscribe(Topic.TRANSACTIONS, owner_id, deliver)
        deliver()
        return unsubscribe

    def subscribe_summary(
        self, owner_id: str, on_change: Callable[[FinancialSummary], None]
    ) -> Callable[[], None]:
        """Deliver the summary now (seeding zeros) and after every change."""

        def deliver() -> None:
            on_change(self.store.get_summary(owner_id))

        unsubscribe = self.store.subscribe(Topic.SUMMARY, owner_id, deliver)
        deliver()
        return unsubscribe

    def subscribe_settings(
        self, owner_id: str, on_change: Callable[[Settings], None]
    ) -> Callable[[], None]:
        """Deliver the settings now (seeding defaults) and after every change."""

        def deliver() -> None:
            on_change(self.store.get_settings(owner_id))

        unsubscribe = self.store.subscribe(Topic.SETTINGS, owner_id, deliver)
        deliver()
        return unsubscribe
