"""Tests for the impact calculator."""

import pytest
from datetime import datetime, UTC
from decimal import Decimal

from splitledger.domain.entities import (
    ExtraIncomeType,
    Impact,
    PaymentRecord,
    Transaction,
    TransactionType,
)
from splitledger.domain.impact import (
    calculate_impact,
    fold_impacts,
    payment_impact,
    realized_payments_impact,
    transaction_impact,
)

PCT = Decimal("20")


def _impact(type, amount="100", is_credit=False, is_extra_income=False, extra=None, pct=PCT):
    return calculate_impact(
        type=type,
        amount=Decimal(amount),
        is_credit=is_credit,
        is_extra_income=is_extra_income,
        extra_income_type=extra,
        profit_percentage=pct,
    )


def _payment(amount):
    return PaymentRecord(id="p", date=datetime.now(UTC), amount=Decimal(amount))


class TestCalculateImpact:
    """Tests for calculate_impact decision order."""

    def test_sale_splits_by_percentage(self):
        assert _impact(TransactionType.SALE) == Impact(Decimal("80"), Decimal("20"))

    def test_sale_with_fractional_percentage(self):
        impact = _impact(TransactionType.SALE, amount="33.33", pct=Decimal("15"))
        assert impact.profit == Decimal("4.9995")
        assert impact.capital + impact.profit == Decimal("33.33")

    def test_purchase_reduces_capital(self):
        assert _impact(TransactionType.PURCHASE, "30") == Impact(Decimal("-30"), Decimal("0"))

    def test_expense_reduces_profit(self):
        assert _impact(TransactionType.EXPENSE, "10") == Impact(Decimal("0"), Decimal("-10"))

    @pytest.mark.parametrize("type", list(TransactionType))
    def test_credit_has_no_immediate_impact(self, type):
        assert _impact(type, is_credit=True).is_zero

    def test_credit_wins_over_extra_income(self):
        impact = _impact(
            TransactionType.SALE, is_credit=True, is_extra_income=True, extra=ExtraIncomeType.CAPITAL
        )
        assert impact.is_zero

    @pytest.mark.parametrize("pct", [Decimal("0"), Decimal("20"), Decimal("100")])
    def test_extra_income_capital_ignores_percentage(self, pct):
        impact = _impact(
            TransactionType.SALE, is_extra_income=True, extra=ExtraIncomeType.CAPITAL, pct=pct
        )
        assert impact == Impact(Decimal("100"), Decimal("0"))

    def test_extra_income_profit(self):
        impact = _impact(TransactionType.SALE, is_extra_income=True, extra=ExtraIncomeType.PROFIT)
        assert impact == Impact(Decimal("0"), Decimal("100"))

    def test_zero_and_full_percentage(self):
        assert _impact(TransactionType.SALE, pct=Decimal("0")) == Impact(Decimal("100"), Decimal("0"))
        assert _impact(TransactionType.SALE, pct=Decimal("100")) == Impact(Decimal("0"), Decimal("100"))


class TestPaymentImpact:
    """Tests for payment_impact."""

    def test_sale_payment_is_split(self):
        assert payment_impact(TransactionType.SALE, Decimal("100"), PCT) == Impact(
            Decimal("80"), Decimal("20")
        )

    @pytest.mark.parametrize("type", [TransactionType.PURCHASE, TransactionType.EXPENSE])
    def test_purchase_and_expense_payments_leave_capital(self, type):
        assert payment_impact(type, Decimal("40"), PCT) == Impact(Decimal("-40"), Decimal("0"))


class TestTransactionFolds:
    """Tests for helpers folding stored transactions."""

    def _credit_sale(self, payments):
        return Transaction(
            id="t1",
            date=datetime.now(UTC),
            amount=Decimal("200"),
            description="Credit",
            type=TransactionType.SALE,
            is_credit=True,
            is_paid=False,
            amount_paid=sum((p.amount for p in payments), Decimal("0")),
            client_name="Ana",
            payments=tuple(payments),
        )

    def test_realized_payments_of_credit_sale(self):
        txn = self._credit_sale([_payment("50"), _payment("50")])
        assert transaction_impact(txn, PCT).is_zero
        assert realized_payments_impact(txn, PCT) == Impact(Decimal("80"), Decimal("20"))

    def test_payments_on_cash_transaction_are_ignored(self):
        txn = Transaction(
            id="t2",
            date=datetime.now(UTC),
            amount=Decimal("100"),
            description="Cash",
            type=TransactionType.SALE,
            payments=(_payment("10"),),
        )
        assert realized_payments_impact(txn, PCT).is_zero

    def test_fold_impacts(self):
        cash = Transaction(
            id="t3",
            date=datetime.now(UTC),
            amount=Decimal("30"),
            description="Stock",
            type=TransactionType.PURCHASE,
        )
        credit = self._credit_sale([_payment("100")])
        assert fold_impacts([cash, credit], PCT) == Impact(Decimal("50"), Decimal("20"))

    def test_fold_of_nothing_is_zero(self):
        assert fold_impacts([], PCT).is_zero
