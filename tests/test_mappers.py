"""Tests for database mappers."""

import pytest
from datetime import datetime, UTC
from decimal import Decimal

from splitledger.database.models import (
    Transaction as ORMTransaction,
    Payment as ORMPayment,
    Summary as ORMSummary,
    OwnerSettings as ORMSettings,
)
from splitledger.database.mappers import (
    apply_transaction_update,
    payment_to_domain,
    settings_to_domain,
    summary_to_domain,
    transaction_to_domain,
)
from splitledger.domain.entities import (
    ExtraIncomeType,
    FinancialSummary,
    PaymentAppend,
    PaymentRecord,
    Settings,
    Transaction,
    TransactionEdit,
    TransactionType,
)


def _orm_transaction(**kwargs):
    fields = dict(
        id="t1",
        owner_id="owner",
        date=datetime(2024, 1, 15, 10, 30, tzinfo=UTC),
        amount=Decimal("100"),
        description="Sale",
        type="sale",
        is_credit=False,
        is_paid=None,
        amount_paid=None,
        client_name=None,
        is_extra_income=False,
        extra_income_type=None,
        version=0,
    )
    fields.update(kwargs)
    return ORMTransaction(**fields)


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_transaction_to_domain(self):
        orm_txn = _orm_transaction(is_extra_income=True, extra_income_type="capital")
        txn = transaction_to_domain(orm_txn)

        assert isinstance(txn, Transaction)
        assert txn.id == "t1"
        assert txn.type is TransactionType.SALE
        assert txn.amount == Decimal("100")
        assert txn.extra_income_type is ExtraIncomeType.CAPITAL
        assert txn.payments == ()

    def test_transaction_with_payments(self):
        orm_txn = _orm_transaction(
            is_credit=True, is_paid=False, amount_paid=Decimal("40"), client_name="Ana"
        )
        orm_txn.payments.append(
            ORMPayment(
                payment_id="p1",
                position=0,
                date=datetime(2024, 1, 16, tzinfo=UTC),
                amount=Decimal("40"),
                note="first",
            )
        )
        txn = transaction_to_domain(orm_txn)

        assert txn.is_credit is True
        assert txn.amount_paid == Decimal("40")
        assert len(txn.payments) == 1
        assert txn.payments[0] == PaymentRecord(
            id="p1", date=datetime(2024, 1, 16, tzinfo=UTC), amount=Decimal("40"), note="first"
        )


class TestSummaryAndSettingsMappers:
    """Tests for summary and settings mappers."""

    def test_summary_to_domain(self):
        orm_summary = ORMSummary(
            owner_id="o", available_capital=Decimal("-5.5"), accumulated_profits=Decimal("3")
        )
        assert summary_to_domain(orm_summary) == FinancialSummary(Decimal("-5.5"), Decimal("3"))

    def test_settings_to_domain(self):
        orm_settings = ORMSettings(owner_id="o", profit_percentage=Decimal("12.5"))
        assert settings_to_domain(orm_settings) == Settings(profit_percentage=Decimal("12.5"))

    def test_payment_to_domain(self):
        orm_payment = ORMPayment(
            payment_id="p9", position=0, date=datetime(2024, 2, 1, tzinfo=UTC), amount=Decimal("1")
        )
        payment = payment_to_domain(orm_payment)
        assert payment.id == "p9"
        assert payment.note is None


class TestApplyTransactionUpdate:
    """Tests for applying update diffs to ORM rows."""

    def test_edit_diff_sets_only_its_fields(self):
        orm_txn = _orm_transaction()
        apply_transaction_update(
            orm_txn,
            TransactionEdit(
                amount=Decimal("150"),
                description="Changed",
                type=TransactionType.PURCHASE,
                is_credit=True,
                client_name="Supplier",
                is_extra_income=False,
                extra_income_type=None,
                amount_paid=Decimal("0"),
                is_paid=False,
            ),
        )

        assert orm_txn.amount == Decimal("150")
        assert orm_txn.type == "purchase"
        assert orm_txn.is_credit is True
        assert orm_txn.client_name == "Supplier"
        assert orm_txn.amount_paid == Decimal("0")
        # Identity and creation date never change
        assert orm_txn.id == "t1"
        assert orm_txn.date == datetime(2024, 1, 15, 10, 30, tzinfo=UTC)

    def test_payment_diff_appends_in_order(self):
        orm_txn = _orm_transaction(
            is_credit=True, is_paid=False, amount_paid=Decimal("0"), client_name="Ana"
        )
        for index, amount in enumerate(["30", "70"]):
            apply_transaction_update(
                orm_txn,
                PaymentAppend(
                    payment=PaymentRecord(
                        id=f"p{index}", date=datetime.now(UTC), amount=Decimal(amount)
                    ),
                    amount_paid=Decimal("30") if index == 0 else Decimal("100"),
                    is_paid=index == 1,
                ),
            )

        assert [p.position for p in orm_txn.payments] == [0, 1]
        assert [p.payment_id for p in orm_txn.payments] == ["p0", "p1"]
        assert orm_txn.amount_paid == Decimal("100")
        assert orm_txn.is_paid is True

    def test_unknown_diff_is_rejected(self):
        with pytest.raises(TypeError):
            apply_transaction_update(_orm_transaction(), object())
