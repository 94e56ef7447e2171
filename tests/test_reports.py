"""Tests for the report service."""

from datetime import datetime, timedelta, UTC
from decimal import Decimal

from splitledger.domain.entities import TransactionType

PCT = Decimal("20")


def _today():
    return datetime.now(UTC).date()


class TestOutstandingCredits:
    """Tests for outstanding_credits."""

    def test_lists_unpaid_credits_oldest_first(
        self, ledger_service, report_service, owner_id, make_draft
    ):
        first = ledger_service.create_transaction(
            owner_id, make_draft("200", is_credit=True, client_name="Ana"), PCT
        )
        ledger_service.create_transaction(owner_id, make_draft("50"), PCT)
        second = ledger_service.create_transaction(
            owner_id,
            make_draft("80", TransactionType.PURCHASE, is_credit=True, client_name="Supplier"),
            PCT,
        )
        ledger_service.add_payment(owner_id, first.id, Decimal("50"), None, PCT)

        credits = report_service.outstanding_credits(owner_id)

        assert [c.transaction.id for c in credits] == [first.id, second.id]
        assert credits[0].paid == Decimal("50")
        assert credits[0].remaining == Decimal("150")
        assert credits[0].progress == Decimal("25")
        assert credits[1].paid == Decimal("0")
        assert credits[1].remaining == Decimal("80")

    def test_fully_paid_credits_are_excluded(
        self, ledger_service, report_service, owner_id, make_draft
    ):
        txn = ledger_service.create_transaction(
            owner_id, make_draft("60", is_credit=True, client_name="Ana"), PCT
        )
        ledger_service.add_payment(owner_id, txn.id, Decimal("60"), None, PCT)

        assert report_service.outstanding_credits(owner_id) == []

    def test_filter_by_type(self, ledger_service, report_service, owner_id, make_draft):
        receivable = ledger_service.create_transaction(
            owner_id, make_draft("10", is_credit=True, client_name="Ana"), PCT
        )
        payable = ledger_service.create_transaction(
            owner_id,
            make_draft("20", TransactionType.EXPENSE, is_credit=True, client_name="Landlord"),
            PCT,
        )

        sales = report_service.outstanding_credits(owner_id, TransactionType.SALE)
        expenses = report_service.outstanding_credits(owner_id, TransactionType.EXPENSE)

        assert [c.transaction.id for c in sales] == [receivable.id]
        assert [c.transaction.id for c in expenses] == [payable.id]


class TestFilterTransactions:
    """Tests for filter_transactions and transaction_breakdowns."""

    def test_filter_by_type(self, ledger_service, report_service, owner_id, make_draft):
        ledger_service.create_transaction(owner_id, make_draft("100"), PCT)
        purchase = ledger_service.create_transaction(
            owner_id, make_draft("30", TransactionType.PURCHASE), PCT
        )

        result = report_service.filter_transactions(owner_id, TransactionType.PURCHASE)

        assert [t.id for t in result] == [purchase.id]

    def test_end_date_covers_whole_day(self, ledger_service, report_service, owner_id, make_draft):
        txn = ledger_service.create_transaction(owner_id, make_draft("100"), PCT)
        today = _today()

        result = report_service.filter_transactions(owner_id, start_date=today, end_date=today)

        assert [t.id for t in result] == [txn.id]

    def test_date_range_excludes_other_days(
        self, ledger_service, report_service, owner_id, make_draft
    ):
        ledger_service.create_transaction(owner_id, make_draft("100"), PCT)
        tomorrow = _today() + timedelta(days=1)
        yesterday = _today() - timedelta(days=1)

        assert report_service.filter_transactions(owner_id, start_date=tomorrow) == []
        assert report_service.filter_transactions(owner_id, end_date=yesterday) == []

    def test_breakdowns_split_sales_only(
        self, ledger_service, report_service, owner_id, make_draft
    ):
        ledger_service.create_transaction(owner_id, make_draft("100"), PCT)
        ledger_service.create_transaction(
            owner_id, make_draft("200", is_credit=True, client_name="Ana"), PCT
        )
        ledger_service.create_transaction(
            owner_id, make_draft("40", is_extra_income=True, extra_income_type="profit"), PCT
        )
        ledger_service.create_transaction(owner_id, make_draft("30", TransactionType.EXPENSE), PCT)

        rows = report_service.transaction_breakdowns(owner_id, profit_percentage=Decimal("25"))
        by_amount = {row.transaction.amount: (row.capital, row.profit) for row in rows}

        assert by_amount[Decimal("100")] == (Decimal("75"), Decimal("25"))
        assert by_amount[Decimal("200")] == (Decimal("150"), Decimal("50"))
        assert by_amount[Decimal("40")] == (Decimal("0"), Decimal("40"))
        assert by_amount[Decimal("30")] == (Decimal("0"), Decimal("0"))

    def test_breakdowns_default_to_stored_percentage(
        self, ledger_service, report_service, owner_id, make_draft
    ):
        ledger_service.create_transaction(owner_id, make_draft("100"), PCT)

        (row,) = report_service.transaction_breakdowns(owner_id)

        assert (row.capital, row.profit) == (Decimal("80"), Decimal("20"))


class TestDailySales:
    """Tests for daily_sales."""

    def test_totals_sales_per_day(self, ledger_service, report_service, owner_id, make_draft):
        ledger_service.create_transaction(owner_id, make_draft("100"), PCT)
        ledger_service.create_transaction(
            owner_id, make_draft("50", is_credit=True, client_name="Ana"), PCT
        )
        ledger_service.create_transaction(owner_id, make_draft("30", TransactionType.PURCHASE), PCT)
        today = _today()

        sales = report_service.daily_sales(owner_id, today.year, today.month)

        assert sales.totals == {today.day: Decimal("150")}
        assert sales.max_total == Decimal("150")

    def test_other_month_is_empty(self, ledger_service, report_service, owner_id, make_draft):
        ledger_service.create_transaction(owner_id, make_draft("100"), PCT)
        today = _today()

        sales = report_service.daily_sales(owner_id, today.year - 1, today.month)

        assert sales.totals == {}
        assert sales.max_total == Decimal("0")
