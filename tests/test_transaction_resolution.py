"""Tests for transaction reference resolution."""

from dataclasses import replace
from decimal import Decimal

import pytest

from splitledger.cli.transaction_resolution import resolve_transaction


def test_resolves_full_id_and_prefix(ledger_service, owner_id, make_draft):
    txn = ledger_service.create_transaction(owner_id, make_draft(), Decimal("20"))

    assert resolve_transaction(ledger_service, owner_id, txn.id) == txn
    assert resolve_transaction(ledger_service, owner_id, txn.id[:5]) == txn


def test_short_prefix_is_not_enough(ledger_service, owner_id, make_draft):
    txn = ledger_service.create_transaction(owner_id, make_draft(), Decimal("20"))

    with pytest.raises(ValueError, match="not found"):
        resolve_transaction(ledger_service, owner_id, txn.id[:3])


def test_ambiguous_prefix(ledger_service, owner_id, make_draft, monkeypatch):
    txn = ledger_service.create_transaction(owner_id, make_draft(), Decimal("20"))
    lookalikes = [replace(txn, id="abcd1111"), replace(txn, id="abcd2222")]
    monkeypatch.setattr(ledger_service, "list_transactions", lambda owner: lookalikes)

    with pytest.raises(ValueError, match="ambiguous"):
        resolve_transaction(ledger_service, owner_id, "abcd")
