"""CLI helpers for resolving transaction references."""

from __future__ import annotations

import click

from splitledger.domain.entities import Transaction
from splitledger.domain.ledger import LedgerService

MIN_PREFIX_LENGTH = 4


def resolve_transaction(service: LedgerService, owner_id: str, reference: str) -> Transaction:
    """Resolve a full transaction ID or a unique ID prefix.

    Raises:
        ValueError: If nothing or more than one transaction matches
    """
    reference = reference.strip()
    transactions = service.list_transactions(owner_id)
    for txn in transactions:
        if txn.id == reference:
            return txn

    if len(reference) < MIN_PREFIX_LENGTH:
        raise ValueError(f"Transaction '{reference}' not found")

    matches = [txn for txn in transactions if txn.id.startswith(reference)]
    if not matches:
        raise ValueError(f"Transaction '{reference}' not found")
    if len(matches) > 1:
        raise ValueError(
            f"Transaction reference '{reference}' is ambiguous ({len(matches)} matches)"
        )
    return matches[0]


def resolve_transaction_or_exit(
    ctx: click.Context, service: LedgerService, owner_id: str, reference: str
) -> Transaction:
    """Resolve a transaction reference, or exit with a CLI error."""
    try:
        return resolve_transaction(service, owner_id, reference)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
