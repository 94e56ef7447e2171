"""Abstract ledger store interface."""

from abc import ABC, abstractmethod
from typing import Callable, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from splitledger.domain.entities import (
    FinancialSummary,
    LedgerSnapshot,
    NewTransaction,
    Settings,
    Transaction,
    TransactionUpdate,
)
from splitledger.database.events import ChangeFeed, Topic


class LedgerStore(ABC):
    """Keyed record store for per-owner transactions, summary and settings.

    Besides point reads and writes, the store offers an atomic
    read-modify-write primitive on a single record: the supplied function
    receives the current value and returns the new one, and the store
    retries it when a concurrent writer got there first.
    """

    def __init__(self, feed: Optional[ChangeFeed] = None):
        self.feed = feed if feed is not None else ChangeFeed()

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize the store schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
    def insert_transaction(self, owner_id: str, fields: NewTransaction) -> Transaction:
        """Store a new transaction. The store assigns id and timestamp."""
        pass

    @abstractmethod
    def get_transaction(self, owner_id: str, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID, with its payments."""
        pass

    @abstractmethod
    def list_transactions(self, owner_id: str) -> list[Transaction]:
        """List all of an owner's transactions, newest first."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        owner_id: str,
        transaction_id: str,
        update: Callable[[Transaction], TransactionUpdate],
    ) -> tuple[Transaction, Transaction]:
        """Atomically rewrite a transaction from its current value.

        Returns (previous, updated). Exceptions raised by ``update`` abort
        the write and propagate unchanged.

        Raises:
            NotFoundError: If the transaction does not exist
            ConflictError: If retries against concurrent writers ran out
        """
        pass

    @abstractmethod
    def delete_transaction(self, owner_id: str, transaction_id: str) -> Transaction:
        """Delete a transaction and its payments. Returns the removed record."""
        pass

    # Summary operations
    @abstractmethod
    def get_summary(self, owner_id: str) -> FinancialSummary:
        """Get the summary, creating a zeroed one if absent."""
        pass

    @abstractmethod
    def update_summary(
        self, owner_id: str, update: Callable[[FinancialSummary], FinancialSummary]
    ) -> FinancialSummary:
        """Atomically replace the summary with ``update(current)``."""
        pass

    # Settings operations
    @abstractmethod
    def get_settings(self, owner_id: str) -> Settings:
        """Get settings, creating defaults if absent."""
        pass

    @abstractmethod
    def put_settings(self, owner_id: str, settings: Settings) -> None:
        """Overwrite settings."""
        pass

    @abstractmethod
    def snapshot(self, owner_id: str) -> LedgerSnapshot:
        """Read all transactions and the settings in one consistent view."""
        pass

    # Subscriptions
    def subscribe(
        self, topic: Topic, owner_id: str, listener: Callable[[], None]
    ) -> Callable[[], None]:
        """Register a change listener. Returns an unsubscribe function."""
        return self.feed.subscribe(topic, owner_id, listener)

    def notify(self, topic: Topic, owner_id: str) -> None:
        """Tell listeners that a record kind changed for an owner."""
        self.feed.publish(topic, owner_id)
