"""Store layer for splitledger application."""

from splitledger.database.base import LedgerStore
from splitledger.database.events import ChangeFeed, Topic
from splitledger.database.factories import create_sqlite_store

__all__ = ["LedgerStore", "ChangeFeed", "Topic", "create_sqlite_store"]
