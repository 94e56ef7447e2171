"""Store factory functions for creating ledger store instances."""

from pathlib import Path
from typing import Optional

from splitledger.config import LedgerConfig, load_config
from splitledger.database.sqlalchemy_db import SQLAlchemyLedgerStore


def create_sqlite_store(
    database_path: Optional[str] = None, config: Optional[LedgerConfig] = None
) -> SQLAlchemyLedgerStore:
    """Create a SQLite ledger store instance.

    Args:
        database_path: Path to SQLite database file. If None, uses the configured
            path (SPLITLEDGER_DB_PATH environment variable, then
            ~/.splitledger/ledger.db)
        config: Configuration to use instead of the environment

    Returns:
        SQLAlchemyLedgerStore instance configured for SQLite
    """
    if config is None:
        config = load_config()

    if database_path is None:
        database_path = config.database_path

    Path(database_path).expanduser().parent.mkdir(parents=True, exist_ok=True)
    database_url = f"sqlite:///{Path(database_path).expanduser()}"
    return SQLAlchemyLedgerStore(database_url, max_retries=config.max_retries)
