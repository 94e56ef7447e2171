"""Runtime configuration read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DB_PATH_ENV = "SPLITLEDGER_DB_PATH"
OWNER_ENV = "SPLITLEDGER_OWNER"
LOG_LEVEL_ENV = "SPLITLEDGER_LOG_LEVEL"
MAX_RETRIES_ENV = "SPLITLEDGER_MAX_RETRIES"
LOG_FORMAT_ENV = "SPLITLEDGER_LOG_FORMAT"

DEFAULT_OWNER = "default"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_MAX_RETRIES = 5
LOG_FORMATS = ("console", "json")


def default_database_path() -> str:
    """Return ~/.splitledger/ledger.db."""
    return str(Path.home() / ".splitledger" / "ledger.db")


@dataclass(frozen=True)
class LedgerConfig:
    """Settings that control where and how the ledger runs."""

    database_path: str
    owner_id: str = DEFAULT_OWNER
    log_level: str = DEFAULT_LOG_LEVEL
    max_retries: int = DEFAULT_MAX_RETRIES
    log_format: str = "console"


def load_config(environ: Optional[Mapping[str, str]] = None) -> LedgerConfig:
    """Build configuration from environment variables.

    Raises:
        ValueError: If SPLITLEDGER_MAX_RETRIES is not a positive integer or
            SPLITLEDGER_LOG_FORMAT is not a known format
    """
    if environ is None:
        environ = os.environ

    raw_retries = environ.get(MAX_RETRIES_ENV)
    max_retries = DEFAULT_MAX_RETRIES
    if raw_retries:
        try:
            max_retries = int(raw_retries)
        except ValueError:
            raise ValueError(f"{MAX_RETRIES_ENV} must be an integer, got '{raw_retries}'")
        if max_retries < 1:
            raise ValueError(f"{MAX_RETRIES_ENV} must be at least 1")

    log_format = (environ.get(LOG_FORMAT_ENV) or "console").lower()
    if log_format not in LOG_FORMATS:
        raise ValueError(f"{LOG_FORMAT_ENV} must be one of {', '.join(LOG_FORMATS)}")

    return LedgerConfig(
        database_path=environ.get(DB_PATH_ENV) or default_database_path(),
        owner_id=environ.get(OWNER_ENV) or DEFAULT_OWNER,
        log_level=(environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper(),
        max_retries=max_retries,
        log_format=log_format,
    )
