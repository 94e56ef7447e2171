"""Shared pytest fixtures for splitledger tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from splitledger.database.factories import create_sqlite_store
from splitledger.domain.entities import TransactionDraft, TransactionType
from splitledger.domain.ledger import LedgerService
from splitledger.domain.reports import ReportService

OWNER = "owner-1"


@pytest.fixture
def temp_db():
    """Create a temporary ledger store for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    # Cleanup
    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def owner_id():
    """Owner used by most tests."""
    return OWNER


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary store."""
    return LedgerService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary store."""
    return ReportService(temp_db)


@pytest.fixture
def make_draft():
    """Build transaction drafts with sensible defaults."""

    def _make(amount="100", type=TransactionType.SALE, description="Test entry", **kwargs):
        if isinstance(amount, str):
            amount = Decimal(amount)
        return TransactionDraft(amount=amount, description=description, type=type, **kwargs)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
