"""Shared pytest fixtures for reportit tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from reportit.database.factories import create_sqlite_database
from reportit.domain.reports import ReportsService
from reportit.domain.spending import SpendingReportsService

OWNER = "user-1"
OTHER_OWNER = "user-2"
TODAY = date(2025, 3, 15)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def reports_service(temp_db):
    """Create a ReportsService pinned to a fixed date."""
    return ReportsService(temp_db, today=lambda: TODAY)


@pytest.fixture
def spending_service(temp_db):
    """Create a SpendingReportsService with a temporary database."""
    return SpendingReportsService(temp_db)


@pytest.fixture
def usd_account(temp_db):
    """Create a USD account for the default owner."""
    return temp_db.create_account(OWNER, "Checking", currency_code="USD")


@pytest.fixture
def eur_account(temp_db):
    """Create a EUR account for the default owner."""
    return temp_db.create_account(OWNER, "Euro Card", currency_code="EUR")


@pytest.fixture
def sample_categories(temp_db):
    """Create a small category tree and return IDs by name."""
    food = temp_db.create_category(OWNER, "Food", color="#ff0000")
    groceries = temp_db.create_category(OWNER, "Groceries", parent_id=food)
    dining = temp_db.create_category(OWNER, "Dining", parent_id=food)
    transport = temp_db.create_category(OWNER, "Transport", color="#0000ff")
    salary = temp_db.create_category(OWNER, "Salary")
    return {
        "Food": food,
        "Groceries": groceries,
        "Dining": dining,
        "Transport": transport,
        "Salary": salary,
    }


@pytest.fixture
def add_transaction(temp_db, usd_account):
    """Factory creating transactions for the default owner."""

    def _add(amount, on=date(2025, 3, 1), account_id=None, **kwargs):
        return temp_db.create_transaction(
            owner_id=kwargs.pop("owner_id", OWNER),
            account_id=account_id or usd_account,
            date=on,
            amount=Decimal(str(amount)),
            **kwargs,
        )

    return _add


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
