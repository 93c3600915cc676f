"""Shared pytest fixtures for budgetkit tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
from pathlib import Path
import pytest

from budgetkit.database.factories import create_sqlite_database
from budgetkit.database.memory import InMemoryPropertyStore
from budgetkit.domain.catalog import CategoryCatalog
from budgetkit.domain.entities import LedgerRow, TransactionSide
from budgetkit.domain.rules import RuleStore


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
def memory_store():
    """Create an empty in-memory property store."""
    return InMemoryPropertyStore()


@pytest.fixture
def rule_store(memory_store):
    """Create a RuleStore over an in-memory property store."""
    return RuleStore(memory_store)


@pytest.fixture
def catalog_service(temp_db):
    """Create a CategoryCatalog with a temporary database."""
    return CategoryCatalog(temp_db)


@pytest.fixture
def sample_settings(catalog_service):
    """Seed the default settings tables and publish the category list."""
    from budgetkit.cli.commands.init_settings import DEFAULT_SETTINGS

    for table, category, category_type in DEFAULT_SETTINGS:
        catalog_service.add_category(table, category, category_type)
    return catalog_service.rebuild()


def make_side(day: date, description: str, amount: str, category: str = "", type: str = "") -> TransactionSide:
    """Build one transaction side."""
    return TransactionSide(
        date=day, description=description, amount=Decimal(amount), category=category, type=type
    )


def make_row(row_id: int = 0, debit_side=None, credit_side=None) -> LedgerRow:
    """Build a ledger row from optional sides."""
    return LedgerRow(
        id=row_id,
        debit_side=debit_side or TransactionSide(),
        credit_side=credit_side or TransactionSide(),
    )


@pytest.fixture
def sample_ledger(temp_db):
    """Append a small ledger covering several months of 2024."""
    rows = [
        make_row(credit_side=make_side(date(2024, 1, 5), "PAYROLL ACME", "2500.00", "Salary", "Income")),
        make_row(debit_side=make_side(date(2024, 1, 12), "LANDLORD RENT", "1200.00", "Rent", "Need")),
        make_row(debit_side=make_side(date(2024, 4, 3), "GROCERY MART", "150.00", "Groceries", "Need")),
        make_row(debit_side=make_side(date(2024, 5, 20), "CINEMA", "30.00", "Movies", "Want")),
        make_row(debit_side=make_side(date(2024, 6, 1), "VISA PAYMENT", "400.00", "Credit Card", "Debt")),
        make_row(debit_side=make_side(date(2024, 6, 15), "TFSA DEPOSIT", "250.00", "TFSA", "Savings")),
        make_row(credit_side=make_side(date(2024, 6, 30), "PAYROLL ACME", "2500.00", "Salary", "Income")),
        make_row(debit_side=make_side(date(2024, 7, 2), "STARBUCKS #123", "4.50")),
        make_row(debit_side=make_side(date(2023, 12, 31), "OLD PURCHASE", "99.00", "Shopping", "Want")),
    ]
    temp_db.append_ledger_rows(rows)
    return temp_db.list_ledger_rows()


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
