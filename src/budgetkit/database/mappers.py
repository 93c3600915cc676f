"""Mapper functions to convert between domain models and SQLAlchemy models.

Side fields are stored as prefixed columns (debit_*, credit_*); this layer
turns them into the two named sub-records of a domain ledger row.
"""

from decimal import Decimal

from budgetkit.domain import entities as domain
from budgetkit.database.models import (
    CategoryEntry as ORMCategoryEntry,
    LedgerRow as ORMLedgerRow,
)


def _side_to_domain(orm_row: ORMLedgerRow, prefix: str) -> domain.TransactionSide:
    amount = getattr(orm_row, f"{prefix}_amount")
    return domain.TransactionSide(
        date=getattr(orm_row, f"{prefix}_date"),
        description=getattr(orm_row, f"{prefix}_description") or "",
        amount=Decimal(amount) if amount is not None else Decimal("0"),
        category=getattr(orm_row, f"{prefix}_category") or "",
        type=getattr(orm_row, f"{prefix}_type") or "",
    )


def ledger_row_to_domain(orm_row: ORMLedgerRow) -> domain.LedgerRow:
    """Convert SQLAlchemy LedgerRow model to domain LedgerRow entity."""
    return domain.LedgerRow(
        id=orm_row.id,
        debit_side=_side_to_domain(orm_row, "debit"),
        credit_side=_side_to_domain(orm_row, "credit"),
        balance=Decimal(orm_row.balance) if orm_row.balance is not None else None,
    )


def ledger_row_to_columns(row: domain.LedgerRow) -> dict:
    """Flatten a domain LedgerRow into SQLAlchemy column values."""
    columns = {"balance": row.balance}
    for side, values in row.sides():
        prefix = side.value
        columns[f"{prefix}_date"] = values.date
        columns[f"{prefix}_description"] = values.description
        columns[f"{prefix}_amount"] = values.amount
        columns[f"{prefix}_category"] = values.category
        columns[f"{prefix}_type"] = values.type
    return columns


def category_entry_to_domain(orm_entry: ORMCategoryEntry) -> domain.CategoryDefinition:
    """Convert SQLAlchemy CategoryEntry model to domain CategoryDefinition."""
    return domain.CategoryDefinition(
        category=orm_entry.category or "",
        type=orm_entry.category_type or "",
        table=orm_entry.table_name,
    )
