"""Ledger domain service."""

from typing import Optional

from budgetkit.database.base import Database
from budgetkit.domain.catalog import normalize_name
from budgetkit.domain.entities import (
    UNRESOLVED_CATEGORIES,
    LedgerRow,
    Side,
    TransactionType,
)
from budgetkit.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_in_catalog,
    invalid_type,
    ledger_row_not_found,
)


class LedgerService:
    """Service for reading the ledger and editing classifications by hand."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_rows(self, unresolved_only: bool = False) -> list[LedgerRow]:
        """List ledger rows.

        Args:
            unresolved_only: If True, only rows with an unclassified side
        """
        rows = [row for row in self.db.list_ledger_rows() if not row.is_empty]
        if not unresolved_only:
            return rows
        return [
            row
            for row in rows
            if any(side.description and side.is_unresolved for _, side in row.sides())
        ]

    def get_row(self, row_id: int) -> Optional[LedgerRow]:
        return self.db.get_ledger_row(row_id)

    def set_classification(self, row_id: int, side: Side, category: str, category_type: str) -> None:
        """Assign category and type to one side of a row.

        The category must be on the published category list (Unknown and None
        are always accepted) and the type must be one of the known types.

        Raises:
            NotFoundError: If the row doesn't exist
            ValidationError: If category or type is not allowed
        """
        if self.db.get_ledger_row(row_id) is None:
            raise NotFoundError(ledger_row_not_found(row_id))

        if not TransactionType.is_valid(category_type):
            raise ValidationError(invalid_type(category_type))

        category = category.strip()
        if category.lower() not in UNRESOLVED_CATEGORIES:
            allowed = {normalize_name(name): name for name in self.db.get_category_list()}
            key = normalize_name(category)
            if key not in allowed:
                raise ValidationError(category_not_in_catalog(category))
            category = allowed[key]

        self.db.update_side_classification(
            row_id, side, category, TransactionType.parse(category_type).value
        )
