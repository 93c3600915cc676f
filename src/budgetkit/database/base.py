"""Abstract storage interfaces."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain services
from budgetkit.domain.entities import (
    CategoryDefinition,
    LedgerRow,
    Side,
)


class PropertyStore(ABC):
    """Flat string-keyed store with string values."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the value stored under key, or None."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Create or overwrite the value stored under key."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete key. Returns False when the key did not exist."""
        pass

    @abstractmethod
    def list(self) -> dict[str, str]:
        """Return every key and value."""
        pass


class Database(ABC):
    """Abstract workbook interface for budgetkit.

    The workbook holds the settings tables (category/type pairs), the
    published category list, and the transaction ledger.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def property_store(self) -> PropertyStore:
        """Key-value store living in the same workbook."""
        pass

    # Settings table operations
    @abstractmethod
    def list_settings_tables(self) -> list[str]:
        """Names of settings tables that hold at least one row."""
        pass

    @abstractmethod
    def add_category_entry(self, table: str, category: str, category_type: str) -> int:
        """Append a category/type row to a settings table. Returns entry ID."""
        pass

    @abstractmethod
    def list_category_entries(self, table: Optional[str] = None) -> list[CategoryDefinition]:
        """List settings rows in insertion order, optionally for one table."""
        pass

    @abstractmethod
    def clear_category_entries(self) -> int:
        """Remove every settings row. Returns number removed."""
        pass

    @abstractmethod
    def rename_category_entries(
        self, old_name: str, new_name: str, new_type: Optional[str] = None
    ) -> int:
        """Rename settings rows whose category matches old_name case-insensitively."""
        pass

    # Published category list
    @abstractmethod
    def set_category_list(self, names: Sequence[str]) -> None:
        """Replace the published category list."""
        pass

    @abstractmethod
    def get_category_list(self) -> list[str]:
        """Get the published category list."""
        pass

    # Ledger operations
    @abstractmethod
    def append_ledger_rows(self, rows: Sequence[LedgerRow]) -> list[int]:
        """Append rows (their id is ignored). Returns the new row IDs."""
        pass

    @abstractmethod
    def get_ledger_row(self, row_id: int) -> Optional[LedgerRow]:
        """Get ledger row by ID."""
        pass

    @abstractmethod
    def list_ledger_rows(self) -> list[LedgerRow]:
        """List every ledger row in row order."""
        pass

    @abstractmethod
    def update_side_classification(
        self, row_id: int, side: Side, category: str, category_type: str
    ) -> None:
        """Write category and type of one side of one row."""
        pass

    @abstractmethod
    def write_classifications(self, rows: Sequence[LedgerRow]) -> None:
        """Write back category and type of both sides of the given rows.

        Other fields are left untouched.
        """
        pass

