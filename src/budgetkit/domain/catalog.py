"""Category catalog domain service."""

import logging
from typing import Iterable, Optional

from budgetkit.database.base import Database
from budgetkit.domain.entities import CategoryDefinition, TransactionType
from budgetkit.domain.errors import (
    ConfigurationError,
    ValidationError,
    invalid_type,
    no_categories_found,
    settings_missing,
    unknown_settings_table,
)

log = logging.getLogger(__name__)

# Settings tables in declaration order; earlier tables win on duplicates.
SETTINGS_TABLES = (
    "Income",
    "Residence",
    "Transportation",
    "Daily Living",
    "Banking",
    "Health",
    "Vacation",
    "Debt",
    "Savings",
)


def normalize_name(name: Optional[str]) -> str:
    """Case and whitespace insensitive comparison key for category names."""
    return " ".join(str(name or "").replace("\u00a0", " ").split()).upper()


def flatten_categories(
    entries: Iterable[CategoryDefinition], tables: Iterable[str] = SETTINGS_TABLES
) -> list[CategoryDefinition]:
    """Flatten settings rows into a deduplicated master list.

    Tables are visited in the given order and rows keep their order inside
    a table. Blank categories are skipped, a blank type becomes "Unknown",
    and the first occurrence of a name wins.
    """
    by_table: dict[str, list[CategoryDefinition]] = {}
    for entry in entries:
        by_table.setdefault(entry.table, []).append(entry)

    seen: set[str] = set()
    result: list[CategoryDefinition] = []
    for table in tables:
        for entry in by_table.get(table, []):
            name = entry.category.strip()
            if not name:
                continue
            key = normalize_name(name)
            if key in seen:
                continue
            seen.add(key)
            result.append(
                CategoryDefinition(
                    category=name,
                    type=entry.type.strip() or TransactionType.UNKNOWN.value,
                    table=table,
                )
            )
    return result


class CategoryCatalog:
    """Service for reading settings tables and publishing the category list."""

    def __init__(self, db: Database, tables: tuple[str, ...] = SETTINGS_TABLES):
        """Initialize category catalog.

        Args:
            db: Database instance
            tables: Settings table names in declaration order
        """
        self.db = db
        self.tables = tables

    def get_list(self) -> list[CategoryDefinition]:
        """Flattened, deduplicated category list without publishing it.

        Raises:
            ConfigurationError: If no settings tables exist
        """
        if not self.db.list_settings_tables():
            raise ConfigurationError(settings_missing())
        return flatten_categories(self.db.list_category_entries(), self.tables)

    def rebuild(self) -> list[CategoryDefinition]:
        """Flatten the settings tables and publish the result as the category list.

        Returns:
            Flattened category definitions

        Raises:
            ConfigurationError: If settings are missing or hold no categories
        """
        categories = self.get_list()
        if not categories:
            raise ConfigurationError(no_categories_found())

        self.db.set_category_list([c.category for c in categories])
        log.info("Category list rebuilt with %d categories", len(categories))
        return categories

    def published(self) -> list[str]:
        """Category names currently published as the dropdown source."""
        return self.db.get_category_list()

    def add_category(self, table: str, name: str, category_type: str) -> int:
        """Append a category to a settings table.

        Raises:
            ValidationError: If the table, name or type is invalid
        """
        if table not in self.tables:
            raise ValidationError(unknown_settings_table(table, self.tables))
        name = name.strip()
        if not name:
            raise ValidationError("Category name required")
        if not TransactionType.is_valid(category_type):
            raise ValidationError(invalid_type(category_type))
        return self.db.add_category_entry(
            table=table,
            category=name,
            category_type=TransactionType.parse(category_type).value,
        )

    def has_settings(self) -> bool:
        return bool(self.db.list_settings_tables())

    def reset(self) -> int:
        """Remove every settings row."""
        return self.db.clear_category_entries()
