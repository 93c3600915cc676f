"""Global category rename."""

import logging
from dataclasses import dataclass
from typing import Optional

from budgetkit.database.base import Database
from budgetkit.domain.entities import TransactionType
from budgetkit.domain.errors import (
    ValidationError,
    invalid_type,
    rename_names_required,
)
from budgetkit.domain.rules import RuleStore

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenameResult:
    """Number of places a rename touched."""

    settings_updated: int
    ledger_updated: int
    rules_updated: int


class RenameService:
    """Renames a category across settings tables, ledger sides and rules."""

    def __init__(self, db: Database, rules: Optional[RuleStore] = None):
        """Initialize rename service.

        Args:
            db: Database instance
            rules: Rule store; defaults to one over the database's property store
        """
        self.db = db
        self.rules = rules or RuleStore(db.property_store())

    def rename(self, old_name: str, new_name: str, new_type: Optional[str] = None) -> RenameResult:
        """Rename a category everywhere it is used.

        Matching is case-insensitive on the trimmed name. When new_type is
        given it replaces the type wherever the category is renamed.

        Raises:
            ValidationError: If a name is blank or new_type is invalid
        """
        old_name = (old_name or "").strip()
        new_name = (new_name or "").strip()
        if not old_name or not new_name:
            raise ValidationError(rename_names_required())
        if new_type and not TransactionType.is_valid(new_type):
            raise ValidationError(invalid_type(new_type))
        if new_type:
            new_type = TransactionType.parse(new_type).value

        settings_updated = self.db.rename_category_entries(old_name, new_name, new_type)

        target = old_name.upper()
        ledger_updated = 0
        changed = []
        for row in self.db.list_ledger_rows():
            updated = row
            for which, side in row.sides():
                if side.category.strip().upper() != target:
                    continue
                updated = updated.with_side(
                    which, side.with_classification(new_name, new_type or side.type)
                )
                ledger_updated += 1
            if updated is not row:
                changed.append(updated)
        if changed:
            self.db.write_classifications(changed)

        rules_updated = self.rules.rename_category(old_name, new_name, new_type)

        log.info(
            "Renamed '%s' to '%s': %d settings rows, %d ledger sides, %d rules",
            old_name,
            new_name,
            settings_updated,
            ledger_updated,
            rules_updated,
        )
        return RenameResult(
            settings_updated=settings_updated,
            ledger_updated=ledger_updated,
            rules_updated=rules_updated,
        )
