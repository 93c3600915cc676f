"""Refresh orchestration across catalog, rules and aggregation."""

import logging
from typing import Optional

from budgetkit.database.base import Database
from budgetkit.domain.catalog import CategoryCatalog
from budgetkit.domain.classifier import CategorizationService, Classifier
from budgetkit.domain.entities import AggregatedTotals, HealthReport
from budgetkit.domain.errors import DomainError
from budgetkit.domain.rename import RenameResult, RenameService
from budgetkit.domain.rules import RuleStore
from budgetkit.domain.sections import SectionMap
from budgetkit.domain.summary import SummaryService
from budgetkit.domain.unknowns import UnknownScanner
from budgetkit.utils.date_parser import resolve_period

log = logging.getLogger(__name__)


class SyncService:
    """Runs the full recompute cycles that follow user actions."""

    def __init__(self, db: Database, sections: Optional[SectionMap] = None):
        """Initialize sync service.

        Args:
            db: Database instance
            sections: Section table; defaults to the built-in one
        """
        self.db = db
        self.rules = RuleStore(db.property_store())
        self.catalog = CategoryCatalog(db)
        self.categorization = CategorizationService(db, Classifier(self.rules, sections))
        self.summary = SummaryService(db, sections)
        self.scanner = UnknownScanner(db)

    def refresh_system(self, period_label: str, year: int) -> Optional[AggregatedTotals]:
        """Rebuild the category list, re-apply rules and recompute totals.

        Returns:
            AggregatedTotals, or None when the period does not resolve, in
            which case nothing is written

        Raises:
            ConfigurationError: If settings tables are missing or empty
        """
        window = resolve_period(period_label, year)
        if window is None:
            log.warning("Period '%s' for %s did not resolve; refresh aborted", period_label, year)
            return None
        self.catalog.rebuild()
        self.categorization.apply_rules_to_ledger()
        return self.summary.compute(window)

    def after_import(self) -> int:
        """Classify freshly imported rows. Returns sides matched."""
        return self.categorization.apply_rules_to_ledger()

    def after_rule_save(self) -> int:
        """Re-apply rules after the rule set changed. Returns sides matched."""
        return self.categorization.apply_rules_to_ledger()

    def after_rename(self) -> int:
        """Republish the category list and re-apply rules after a rename."""
        self.catalog.rebuild()
        return self.categorization.apply_rules_to_ledger()

    def rename(self, old_name: str, new_name: str, new_type: Optional[str] = None) -> RenameResult:
        """Rename a category everywhere, then run the after-rename refresh."""
        # Fail before writing anything when settings are missing
        self.catalog.get_list()
        result = RenameService(self.db, self.rules).rename(old_name, new_name, new_type)
        self.after_rename()
        return result

    def health(self) -> HealthReport:
        """Summarize what the workbook holds."""
        tables = tuple(self.db.list_settings_tables())
        categories = 0
        if tables:
            try:
                categories = len(self.catalog.get_list())
            except DomainError as e:
                log.warning("Could not read categories: %s", e)
        return HealthReport(
            settings_tables=tables,
            categories=categories,
            ledger_rows=len(self.db.list_ledger_rows()),
            rules=len(self.rules.get_all()),
            unknown_groups=len(self.scanner.scan()),
        )
