"""Domain layer for budgetkit application."""

# Services are resolved lazily so that utils and database modules can import
# budgetkit.domain.entities without pulling in every service.
_SERVICES = {
    "CategoryCatalog": "budgetkit.domain.catalog",
    "RuleStore": "budgetkit.domain.rules",
    "Classifier": "budgetkit.domain.classifier",
    "CategorizationService": "budgetkit.domain.classifier",
    "UnknownScanner": "budgetkit.domain.unknowns",
    "SectionMap": "budgetkit.domain.sections",
    "AggregationEngine": "budgetkit.domain.summary",
    "SummaryService": "budgetkit.domain.summary",
    "CSVImportService": "budgetkit.domain.csv_import",
    "LedgerService": "budgetkit.domain.ledger",
    "RenameService": "budgetkit.domain.rename",
    "SyncService": "budgetkit.domain.sync",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
