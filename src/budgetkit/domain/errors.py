"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConfigurationError(DomainError):
    """A required source (settings tables, sections file) is missing or unusable."""


def settings_missing() -> str:
    """Return message for a workbook without settings tables."""
    return "Settings tables missing. Run 'init-settings' first."


def no_categories_found() -> str:
    """Return message when settings tables hold no categories."""
    return "No categories found in settings."


def unknown_settings_table(table: str, tables: tuple[str, ...]) -> str:
    """Return message for a table name outside the declared settings tables."""
    return f"Unknown settings table '{table}'. Expected one of: {', '.join(tables)}"


def ledger_row_not_found(row_id: int) -> str:
    """Return message for missing ledger row."""
    return f"Ledger row {row_id} not found"


def rule_keyword_required() -> str:
    """Return message for saving a rule without keyword."""
    return "Keyword required"


def invalid_direction(value: str) -> str:
    """Return message for a direction outside in/out/any."""
    return f"Invalid direction '{value}'. Expected one of: in, out, any"


def invalid_type(value: str) -> str:
    """Return message for a type outside the type list."""
    return (
        f"Invalid type '{value}'. Expected one of: "
        "Income, Need, Want, Savings, Debt, Unknown, None"
    )


def category_not_in_catalog(category: str) -> str:
    """Return message for a category missing from the published list."""
    return f"Category '{category}' is not in the category list"


def rename_names_required() -> str:
    """Return message for a rename without old or new name."""
    return "Both old and new category names are required."


def invalid_period(label: str, year: int) -> str:
    """Return message for a period label that resolves to no window."""
    return f"Invalid period '{label}' for {year}"


def csv_not_utf8(path: str, error: UnicodeDecodeError) -> str:
    """Return message for a CSV file that is not UTF-8 encoded."""
    return (
        f"CSV file {path} is not UTF-8 encoded (byte 0x{error.object[error.start]:02x} "
        f"at position {error.start}). Re-save the export as UTF-8 and import again."
    )
