"""Section keyword table used to roll categories up into dashboard sections."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from budgetkit.domain.entities import TransactionType
from budgetkit.domain.errors import ConfigurationError

log = logging.getLogger(__name__)

SECTIONS_ENV_VAR = "BUDGETKIT_SECTIONS_PATH"

# Checked in order; the first section with a keyword contained in the
# category name wins.
DEFAULT_SECTION_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Residence": ("Rent", "Mortgage", "Utilities", "Home Insurance", "Property Tax", "Internet"),
    "Transportation": ("Fuel", "Parking", "Car Insurance", "Transit", "Uber", "Maintenance"),
    "Daily Living": ("Groceries", "Restaurants", "Shopping", "Subscriptions", "Pets"),
    "Banking": ("Fees", "ATM", "Transfers", "Service Fee"),
    "Health": ("Pharmacy", "Medical", "Dental", "Gym"),
    "Vacation": ("Hotel", "Flight", "Travel", "Excursion"),
    "Entertainment": ("Entertainment", "Movies", "Streaming", "Concerts", "Games"),
    "Debt": ("Loan", "Credit Card", "Line of Credit"),
    "Savings": ("RRSP", "TFSA", "Investments", "Savings"),
}

DEFAULT_FALLBACK_SECTION = "Daily Living"
DEFAULT_INCOME_SECTION = "Income"


@dataclass(frozen=True)
class SectionMap:
    """Maps a (category, type) pair onto exactly one dashboard section."""

    keywords: dict[str, tuple[str, ...]]
    default_section: str = DEFAULT_FALLBACK_SECTION
    income_section: str = DEFAULT_INCOME_SECTION

    def __post_init__(self):
        if self.default_section not in self.keywords:
            raise ConfigurationError(
                f"Default section '{self.default_section}' is not a configured section"
            )
        if self.income_section in self.keywords:
            raise ConfigurationError(
                f"Income section '{self.income_section}' must not have keywords"
            )

    @classmethod
    def default(cls) -> "SectionMap":
        return cls(keywords=dict(DEFAULT_SECTION_KEYWORDS))

    @property
    def section_names(self) -> tuple[str, ...]:
        """All sections, income section last."""
        return (*self.keywords.keys(), self.income_section)

    def resolve(self, category: Optional[str], type: Optional[str]) -> str:
        """Pick the section for a category string and type.

        Income, Debt and Savings types go straight to their own section when
        one exists. Other types are matched by case-insensitive keyword
        containment; unmatched categories land in the default section.
        """
        kind = TransactionType.parse(type)
        if kind == TransactionType.INCOME:
            return self.income_section
        if kind in (TransactionType.DEBT, TransactionType.SAVINGS) and kind.value in self.keywords:
            return kind.value

        category_upper = (category or "").upper()
        if category_upper:
            for section, words in self.keywords.items():
                for word in words:
                    if word.upper() in category_upper:
                        return section
        return self.default_section


def load_section_map(path: Optional[str] = None) -> SectionMap:
    """Load the section table from a YAML file.

    Args:
        path: YAML file path. If None, checks BUDGETKIT_SECTIONS_PATH, then
            falls back to the built-in table.

    Returns:
        SectionMap

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    if path is None:
        path = os.environ.get(SECTIONS_ENV_VAR)
    if not path:
        return SectionMap.default()

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Sections file not found: {path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not read sections file {path}: {e}")

    sections = data.get("sections") if isinstance(data, dict) else None
    if not isinstance(sections, dict) or not sections:
        raise ConfigurationError(f"Sections file {path} has no 'sections' mapping")

    keywords: dict[str, tuple[str, ...]] = {}
    for name, words in sections.items():
        if isinstance(words, str):
            words = [words]
        elif words is None:
            words = []
        elif not isinstance(words, (list, tuple)):
            raise ConfigurationError(f"Section '{name}' in {path} must be a list of keywords")
        keywords[str(name)] = tuple(str(w) for w in words if str(w).strip())

    section_map = SectionMap(
        keywords=keywords,
        default_section=str(data.get("default_section", DEFAULT_FALLBACK_SECTION)),
        income_section=str(data.get("income_section", DEFAULT_INCOME_SECTION)),
    )
    log.info("Loaded %d sections from %s", len(keywords), path)
    return section_map
