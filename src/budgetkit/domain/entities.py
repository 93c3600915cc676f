"""Domain model entities for budgetkit.

These are pure data classes representing budgeting concepts, independent of
the storage schema. A ledger row carries two independent transaction sides
(debit and credit) that only share a row for layout purposes.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterator, Optional


class TransactionType(str, Enum):
    """Budgeting classification of a transaction side."""

    INCOME = "Income"
    NEED = "Need"
    WANT = "Want"
    SAVINGS = "Savings"
    DEBT = "Debt"
    UNKNOWN = "Unknown"
    NONE = "None"

    @classmethod
    def parse(cls, value: Optional[str]) -> "TransactionType":
        """Map free text to a type, case-insensitively. Anything else is UNKNOWN."""
        text = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        return cls.UNKNOWN

    @classmethod
    def is_valid(cls, value: Optional[str]) -> bool:
        text = (value or "").strip().lower()
        return any(member.value.lower() == text for member in cls)


class Direction(str, Enum):
    """Money flow direction used as a rule-matching dimension."""

    IN = "in"
    OUT = "out"
    ANY = "any"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Direction"]:
        text = (value or "").strip().lower()
        for member in cls:
            if member.value == text:
                return member
        return None


class Side(str, Enum):
    """Which half of a ledger row a transaction lives on."""

    DEBIT = "debit"
    CREDIT = "credit"


# Spending buckets that totals are broken down into
BUCKET_TYPES = (
    TransactionType.NEED,
    TransactionType.WANT,
    TransactionType.SAVINGS,
    TransactionType.DEBT,
)

# Category values that mean "not classified yet"
UNRESOLVED_CATEGORIES = frozenset({"", "unknown", "none"})


@dataclass(frozen=True)
class TransactionSide:
    """One side of a ledger row."""

    date: Optional[date] = None
    description: str = ""
    amount: Decimal = Decimal("0")
    category: str = ""
    type: str = ""

    @property
    def is_blank(self) -> bool:
        return not self.description and self.amount == 0 and self.date is None

    @property
    def is_unresolved(self) -> bool:
        """True when the category is empty, Unknown or None."""
        return self.category.strip().lower() in UNRESOLVED_CATEGORIES

    def with_classification(self, category: str, type: str) -> "TransactionSide":
        return replace(self, category=category, type=type)


@dataclass(frozen=True)
class LedgerRow:
    """Ledger row with a debit-oriented and a credit-oriented side."""

    id: int
    debit_side: TransactionSide = field(default_factory=TransactionSide)
    credit_side: TransactionSide = field(default_factory=TransactionSide)
    balance: Optional[Decimal] = None

    def sides(self) -> Iterator[tuple[Side, TransactionSide]]:
        yield Side.DEBIT, self.debit_side
        yield Side.CREDIT, self.credit_side

    def side(self, which: Side) -> TransactionSide:
        return self.debit_side if which == Side.DEBIT else self.credit_side

    def with_side(self, which: Side, side: TransactionSide) -> "LedgerRow":
        if which == Side.DEBIT:
            return replace(self, debit_side=side)
        return replace(self, credit_side=side)

    @property
    def is_empty(self) -> bool:
        return self.debit_side.is_blank and self.credit_side.is_blank


@dataclass(frozen=True)
class CategoryDefinition:
    """Category as declared in one of the settings tables."""

    category: str
    type: str
    table: str


@dataclass(frozen=True)
class Rule:
    """Saved keyword rule. Keyword and direction are stored upper-cased."""

    keyword: str
    direction: str
    category: str
    type: str

    @property
    def key(self) -> str:
        return f"{self.keyword}|{self.direction}"


@dataclass(frozen=True)
class RuleMatch:
    """Result of an exact rule lookup."""

    matched: bool
    category: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class Guess:
    """Heuristic category suggestion."""

    category: str
    type: str
    confidence: int


@dataclass(frozen=True)
class UnknownGroup:
    """Unclassified transactions sharing one lower-cased description."""

    key: str
    description: str
    count: int
    average_debit: Decimal
    average_credit: Decimal
    direction: Direction


@dataclass(frozen=True)
class PeriodWindow:
    """Inclusive date window."""

    start: date
    end: date

    @property
    def year(self) -> int:
        return self.start.year

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end


@dataclass(frozen=True)
class MonthTrend:
    """Income and spending for one calendar month."""

    month: int
    income: Decimal = Decimal("0")
    spending: Decimal = Decimal("0")


@dataclass(frozen=True)
class CategoryBreakdown:
    """In-window totals per normalized category name."""

    income: dict[str, Decimal] = field(default_factory=dict)
    savings: dict[str, Decimal] = field(default_factory=dict)
    expenses: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class AggregatedTotals:
    """Dashboard totals for one period window."""

    window: PeriodWindow
    income: Decimal
    spending: Decimal
    buckets: dict[str, Decimal]
    sections: dict[str, Decimal]
    trend: tuple[MonthTrend, ...]
    breakdown: CategoryBreakdown = field(default_factory=CategoryBreakdown)

    @property
    def net(self) -> Decimal:
        return self.income - self.spending


@dataclass(frozen=True)
class HealthReport:
    """Snapshot of what the workbook currently holds."""

    settings_tables: tuple[str, ...]
    categories: int
    ledger_rows: int
    rules: int
    unknown_groups: int
