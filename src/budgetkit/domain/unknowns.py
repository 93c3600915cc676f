"""Discovery of unclassified transactions."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from budgetkit.database.base import Database
from budgetkit.domain.entities import Direction, LedgerRow, Side, UnknownGroup

log = logging.getLogger(__name__)


@dataclass
class _Tally:
    description: str
    count: int = 0
    total_debit: Decimal = Decimal("0")
    total_credit: Decimal = Decimal("0")


def group_unknowns(rows: Iterable[LedgerRow]) -> list[UnknownGroup]:
    """Group unclassified sides by lower-cased description.

    Both sides of every row are inspected independently. A side counts when
    it has a description and its category is empty, Unknown or None. Only
    positive amounts feed the debit/credit sums, but every side counts as an
    occurrence.

    Returns:
        Groups sorted by occurrence count, most frequent first; ties keep the
        order in which groups were first seen
    """
    groups: dict[str, _Tally] = {}

    for row in rows:
        if row.is_empty:
            continue
        for which, side in row.sides():
            description = side.description.strip()
            if not description or not side.is_unresolved:
                continue

            key = description.lower()
            tally = groups.get(key)
            if tally is None:
                tally = groups[key] = _Tally(description=description)
            tally.count += 1
            if side.amount > 0:
                if which == Side.DEBIT:
                    tally.total_debit += side.amount
                else:
                    tally.total_credit += side.amount

    result = []
    for key, tally in groups.items():
        count = max(1, tally.count)
        average_debit = tally.total_debit / count
        average_credit = tally.total_credit / count
        result.append(
            UnknownGroup(
                key=key,
                description=tally.description,
                count=tally.count,
                average_debit=average_debit,
                average_credit=average_credit,
                direction=Direction.OUT if average_debit > average_credit else Direction.IN,
            )
        )

    # sorted() is stable, so equal counts keep encounter order
    return sorted(result, key=lambda g: -g.count)


class UnknownScanner:
    """Scans the ledger for transactions that still need a category."""

    def __init__(self, db: Database):
        """Initialize unknown scanner.

        Args:
            db: Database instance
        """
        self.db = db

    def scan(self) -> list[UnknownGroup]:
        """Group every unclassified ledger side. Nothing is modified."""
        groups = group_unknowns(self.db.list_ledger_rows())
        log.info("Found %d unknown transaction groups", len(groups))
        return groups
