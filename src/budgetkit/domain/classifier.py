"""Transaction classification: exact rule lookup and heuristic guessing."""

import logging
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from budgetkit.database.base import Database
from budgetkit.domain.entities import (
    CategoryDefinition,
    Direction,
    Guess,
    LedgerRow,
    RuleMatch,
    Side,
    TransactionType,
)
from budgetkit.domain.rules import RuleStore, normalize_keyword
from budgetkit.domain.sections import SectionMap

log = logging.getLogger(__name__)

FULL_NAME_SCORE = 3
WORD_SCORE = 1
MIN_WORD_LENGTH = 4


def infer_direction(side: Side, amount: Decimal) -> Direction:
    """Derive money direction from the ledger side and the sign of the amount.

    A positive debit is money going out; a positive credit is money coming in.
    Zero and negative amounts flip the direction.
    """
    if side == Side.DEBIT:
        return Direction.OUT if amount > 0 else Direction.IN
    return Direction.IN if amount > 0 else Direction.OUT


def score_category(description: str, category: str, aliases: Iterable[str] = ()) -> int:
    """Keyword score of one category name against a lower-cased description.

    Aliases count like the full name, at most once.
    """
    name = category.lower()
    if not name:
        return 0
    score = FULL_NAME_SCORE if name in description else 0
    if not score and any(alias.lower() in description for alias in aliases if alias):
        score = FULL_NAME_SCORE
    for word in name.split(" "):
        if len(word) >= MIN_WORD_LENGTH and word in description:
            score += WORD_SCORE
    return score


class Classifier:
    """Resolves category and type for single transactions."""

    def __init__(self, rules: RuleStore, sections: Optional[SectionMap] = None):
        """Initialize classifier.

        Args:
            rules: Rule store used for exact lookups
            sections: Optional section table. When given, a category named
                like a section also matches that section's keywords when
                guessing; without it guessing scores category names only
        """
        self.rules = rules
        self.sections = sections

    def classify(
        self, description: str, amount: Decimal, direction: Direction | str
    ) -> RuleMatch:
        """Look up the saved rule for a transaction.

        The rule for the specific direction wins over the "any" rule. When no
        rule matches the caller keeps its current classification.

        Args:
            description: Transaction description, matched exactly after
                trimming and upper-casing
            amount: Transaction amount (not used for matching)
            direction: "in" or "out"

        Returns:
            RuleMatch with matched=False when no rule applies
        """
        keyword = normalize_keyword(description)
        if not keyword:
            return RuleMatch(matched=False)

        direction_value = direction.value if isinstance(direction, Direction) else str(direction)
        for candidate in (direction_value, Direction.ANY.value):
            rule = self.rules.get(keyword, candidate)
            if rule is not None:
                return RuleMatch(matched=True, category=rule.category, type=rule.type)
        return RuleMatch(matched=False)

    def guess(self, description: str, catalog: Sequence[CategoryDefinition]) -> Guess:
        """Suggest a category by keyword scoring against the catalog.

        The full category name appearing in the description scores 3 and each
        word of the name with 4+ letters appearing scores 1. The strictly
        highest score wins; ties keep the earlier catalog entry. With a section
        table, a category named after a section also scores 3 when one of
        that section's keywords appears. Nothing is written.
        """
        text = (description or "").lower()
        best: Optional[CategoryDefinition] = None
        best_score = 0

        for entry in catalog:
            score = score_category(text, entry.category, self._aliases(entry.category))
            if score > best_score:
                best_score = score
                best = entry

        if best is None:
            return Guess(
                category=TransactionType.UNKNOWN.value,
                type=TransactionType.UNKNOWN.value,
                confidence=0,
            )
        return Guess(
            category=best.category,
            type=best.type or TransactionType.UNKNOWN.value,
            confidence=best_score,
        )

    def _aliases(self, category: str) -> tuple[str, ...]:
        if self.sections is None:
            return ()
        target = category.strip().upper()
        for section, words in self.sections.keywords.items():
            if section.upper() == target:
                return words
        return ()

    def guess_many(
        self, descriptions: Iterable[str], catalog: Sequence[CategoryDefinition]
    ) -> list[Guess]:
        """Guess for each description, in order."""
        return [self.guess(description, catalog) for description in descriptions]

    def apply_rules(self, rows: Iterable[LedgerRow]) -> tuple[list[LedgerRow], int]:
        """Re-classify every side that has a description.

        Sides without a matching rule keep their current category and type.

        Returns:
            Tuple of (rows with updated classifications, number of sides updated)
        """
        updated_rows: list[LedgerRow] = []
        updated_sides = 0

        for row in rows:
            for which, side in row.sides():
                if not side.description:
                    continue
                direction = infer_direction(which, side.amount)
                match = self.classify(side.description, side.amount, direction)
                if not match.matched:
                    continue
                row = row.with_side(
                    which, side.with_classification(match.category or "", match.type or "")
                )
                updated_sides += 1
                log.debug("Row %s %s matched rule: %s", row.id, which.value, match.category)
            updated_rows.append(row)

        return updated_rows, updated_sides


class CategorizationService:
    """Applies the classifier to the whole ledger."""

    def __init__(self, db: Database, classifier: Optional[Classifier] = None):
        """Initialize categorization service.

        Args:
            db: Database instance
            classifier: Classifier to use; defaults to one over the database's
                property store
        """
        self.db = db
        self.classifier = classifier or Classifier(RuleStore(db.property_store()))

    def apply_rules_to_ledger(self) -> int:
        """Run every ledger side through the rules and write back the result.

        Returns:
            Number of sides that matched a rule
        """
        rows = self.db.list_ledger_rows()
        if not rows:
            return 0
        updated_rows, updated_sides = self.classifier.apply_rules(rows)
        self.db.write_classifications(updated_rows)
        log.info("Applied rules to %d ledger rows, %d sides matched", len(rows), updated_sides)
        return updated_sides
