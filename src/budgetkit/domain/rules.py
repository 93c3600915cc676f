"""Keyword rule store.

Rules live in a property store under keys ``KEYWORD|DIRECTION`` with a JSON
``{"category": ..., "type": ...}`` value. Keys without a ``|`` belong to
other features and are ignored.
"""

import json
import logging
from typing import Iterable, Optional

from budgetkit.database.base import PropertyStore
from budgetkit.domain.entities import Direction, Rule, TransactionType
from budgetkit.domain.errors import (
    ValidationError,
    invalid_direction,
    invalid_type,
    rule_keyword_required,
)

log = logging.getLogger(__name__)

KEY_SEPARATOR = "|"


def normalize_keyword(value: Optional[str]) -> str:
    """Upper-cased, trimmed keyword with non-breaking spaces flattened."""
    return str(value or "").replace("\u00a0", " ").strip().upper()


def rule_key(keyword: str, direction: str) -> str:
    """Composite store key for a keyword and direction."""
    return f"{normalize_keyword(keyword)}{KEY_SEPARATOR}{str(direction).strip().upper()}"


def split_key(key: str) -> Optional[tuple[str, str]]:
    """Split a store key into (keyword, direction), or None for foreign keys."""
    keyword, separator, direction = key.rpartition(KEY_SEPARATOR)
    if not separator or not keyword or not direction:
        return None
    return keyword, direction


class RuleStore:
    """Persists keyword -> category/type rules keyed by (keyword, direction)."""

    def __init__(self, store: PropertyStore):
        """Initialize rule store.

        Args:
            store: Property store the rules are kept in
        """
        self.store = store

    def save(
        self,
        keyword: str,
        category: str,
        type: str,
        direction: Optional[str] = None,
    ) -> Rule:
        """Create or overwrite the rule for (keyword, direction).

        Args:
            keyword: Transaction description to match exactly
            category: Category to assign
            type: Type to assign
            direction: "in", "out" or "any" (default)

        Returns:
            The stored rule

        Raises:
            ValidationError: If keyword is blank, or direction or type is invalid
        """
        if not normalize_keyword(keyword):
            raise ValidationError(rule_keyword_required())
        parsed = Direction.parse(direction or Direction.ANY.value)
        if parsed is None:
            raise ValidationError(invalid_direction(str(direction)))
        if not TransactionType.is_valid(type):
            raise ValidationError(invalid_type(str(type)))
        type = TransactionType.parse(type).value

        key = rule_key(keyword, parsed.value)
        self.store.set(key, json.dumps({"category": category, "type": type}))
        log.debug("Saved rule %s -> %s / %s", key, category, type)

        stored_keyword, stored_direction = split_key(key)
        return Rule(
            keyword=stored_keyword,
            direction=stored_direction,
            category=category,
            type=type,
        )

    def get(self, keyword: str, direction: str) -> Optional[Rule]:
        """Exact lookup of one rule. Unreadable payloads count as missing."""
        key = rule_key(keyword, direction)
        return self._decode(key, self.store.get(key))

    def get_all(self) -> list[Rule]:
        """All rules sorted by keyword, then direction, case-insensitively."""
        rules = []
        for key, value in self.store.list().items():
            rule = self._decode(key, value)
            if rule is not None:
                rules.append(rule)
        rules.sort(key=lambda r: (r.keyword.upper(), r.direction.upper()))
        return rules

    def delete_specific(self, keys: Iterable[str]) -> int:
        """Delete the given ``KEYWORD|DIRECTION`` keys. Returns number removed."""
        removed = 0
        for key in keys:
            parts = split_key(str(key or ""))
            if parts is None:
                continue
            if self.store.delete(rule_key(*parts)):
                removed += 1
        log.info("Deleted %d rules", removed)
        return removed

    def delete_all(self) -> int:
        """Delete every rule. Returns number removed."""
        removed = 0
        for key in list(self.store.list()):
            if split_key(key) is not None and self.store.delete(key):
                removed += 1
        log.info("Deleted all %d rules", removed)
        return removed

    def rename_category(
        self, old_name: str, new_name: str, new_type: Optional[str] = None
    ) -> int:
        """Point rules assigning old_name (case-insensitive) at new_name."""
        target = old_name.strip().upper()
        updated = 0
        for rule in self.get_all():
            if rule.category.strip().upper() != target:
                continue
            self.store.set(
                rule.key,
                json.dumps({"category": new_name, "type": new_type or rule.type}),
            )
            updated += 1
        return updated

    def _decode(self, key: str, value: Optional[str]) -> Optional[Rule]:
        parts = split_key(key)
        if parts is None or value is None:
            return None
        try:
            payload = json.loads(value)
        except (TypeError, ValueError):
            log.warning("Ignoring unreadable rule payload for %s", key)
            return None
        if not isinstance(payload, dict):
            log.warning("Ignoring unreadable rule payload for %s", key)
            return None
        return Rule(
            keyword=parts[0],
            direction=parts[1],
            category=str(payload.get("category") or ""),
            type=str(payload.get("type") or ""),
        )
