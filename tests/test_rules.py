"""Tests for the keyword rule store."""

import json

import pytest

from budgetkit.domain.entities import Rule
from budgetkit.domain.errors import ValidationError
from budgetkit.domain.rules import RuleStore, normalize_keyword, rule_key, split_key


def test_normalize_keyword():
    assert normalize_keyword("  starbucks\u00a0#123 ") == "STARBUCKS #123"
    assert normalize_keyword(None) == ""


def test_rule_key_and_split():
    assert rule_key(" uber ", "out") == "UBER|OUT"
    assert split_key("UBER|OUT") == ("UBER", "OUT")
    assert split_key("A|B|ANY") == ("A|B", "ANY")
    assert split_key("IMPORT_PREFS") is None
    assert split_key("|ANY") is None


def test_save_stores_json_under_composite_key(rule_store, memory_store):
    rule = rule_store.save("Starbucks #123", "Restaurants", "Want")

    assert rule == Rule("STARBUCKS #123", "ANY", "Restaurants", "Want")
    stored = json.loads(memory_store.get("STARBUCKS #123|ANY"))
    assert stored == {"category": "Restaurants", "type": "Want"}


def test_save_with_direction(rule_store):
    rule = rule_store.save("payroll", "Salary", "Income", direction="in")

    assert rule.key == "PAYROLL|IN"
    assert rule_store.get("Payroll", "in") == rule
    assert rule_store.get("Payroll", "any") is None


def test_save_is_idempotent(rule_store):
    rule_store.save("UBER", "Transit", "Need")
    rule_store.save("uber", "Transit", "Need")

    assert len(rule_store.get_all()) == 1


def test_save_overwrites(rule_store):
    rule_store.save("UBER", "Transit", "Need")
    rule_store.save("UBER", "Restaurants", "Want")

    assert rule_store.get("UBER", "any").category == "Restaurants"


def test_save_canonicalizes_type(rule_store):
    assert rule_store.save("GYM", "Gym", "want").type == "Want"


@pytest.mark.parametrize("keyword", ["", "   ", None])
def test_save_requires_keyword(rule_store, keyword):
    with pytest.raises(ValidationError, match="Keyword required"):
        rule_store.save(keyword, "Rent", "Need")


def test_save_rejects_bad_direction_and_type(rule_store):
    with pytest.raises(ValidationError, match="Invalid direction"):
        rule_store.save("RENT", "Rent", "Need", direction="sideways")
    with pytest.raises(ValidationError, match="Invalid type"):
        rule_store.save("RENT", "Rent", "Luxury")


def test_get_all_sorted_and_skips_foreign_keys(rule_store, memory_store):
    memory_store.set("IMPORT_PREFS", "{}")
    rule_store.save("zoo", "Entertainment", "Want", direction="out")
    rule_store.save("Apple", "Shopping", "Want", direction="out")
    rule_store.save("apple", "Shopping", "Want", direction="any")

    keys = [rule.key for rule in rule_store.get_all()]

    assert keys == ["APPLE|ANY", "APPLE|OUT", "ZOO|OUT"]


def test_corrupt_rule_is_skipped(rule_store, memory_store):
    rule_store.save("RENT", "Rent", "Need")
    memory_store.set("BROKEN|ANY", "{not json")
    memory_store.set("LIST|ANY", "[1, 2]")

    assert [rule.keyword for rule in rule_store.get_all()] == ["RENT"]
    assert rule_store.get("BROKEN", "any") is None


def test_delete_specific(rule_store):
    rule_store.save("RENT", "Rent", "Need")
    rule_store.save("UBER", "Transit", "Need", direction="out")

    removed = rule_store.delete_specific(["uber|out", "MISSING|ANY", "garbage"])

    assert removed == 1
    assert [rule.key for rule in rule_store.get_all()] == ["RENT|ANY"]


def test_delete_all_keeps_other_properties(rule_store, memory_store):
    memory_store.set("IMPORT_PREFS", "{}")
    rule_store.save("RENT", "Rent", "Need")
    rule_store.save("UBER", "Transit", "Need")

    assert rule_store.delete_all() == 2
    assert rule_store.get_all() == []
    assert memory_store.get("IMPORT_PREFS") == "{}"


def test_rename_category(rule_store):
    rule_store.save("RENT", "Rent", "Need")
    rule_store.save("LANDLORD", "rent", "Need", direction="out")
    rule_store.save("UBER", "Transit", "Need")

    updated = rule_store.rename_category("RENT", "Housing", "Need")

    assert updated == 2
    assert rule_store.get("LANDLORD", "out").category == "Housing"
    assert rule_store.get("UBER", "any").category == "Transit"


def test_rules_persist_in_database(temp_db):
    RuleStore(temp_db.property_store()).save("RENT", "Rent", "Need")

    store = RuleStore(temp_db.property_store())
    assert store.get("rent", "any") == Rule("RENT", "ANY", "Rent", "Need")
