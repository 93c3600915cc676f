"""Tests for unknown transaction grouping."""

from datetime import date
from decimal import Decimal

from conftest import make_row, make_side
from budgetkit.domain.entities import Direction
from budgetkit.domain.unknowns import UnknownScanner, group_unknowns

DAY = date(2024, 1, 10)


def test_groups_repeated_descriptions():
    rows = [
        make_row(1, debit_side=make_side(DAY, "STARBUCKS #123", "4.50")),
        make_row(2, debit_side=make_side(DAY, "STARBUCKS #123", "5.25")),
    ]

    groups = group_unknowns(rows)

    assert len(groups) == 1
    group = groups[0]
    assert group.key == "starbucks #123"
    assert group.description == "STARBUCKS #123"
    assert group.count == 2
    assert group.average_debit == Decimal("4.875")
    assert group.average_credit == Decimal("0")
    assert group.direction == Direction.OUT


def test_grouping_ignores_case_and_keeps_first_description():
    rows = [
        make_row(1, debit_side=make_side(DAY, "Uber Trip", "10")),
        make_row(2, debit_side=make_side(DAY, "UBER TRIP ", "20")),
    ]

    groups = group_unknowns(rows)

    assert [(g.description, g.count) for g in groups] == [("Uber Trip", 2)]


def test_classified_sides_are_skipped():
    rows = [
        make_row(1, debit_side=make_side(DAY, "RENT", "1200", "Rent", "Need")),
        make_row(2, debit_side=make_side(DAY, "ATM", "40", "Unknown", "Unknown")),
        make_row(3, debit_side=make_side(DAY, "ATM", "60", "none", "None")),
        make_row(4, debit_side=make_side(DAY, "", "5")),
    ]

    groups = group_unknowns(rows)

    assert [(g.description, g.count) for g in groups] == [("ATM", 2)]
    assert groups[0].average_debit == Decimal("50")


def test_both_sides_of_a_row_are_inspected():
    rows = [
        make_row(
            1,
            debit_side=make_side(DAY, "TRANSFER", "100"),
            credit_side=make_side(DAY, "TRANSFER", "300"),
        )
    ]

    group = group_unknowns(rows)[0]

    assert group.count == 2
    assert group.average_debit == Decimal("50")
    assert group.average_credit == Decimal("150")
    assert group.direction == Direction.IN


def test_non_positive_amounts_count_but_do_not_sum():
    rows = [
        make_row(1, debit_side=make_side(DAY, "REVERSAL", "-20")),
        make_row(2, debit_side=make_side(DAY, "REVERSAL", "0")),
    ]

    group = group_unknowns(rows)[0]

    assert group.count == 2
    assert group.average_debit == Decimal("0")
    # Equal averages resolve to "in"
    assert group.direction == Direction.IN


def test_sorted_by_count_with_stable_ties():
    rows = [
        make_row(1, debit_side=make_side(DAY, "B", "1")),
        make_row(2, debit_side=make_side(DAY, "A", "1")),
        make_row(3, debit_side=make_side(DAY, "C", "1")),
        make_row(4, debit_side=make_side(DAY, "C", "1")),
    ]

    groups = group_unknowns(rows)

    assert [g.description for g in groups] == ["C", "B", "A"]


def test_empty_ledger():
    assert group_unknowns([]) == []
    assert group_unknowns([make_row(1)]) == []


def test_scanner_reads_ledger(temp_db, sample_ledger):
    groups = UnknownScanner(temp_db).scan()

    assert len(groups) == 1
    assert groups[0].description == "STARBUCKS #123"
    assert groups[0].direction == Direction.OUT
    # Scanning does not modify the ledger
    assert temp_db.list_ledger_rows() == sample_ledger
