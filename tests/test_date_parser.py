"""Tests for date parsing and period resolution."""

from datetime import date, datetime

import pytest

from budgetkit.domain.entities import PeriodWindow
from budgetkit.utils.date_parser import (
    month_window,
    parse_date,
    period_labels,
    resolve_period,
)


def test_parse_date_iso():
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("2024-01-15T08:30:00") == date(2024, 1, 15)


def test_parse_date_day_first_slash():
    assert parse_date("15/01/2024") == date(2024, 1, 15)
    assert parse_date("3/2/2024") == date(2024, 2, 3)


def test_parse_date_natural_language():
    assert parse_date("Jan 15, 2024") == date(2024, 1, 15)


def test_parse_date_passes_through_date_objects():
    assert parse_date(date(2024, 5, 1)) == date(2024, 5, 1)
    assert parse_date(datetime(2024, 5, 1, 13, 45)) == date(2024, 5, 1)


def test_parse_date_invalid():
    with pytest.raises(ValueError):
        parse_date("not a date")
    with pytest.raises(ValueError):
        parse_date("")
    with pytest.raises(ValueError):
        parse_date(None)


def test_resolve_quarter():
    window = resolve_period("Q2", 2024)

    assert window == PeriodWindow(start=date(2024, 4, 1), end=date(2024, 6, 30))


def test_resolve_quarter_long_names():
    assert resolve_period("First Quarter", 2024) == resolve_period("Q1", 2024)
    assert resolve_period("Fourth Quarter", 2024).end == date(2024, 12, 31)


def test_resolve_month_uses_last_day_of_month():
    assert resolve_period("February", 2023) == PeriodWindow(
        start=date(2023, 2, 1), end=date(2023, 2, 28)
    )
    assert resolve_period("February", 2024).end == date(2024, 2, 29)
    assert resolve_period("April", 2024).end == date(2024, 4, 30)


def test_resolve_annual():
    window = resolve_period("Annual", 2022)

    assert window.start == date(2022, 1, 1)
    assert window.end == date(2022, 12, 31)
    assert window.year == 2022


def test_resolve_is_case_and_whitespace_insensitive():
    assert resolve_period("  q3 ", 2024) == resolve_period("Q3", 2024)
    assert resolve_period("MARCH", 2024) == resolve_period("March", 2024)
    assert resolve_period("second   quarter", 2024) == resolve_period("Q2", 2024)


@pytest.mark.parametrize("label", ["Bogus", "", None, "Q5", "Feb", "Semester"])
def test_resolve_unknown_label(label):
    assert resolve_period(label, 2024) is None


def test_month_window_spans_months():
    window = month_window(2024, 7, 9)

    assert window.start == date(2024, 7, 1)
    assert window.end == date(2024, 9, 30)
    assert window.contains(date(2024, 8, 15))
    assert not window.contains(date(2024, 10, 1))


def test_period_labels_all_resolve():
    labels = period_labels()

    assert labels[0] == "Annual"
    assert "December" in labels
    for label in labels:
        assert resolve_period(label, 2024) is not None


def test_parse_date_month_first_when_day_first_is_impossible():
    assert parse_date("01/15/2024") == date(2024, 1, 15)
    assert parse_date("12/31/2023") == date(2023, 12, 31)
    # Both readings valid: day-first wins
    assert parse_date("02/03/2024") == date(2024, 3, 2)


def test_parse_date_impossible_slash_date():
    with pytest.raises(ValueError):
        parse_date("31/31/2024")
