"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from budgetkit.utils.amount_parser import parse_amount, parse_optional_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("$123.45", Decimal("123.45")),
        ("-123.45", Decimal("-123.45")),
        ("-$123.45", Decimal("-123.45")),
        ("1,234.56", Decimal("1234.56")),
        ("(123.45)", Decimal("-123.45")),
        (" 42 ", Decimal("42")),
    ],
)
def test_parse_amount_formats(text, expected):
    assert parse_amount(text) == expected


def test_parse_amount_accepts_numbers():
    assert parse_amount(10) == Decimal("10")
    assert parse_amount(Decimal("2.50")) == Decimal("2.50")


def test_parse_amount_invalid():
    with pytest.raises(ValueError):
        parse_amount("abc")
    with pytest.raises(ValueError):
        parse_amount("")
    with pytest.raises(ValueError):
        parse_amount("NaN")


def test_parse_optional_amount_blank_is_zero():
    assert parse_optional_amount(None) == Decimal("0")
    assert parse_optional_amount("   ") == Decimal("0")
    assert parse_optional_amount("7.10") == Decimal("7.10")
