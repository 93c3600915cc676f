"""Utility functions for budgetkit."""

from budgetkit.utils.date_parser import parse_date, resolve_period
from budgetkit.utils.amount_parser import parse_amount

__all__ = ["parse_date", "resolve_period", "parse_amount"]
