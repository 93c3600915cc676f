"""Date parsing and period resolution utilities."""

import calendar
import re
from datetime import date, datetime
from typing import Optional

from dateutil import parser as date_parser

from budgetkit.domain.entities import PeriodWindow

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Period label -> (first month, last month), 1-based
QUARTERS = {
    "q1": (1, 3),
    "q2": (4, 6),
    "q3": (7, 9),
    "q4": (10, 12),
    "first quarter": (1, 3),
    "second quarter": (4, 6),
    "third quarter": (7, 9),
    "fourth quarter": (10, 12),
}

ANNUAL = "annual"

_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})")


def parse_date(value) -> date:
    """Parse an imported date cell into a date object.

    Supports:
    - date and datetime objects (time of day is dropped)
    - ISO dates: "2024-01-15", "2024-01-15T08:30:00"
    - Day-first slash dates: "15/01/2024", read month-first when that is
      the only valid reading: "01/15/2024"
    - Anything else python-dateutil understands: "Jan 15, 2024"

    Args:
        value: Date cell value

    Returns:
        Date object

    Raises:
        ValueError: If the value is empty or cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value or "").strip()
    if not text:
        raise ValueError("Empty date string")

    match = _ISO_DATE.match(text)
    if match:
        year, month, day = (int(part) for part in match.groups())
        return date(year, month, day)

    match = _SLASH_DATE.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            # Not day-first (e.g. 01/15/2024); let dateutil read it month-first
            pass

    try:
        return date_parser.parse(text).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{text}': {e}")


def month_window(year: int, first_month: int, last_month: int) -> PeriodWindow:
    """Window from the first day of first_month to the last day of last_month."""
    last_day = calendar.monthrange(year, last_month)[1]
    return PeriodWindow(
        start=date(year, first_month, 1),
        end=date(year, last_month, last_day),
    )


def resolve_period(label: Optional[str], year: int) -> Optional[PeriodWindow]:
    """Resolve a period label and year into a concrete date window.

    Labels are matched case-insensitively:
    - "Annual" -> January 1 through December 31
    - "Q1".."Q4" or "First Quarter".."Fourth Quarter" -> the quarter's months
    - Full month names ("March") -> that calendar month

    Args:
        label: Period label chosen by the user
        year: Calendar year

    Returns:
        PeriodWindow, or None when the label is not recognized
    """
    text = " ".join((label or "").split()).lower()
    if not text:
        return None

    if text == ANNUAL:
        return month_window(year, 1, 12)

    if text in QUARTERS:
        first, last = QUARTERS[text]
        return month_window(year, first, last)

    for index, name in enumerate(MONTHS, start=1):
        if name.lower() == text:
            return month_window(year, index, index)

    return None


def period_labels() -> list[str]:
    """All labels accepted by resolve_period, in display order."""
    return ["Annual", "Q1", "Q2", "Q3", "Q4", *MONTHS]
