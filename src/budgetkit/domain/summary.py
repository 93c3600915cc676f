"""Period aggregation of the ledger into dashboard totals."""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from budgetkit.database.base import Database
from budgetkit.domain.entities import (
    BUCKET_TYPES,
    AggregatedTotals,
    CategoryBreakdown,
    LedgerRow,
    MonthTrend,
    PeriodWindow,
    TransactionType,
)
from budgetkit.domain.sections import SectionMap
from budgetkit.utils.date_parser import resolve_period

log = logging.getLogger(__name__)

ZERO = Decimal("0")


def _add(totals: dict[str, Decimal], key: str, amount: Decimal) -> None:
    totals[key] = totals.get(key, ZERO) + amount


class AggregationEngine:
    """Turns ledger rows into income, spending, bucket, section and trend totals."""

    def __init__(self, sections: Optional[SectionMap] = None):
        """Initialize aggregation engine.

        Args:
            sections: Section table; defaults to the built-in one
        """
        self.sections = sections or SectionMap.default()

    def aggregate(self, rows: Iterable[LedgerRow], window: PeriodWindow) -> AggregatedTotals:
        """Aggregate both sides of every row in a single pass.

        Sides without a description, with a zero amount or without a date are
        ignored. The 12-month trend covers the whole year of the window no
        matter which part of the year the window spans; every other total
        only counts sides dated inside the window.

        Args:
            rows: Ledger rows
            window: Inclusive period window

        Returns:
            AggregatedTotals for the window
        """
        income = ZERO
        spending = ZERO
        buckets = {t.value: ZERO for t in BUCKET_TYPES}
        sections = {name: ZERO for name in self.sections.section_names}
        trend_income = [ZERO] * 12
        trend_spending = [ZERO] * 12
        breakdown = CategoryBreakdown()

        for row in rows:
            for _, side in row.sides():
                if not side.description or side.amount == 0 or side.date is None:
                    continue

                kind = TransactionType.parse(side.type)
                is_income = kind == TransactionType.INCOME

                if side.date.year == window.year:
                    month = side.date.month - 1
                    if is_income:
                        trend_income[month] += side.amount
                    else:
                        trend_spending[month] += side.amount

                if not window.contains(side.date):
                    continue

                if is_income:
                    income += side.amount
                else:
                    spending += side.amount
                if kind in BUCKET_TYPES:
                    buckets[kind.value] += side.amount
                _add(sections, self.sections.resolve(side.category, side.type), side.amount)

                category = side.category.strip().upper()
                if category:
                    if is_income:
                        _add(breakdown.income, category, side.amount)
                    elif kind == TransactionType.SAVINGS:
                        _add(breakdown.savings, category, side.amount)
                    else:
                        _add(breakdown.expenses, category, side.amount)

        trend = tuple(
            MonthTrend(month=index + 1, income=trend_income[index], spending=trend_spending[index])
            for index in range(12)
        )
        return AggregatedTotals(
            window=window,
            income=income,
            spending=spending,
            buckets=buckets,
            sections=sections,
            trend=trend,
            breakdown=breakdown,
        )


class SummaryService:
    """Service for building dashboard totals from the stored ledger."""

    def __init__(self, db: Database, sections: Optional[SectionMap] = None):
        """Initialize summary service.

        Args:
            db: Database instance
            sections: Section table; defaults to the built-in one
        """
        self.db = db
        self.engine = AggregationEngine(sections)

    def compute(self, window: PeriodWindow) -> AggregatedTotals:
        """Aggregate the full ledger for a window."""
        totals = self.engine.aggregate(self.db.list_ledger_rows(), window)
        log.info(
            "Aggregated %s..%s: income=%s spending=%s",
            window.start,
            window.end,
            totals.income,
            totals.spending,
        )
        return totals

    def refresh(self, period_label: str, year: int) -> Optional[AggregatedTotals]:
        """Resolve a period label and aggregate it.

        Returns:
            AggregatedTotals, or None when the label does not resolve
        """
        window = resolve_period(period_label, year)
        if window is None:
            log.warning("Period '%s' for %s did not resolve; nothing computed", period_label, year)
            return None
        return self.compute(window)
