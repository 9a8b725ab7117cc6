"""Period queries package."""

from finance_ledger.queries.summary import (
    CategoryTotal,
    Period,
    PeriodSummary,
    category_totals,
    entries_for_period,
    filter_entries,
    period_bounds,
    sort_entries_by_date,
    summarize,
)

__all__ = [
    "CategoryTotal",
    "Period",
    "PeriodSummary",
    "category_totals",
    "entries_for_period",
    "filter_entries",
    "period_bounds",
    "sort_entries_by_date",
    "summarize",
]
