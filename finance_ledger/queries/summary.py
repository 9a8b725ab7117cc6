"""
Period Queries

DESIGN DECISION: Period views are computed, never stored. The ledger
document keeps entries in insertion order; everything a screen shows
(the entries of this month sorted by date, income/expense totals, the
balance) is derived here from a document snapshot.

All functions are pure and deterministic. Dates are compared as
zero-padded YYYY-MM-DD strings, which sort the same as the dates.
"""

import calendar
from collections.abc import Iterable
from datetime import date, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from finance_ledger.models.ledger import CategoryType, Entry, FinanceData, normalize_date


class Period(str, Enum):
    """Time ranges a ledger view can be narrowed to."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class PeriodSummary(BaseModel):
    """Totals over a set of entries."""

    income: float = 0.0
    expense: float = 0.0
    balance: float = Field(
        default=0.0,
        description="income - expense"
    )
    count: int = Field(default=0, ge=0)


class CategoryTotal(BaseModel):
    """Sum of the entries tagged with one category."""

    category_id: str
    name: Optional[str] = Field(
        default=None,
        description="None when the category no longer exists"
    )
    type: CategoryType
    total: float
    count: int = Field(ge=0)


def period_bounds(
    period: Period,
    anchor: date,
) -> tuple[Optional[date], Optional[date]]:
    """
    Inclusive first and last day of the period containing anchor.

    Weeks start on Monday. Period.ALL has no bounds.
    """
    if period == Period.DAY:
        return anchor, anchor
    if period == Period.WEEK:
        start = anchor - timedelta(days=anchor.weekday())
        return start, start + timedelta(days=6)
    if period == Period.MONTH:
        last_day = calendar.monthrange(anchor.year, anchor.month)[1]
        return anchor.replace(day=1), anchor.replace(day=last_day)
    if period == Period.YEAR:
        return date(anchor.year, 1, 1), date(anchor.year, 12, 31)
    return None, None


def filter_entries(
    entries: Iterable[Entry],
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> list[Entry]:
    """Entries dated within [date_from, date_to]; a missing bound is open."""
    low = normalize_date(date_from) if date_from is not None else None
    high = normalize_date(date_to) if date_to is not None else None

    selected = []
    for entry in entries:
        if low is not None and entry.date < low:
            continue
        if high is not None and entry.date > high:
            continue
        selected.append(entry)
    return selected


def entries_for_period(
    data: FinanceData,
    period: Period,
    anchor: date,
) -> list[Entry]:
    """Entries of the period containing anchor, newest date first."""
    date_from, date_to = period_bounds(period, anchor)
    return sort_entries_by_date(filter_entries(data.entries, date_from, date_to))


def sort_entries_by_date(entries: Iterable[Entry]) -> list[Entry]:
    """
    Display order: newest date first.

    The sort is stable, so entries on the same date keep their insertion
    order (most recently added first).
    """
    return sorted(entries, key=lambda entry: entry.date, reverse=True)


def summarize(entries: Iterable[Entry]) -> PeriodSummary:
    """
    Income and expense totals and the balance between them.

    Uses each entry's own type, not its category's current type.
    """
    income = 0.0
    expense = 0.0
    count = 0
    for entry in entries:
        count += 1
        if entry.type == CategoryType.INCOME:
            income += entry.amount
        else:
            expense += entry.amount

    return PeriodSummary(
        income=income,
        expense=expense,
        balance=income - expense,
        count=count,
    )


def category_totals(
    data: FinanceData,
    entries: Optional[Iterable[Entry]] = None,
) -> list[CategoryTotal]:
    """
    Per-category sums over entries (all of the document's by default).

    Results follow category order; categories without entries are left
    out. Entries whose category is gone come last, grouped by id.
    """
    if entries is None:
        entries = data.entries

    totals: dict[str, float] = {}
    counts: dict[str, int] = {}
    orphan_types: dict[str, CategoryType] = {}
    for entry in entries:
        totals[entry.category_id] = totals.get(entry.category_id, 0.0) + entry.amount
        counts[entry.category_id] = counts.get(entry.category_id, 0) + 1
        orphan_types.setdefault(entry.category_id, entry.type)

    results = []
    known_ids = set()
    for category in data.categories:
        known_ids.add(category.id)
        if category.id not in totals:
            continue
        results.append(CategoryTotal(
            category_id=category.id,
            name=category.name,
            type=category.type,
            total=totals[category.id],
            count=counts[category.id],
        ))

    for category_id, total in totals.items():
        if category_id in known_ids:
            continue
        results.append(CategoryTotal(
            category_id=category_id,
            name=None,
            type=orphan_types[category_id],
            total=total,
            count=counts[category_id],
        ))

    return results
