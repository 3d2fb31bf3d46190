"""Grouping helpers over the full expense record set.

Scopes implemented:
    - Category totals (first-appearance order) and percent breakdown
    - Trailing time buckets (monthly / daily trend) with mandatory zero-fill
    - Calendar filters (month, single day) shared by the statistics layer
    - Per-day groups with day totals and a category filter for record lists

Design notes:
    Every function is a pure function of (records, as_of). Callers pass the
    whole record set on every read; nothing is cached between calls.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Literal, Optional, Sequence, Tuple, Union

from trackify.models.expense import ExpenseRecord

Granularity = Literal["month", "day"]
BucketKey = Union[Tuple[int, int], date]


def total_spent(records: Iterable[ExpenseRecord]) -> float:
    return sum((r.amount for r in records), 0.0)


def records_in_month(
    records: Iterable[ExpenseRecord], year: int, month: int
) -> List[ExpenseRecord]:
    return [r for r in records if r.date.year == year and r.date.month == month]


def records_on(records: Iterable[ExpenseRecord], day: date) -> List[ExpenseRecord]:
    return [r for r in records if r.date == day]


def previous_month(year: int, month: int) -> Tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


# ---------------- Category totals -----------------
def category_totals(records: Iterable[ExpenseRecord]) -> Dict[str, float]:
    """Sum amounts per exact category label, keyed in order of first appearance."""
    totals: Dict[str, float] = {}
    for r in records:
        totals[r.category] = totals.get(r.category, 0.0) + r.amount
    return totals


@dataclass(frozen=True)
class CategoryBreakdownItem:
    category: str
    total: float
    percent: float


def category_breakdown(
    records: Sequence[ExpenseRecord],
) -> List[CategoryBreakdownItem]:
    """Category totals with each category's share of the grand total.

    Shares are 0 when nothing has been spent, so an empty or all-zero record
    set never divides by zero.
    """
    totals = category_totals(records)
    grand = sum(totals.values())
    return [
        CategoryBreakdownItem(
            category=category,
            total=total,
            percent=(total / grand * 100) if grand > 0 else 0.0,
        )
        for category, total in totals.items()
    ]


# ---------------- Trailing buckets -----------------
@dataclass(frozen=True)
class TrendPoint:
    key: str
    label: str
    total: float


def _month_keys(as_of: date, count: int) -> List[Tuple[int, int]]:
    keys = []
    year, month = as_of.year, as_of.month
    for _ in range(count):
        keys.append((year, month))
        year, month = previous_month(year, month)
    keys.reverse()
    return keys


def _day_keys(as_of: date, count: int) -> List[date]:
    return [as_of - timedelta(days=offset) for offset in range(count - 1, -1, -1)]


def _record_key(record: ExpenseRecord, granularity: Granularity) -> BucketKey:
    if granularity == "month":
        return (record.date.year, record.date.month)
    return record.date


def _key_text(key: BucketKey) -> str:
    if isinstance(key, date):
        return key.isoformat()
    year, month = key
    return f"{year:04d}-{month:02d}"


def _key_label(key: BucketKey) -> str:
    if isinstance(key, date):
        return f"{calendar.month_abbr[key.month]} {key.day}"
    year, month = key
    return f"{calendar.month_abbr[month]} {year}"


def trailing_buckets(
    records: Iterable[ExpenseRecord],
    as_of: date,
    granularity: Granularity,
    count: int,
) -> List[TrendPoint]:
    """Return `count` chronological buckets ending with the period containing `as_of`.

    Every generated bucket is present even when no record falls in it (total
    0). Records outside the window are ignored here; they still count toward
    category and overall totals elsewhere.
    """
    if granularity == "month":
        keys: List[BucketKey] = list(_month_keys(as_of, max(count, 0)))
    elif granularity == "day":
        keys = list(_day_keys(as_of, max(count, 0)))
    else:
        raise ValueError(f"Unsupported granularity '{granularity}'")
    if not keys:
        return []

    totals: Dict[BucketKey, float] = {k: 0.0 for k in keys}
    for r in records:
        k = _record_key(r, granularity)
        if k in totals:
            totals[k] += r.amount

    return [
        TrendPoint(key=_key_text(k), label=_key_label(k), total=totals[k])
        for k in keys
    ]


def monthly_trend(
    records: Iterable[ExpenseRecord], as_of: date, months: int = 6
) -> List[TrendPoint]:
    return trailing_buckets(records, as_of, "month", months)


def daily_trend(
    records: Iterable[ExpenseRecord], as_of: date, days: int = 30
) -> List[TrendPoint]:
    return trailing_buckets(records, as_of, "day", days)


# ---------------- Day grouping -----------------
def categories_present(records: Iterable[ExpenseRecord]) -> List[str]:
    """Distinct category labels in order of first appearance (filter options)."""
    return list(dict.fromkeys(r.category for r in records))


@dataclass(frozen=True)
class DayGroup:
    date: date
    records: List[ExpenseRecord]
    total: float


def group_by_date(
    records: Iterable[ExpenseRecord], category: Optional[str] = None
) -> List[DayGroup]:
    """Group records by calendar date, newest date first.

    `category` restricts the groups to that exact label; None means all
    categories. Records keep their incoming order inside a group.
    """
    groups: Dict[date, List[ExpenseRecord]] = {}
    for r in records:
        if category is not None and r.category != category:
            continue
        groups.setdefault(r.date, []).append(r)
    return [
        DayGroup(date=day, records=groups[day], total=total_spent(groups[day]))
        for day in sorted(groups, reverse=True)
    ]
