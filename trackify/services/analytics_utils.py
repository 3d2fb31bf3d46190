from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import List, Sequence

from trackify.models.budget import Budget
from trackify.models.currency import BASE_CURRENCY, Currency
from trackify.models.expense import ExpenseRecord
from trackify.services.aggregation import (
    CategoryBreakdownItem,
    TrendPoint,
    category_breakdown,
    category_totals,
    daily_trend,
    monthly_trend,
    previous_month,
    records_in_month,
    records_on,
    total_spent,
)
from trackify.services.budget_utils import BudgetEvaluation, evaluate_budget
from trackify.services.currency import convert_amount

"""Derived statistics for the overview and budget screens.

Scopes implemented:
    - Expense summary (today, this month, last month, change %, daily average,
      top categories, expense count)
    - Budget overview (overall + per-category evaluation)
    - Dashboard bundle (summary, overview, breakdown, trends)

Design notes:
    "Current month" is the calendar month containing `as_of`, "last month"
    the calendar month before it. All arithmetic runs in base-currency units;
    monetary outputs are rescaled into the requested display currency at the
    end, so percentages and statuses never depend on the display currency.
"""

TOP_CATEGORY_LIMIT = 3


# ---------------- Expense Summary -----------------
@dataclass(frozen=True)
class TopCategory:
    category: str
    total: float
    percent: float


@dataclass(frozen=True)
class ExpenseSummary:
    currency: str
    today_total: float
    total_current_month: float
    total_last_month: float
    monthly_change_percent: float
    average_daily_spend: float
    top_categories: List[TopCategory]
    expense_count: int


def monthly_change_percent(current: float, last: float) -> float:
    """Month-over-month change; 0 when there is nothing to compare against."""
    if last == 0:
        return 0.0
    return ((current - last) / last) * 100


def top_categories(
    records: Sequence[ExpenseRecord], limit: int = TOP_CATEGORY_LIMIT
) -> List[TopCategory]:
    totals = category_totals(records)
    grand = sum(totals.values())
    # sorted() is stable: equal totals keep first-appearance order.
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)[:limit]
    return [
        TopCategory(
            category=category,
            total=total,
            percent=(total / grand * 100) if grand > 0 else 0.0,
        )
        for category, total in ranked
    ]


def compute_expense_summary(
    records: Sequence[ExpenseRecord],
    as_of: date,
    currency: Currency = BASE_CURRENCY,
) -> ExpenseSummary:
    current = records_in_month(records, as_of.year, as_of.month)
    last = records_in_month(records, *previous_month(as_of.year, as_of.month))

    total_current = total_spent(current)
    total_last = total_spent(last)
    # as_of.day >= 1, so the elapsed-days divisor is never zero.
    avg_daily = total_current / as_of.day

    def conv(amount: float) -> float:
        return convert_amount(amount, currency)

    return ExpenseSummary(
        currency=currency.code,
        today_total=conv(total_spent(records_on(records, as_of))),
        total_current_month=conv(total_current),
        total_last_month=conv(total_last),
        monthly_change_percent=monthly_change_percent(total_current, total_last),
        average_daily_spend=conv(avg_daily),
        top_categories=[
            replace(tc, total=conv(tc.total)) for tc in top_categories(current)
        ],
        expense_count=len(current),
    )


# ---------------- Budget Overview -----------------
@dataclass(frozen=True)
class BudgetOverview:
    currency: str
    monthly: BudgetEvaluation
    categories: List[BudgetEvaluation]


def _in_currency(evaluation: BudgetEvaluation, currency: Currency) -> BudgetEvaluation:
    if currency.rate == 1:
        return evaluation
    return replace(
        evaluation,
        spent=convert_amount(evaluation.spent, currency),
        limit=convert_amount(evaluation.limit, currency),
        remaining=convert_amount(evaluation.remaining, currency),
        overage=convert_amount(evaluation.overage, currency),
    )


def compute_budget_overview(
    records: Sequence[ExpenseRecord],
    budget: Budget,
    as_of: date,
    currency: Currency = BASE_CURRENCY,
) -> BudgetOverview:
    """Evaluate this month's spending against the monthly and category limits.

    Categories without a configured limit (absent, or a limit of 0) are left
    out of the per-category list rather than shown against an implicit
    infinite limit.
    """
    current = records_in_month(records, as_of.year, as_of.month)
    spent_by_category = category_totals(current)

    monthly = evaluate_budget(total_spent(current), budget.monthly_limit)
    per_category = [
        evaluate_budget(spent_by_category.get(category, 0.0), limit, category)
        for category, limit in budget.category_limits.items()
        if limit > 0
    ]
    return BudgetOverview(
        currency=currency.code,
        monthly=_in_currency(monthly, currency),
        categories=[_in_currency(e, currency) for e in per_category],
    )


# ---------------- Dashboard -----------------
@dataclass(frozen=True)
class Dashboard:
    summary: ExpenseSummary
    budget: BudgetOverview
    total_spent: float
    breakdown: List[CategoryBreakdownItem]
    monthly_trend: List[TrendPoint]
    daily_trend: List[TrendPoint]


def compute_dashboard(
    records: Sequence[ExpenseRecord],
    budget: Budget,
    as_of: date,
    currency: Currency = BASE_CURRENCY,
    months: int = 6,
    days: int = 30,
) -> Dashboard:
    def conv(amount: float) -> float:
        return convert_amount(amount, currency)

    return Dashboard(
        summary=compute_expense_summary(records, as_of, currency),
        budget=compute_budget_overview(records, budget, as_of, currency),
        total_spent=conv(total_spent(records)),
        breakdown=[
            replace(item, total=conv(item.total))
            for item in category_breakdown(records)
        ],
        monthly_trend=[
            replace(p, total=conv(p.total)) for p in monthly_trend(records, as_of, months)
        ],
        daily_trend=[
            replace(p, total=conv(p.total)) for p in daily_trend(records, as_of, days)
        ],
    )
