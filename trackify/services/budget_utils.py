"""Budget status helpers.

Classifies a (spent, limit) pair into a tier and the numbers a progress bar
needs: a clamped percentage, the remaining headroom and the unclamped overage.
Stays framework-agnostic and free of I/O so the analytics layer, the alerts
service and any presentation code share one definition of "over budget".

A limit of zero (or below) means no limit is configured: the status is always
"safe" and the percentage 0, never "exceeded".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

BudgetTier = Literal["safe", "warning", "exceeded"]

WARNING_THRESHOLD_PCT = 80.0
EXCEEDED_THRESHOLD_PCT = 100.0


def _raw_percentage(spent: float, limit: float) -> float:
    return (spent / limit) * 100


def budget_percentage(spent: float, limit: float) -> float:
    if limit <= 0:
        return 0.0
    return min(_raw_percentage(spent, limit), 100.0)


def raw_overage(spent: float, limit: float) -> float:
    return max(spent - limit, 0.0)


def remaining_budget(spent: float, limit: float) -> float:
    return max(limit - spent, 0.0)


def budget_status(spent: float, limit: float) -> BudgetTier:
    if limit <= 0:
        return "safe"
    pct = _raw_percentage(spent, limit)
    if pct >= EXCEEDED_THRESHOLD_PCT:
        return "exceeded"
    if pct >= WARNING_THRESHOLD_PCT:
        return "warning"
    return "safe"


@dataclass(frozen=True)
class BudgetEvaluation:
    spent: float
    limit: float
    status: BudgetTier
    percentage: float
    remaining: float
    overage: float
    category: Optional[str] = None


def evaluate_budget(
    spent: float, limit: float, category: Optional[str] = None
) -> BudgetEvaluation:
    return BudgetEvaluation(
        spent=spent,
        limit=limit,
        status=budget_status(spent, limit),
        percentage=budget_percentage(spent, limit),
        remaining=remaining_budget(spent, limit),
        overage=raw_overage(spent, limit),
        category=category,
    )
