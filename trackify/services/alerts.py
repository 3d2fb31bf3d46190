"""Budget alert aggregation.

Turns a `BudgetOverview` into a flat list of alert dicts with a consistent
shape so any presentation surface can render them uniformly.

Alert schema (dict):
  type: 'monthly' | 'category'
  category: str | None
  level: 'warning' | 'exceeded'
  message: human readable string

Thresholds live in budget_utils; this module only orchestrates and formats.
"""

from __future__ import annotations
from typing import Any, Dict, List

from trackify.models.currency import BASE_CURRENCY, Currency
from trackify.services.analytics_utils import BudgetOverview
from trackify.services.budget_utils import BudgetEvaluation
from trackify.services.currency import format_amount


def _alert(
    evaluation: BudgetEvaluation, currency: Currency
) -> Dict[str, Any] | None:
    if evaluation.status == "safe":
        return None
    scope = (
        "your monthly budget"
        if evaluation.category is None
        else f"your {evaluation.category} budget"
    )
    if evaluation.status == "exceeded":
        message = f"You've exceeded {scope} by {format_amount(evaluation.overage, currency)}."
    else:
        message = f"You've spent {evaluation.percentage:.1f}% of {scope}."
    return {
        "type": "monthly" if evaluation.category is None else "category",
        "category": evaluation.category,
        "level": evaluation.status,
        "message": message,
    }


def collect_alerts(
    overview: BudgetOverview, currency: Currency = BASE_CURRENCY
) -> List[Dict[str, Any]]:
    """Monthly alert first, then category alerts in budget order.

    `currency` must be the currency the overview was computed in; it is only
    used to format the overage.
    """
    alerts: List[Dict[str, Any]] = []
    for evaluation in [overview.monthly, *overview.categories]:
        alert = _alert(evaluation, currency)
        if alert is not None:
            alerts.append(alert)
    return alerts
