"""Tracker facade used by presentation code.

Wires the record store, the settings store and the selected currency into the
pure analytics functions. This is the only place that reads the clock: every
read accepts an explicit `as_of` and falls back to today when omitted.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Dict, List, Optional

from trackify.core.config import Settings, get_settings
from trackify.core.errors import ExpenseNotFoundError, log_and_raise
from trackify.core.logging import operation_context
from trackify.db.dal import Database
from trackify.models.budget import Budget
from trackify.models.currency import Currency
from trackify.models.expense import ExpenseIn, ExpenseRecord
from trackify.services import app_settings
from trackify.services.aggregation import DayGroup, categories_present, group_by_date
from trackify.services.alerts import collect_alerts
from trackify.services.analytics_utils import (
    BudgetOverview,
    Dashboard,
    ExpenseSummary,
    compute_budget_overview,
    compute_dashboard,
    compute_expense_summary,
)
from trackify.services.currency import CurrencyService

logger = logging.getLogger("trackify.tracker")


class ExpenseTracker:
    def __init__(
        self,
        db: Database,
        currency_service: Optional[CurrencyService] = None,
        settings: Optional[Settings] = None,
    ):
        self.db = db
        self.settings = settings or get_settings()
        self.currency_service = currency_service or CurrencyService(
            app_settings.SettingsStore(db, self.settings),
            default=app_settings.default_currency(self.settings),
        )

    # ------------------------------------------------------------------
    # Records
    def expenses(self) -> List[ExpenseRecord]:
        return self.db.load_all()

    def categories(self) -> List[str]:
        return categories_present(self.expenses())

    def expense_groups(self, category: Optional[str] = None) -> List[DayGroup]:
        """Records grouped by day, newest first, with day totals in the display currency."""
        return [
            replace(group, total=self.currency_service.convert(group.total))
            for group in group_by_date(self.expenses(), category)
        ]

    def add_expense(self, expense: ExpenseIn) -> ExpenseRecord:
        with operation_context("add_expense"):
            record = self.db.add_expense(expense.to_record())
            logger.info(
                "expense added",
                extra={"expense_id": record.id, "category": record.category},
            )
            return record

    def delete_expense(self, expense_id: str) -> None:
        with operation_context("delete_expense"):
            if not self.db.delete_expense(expense_id):
                log_and_raise(ExpenseNotFoundError(expense_id))
            logger.info("expense deleted", extra={"expense_id": expense_id})

    # ------------------------------------------------------------------
    # Settings
    @property
    def currency(self) -> Currency:
        return self.currency_service.currency

    def set_currency(self, code: str) -> Currency:
        with operation_context("set_currency"):
            return self.currency_service.set_currency(code)

    def budget(self) -> Budget:
        return app_settings.load_budget(self.db, self.settings)

    def update_monthly_budget(self, amount: float) -> Budget:
        with operation_context("update_monthly_budget"):
            return app_settings.set_monthly_budget(self.db, amount, self.settings)

    def update_category_budget(self, category: str, amount: float) -> Budget:
        with operation_context("update_category_budget"):
            return app_settings.set_category_budget(
                self.db, category, amount, self.settings
            )

    # ------------------------------------------------------------------
    # Derived views (recomputed on every call)
    def summary(self, as_of: Optional[date] = None) -> ExpenseSummary:
        return compute_expense_summary(
            self.expenses(), as_of or date.today(), self.currency
        )

    def budget_overview(self, as_of: Optional[date] = None) -> BudgetOverview:
        return compute_budget_overview(
            self.expenses(), self.budget(), as_of or date.today(), self.currency
        )

    def dashboard(self, as_of: Optional[date] = None) -> Dashboard:
        return compute_dashboard(
            self.expenses(),
            self.budget(),
            as_of or date.today(),
            self.currency,
            months=self.settings.monthly_trend_months,
            days=self.settings.daily_trend_days,
        )

    def alerts(self, as_of: Optional[date] = None) -> List[Dict[str, Any]]:
        return collect_alerts(self.budget_overview(as_of), self.currency)

    def format(self, amount: float) -> str:
        return self.currency_service.format(amount)
