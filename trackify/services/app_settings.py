"""User settings backed by the metadata table.

Provides typed accessors for the selected display currency and the budget.
All loaders are resilient: if a key is missing or its stored value is no
longer valid, fall back to the configured defaults instead of failing.

Metadata keys:
  - selected_currency: currency code, e.g. "EUR"
  - budget: JSON object {"monthly_limit": 5000, "category_limits": {"Travel": 300}}

NOTE: We centralize JSON parsing to avoid scattering try/except blocks.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import json
import logging

from pydantic import ValidationError

from trackify.core.config import Settings, get_settings
from trackify.core.errors import InvalidBudgetError, UnknownCurrencyError, log_and_raise
from trackify.db.dal import Database
from trackify.models.budget import Budget
from trackify.models.currency import Currency, find_currency

CURRENCY_KEY = "selected_currency"
BUDGET_KEY = "budget"

logger = logging.getLogger("trackify.settings")

# ------------- Low level helpers -----------------


def _get_json_obj(db: Database, key: str) -> Dict[str, Any]:
    val = db.get_metadata(key)
    if not val:
        return {}
    try:
        obj = json.loads(val)
        return obj if isinstance(obj, dict) else {}
    except ValueError:
        logger.warning("ignoring unreadable setting", extra={"key": key})
        return {}


def _set_json_obj(db: Database, key: str, obj: Dict[str, Any]) -> None:
    db.set_metadata(key, json.dumps(obj, separators=(",", ":")))


# ------------- Currency ---------------------------


def default_currency(settings: Optional[Settings] = None) -> Currency:
    code = (settings or get_settings()).default_currency
    currency = find_currency(code)
    if currency is None:
        log_and_raise(UnknownCurrencyError(code))
    return currency


def load_currency(db: Database) -> Optional[Currency]:
    """Persisted currency, or None when nothing usable is stored."""
    code = db.get_metadata(CURRENCY_KEY)
    if code is None:
        return None
    currency = find_currency(code)
    if currency is None:
        logger.warning("stored currency no longer supported", extra={"currency": code})
    return currency


def save_currency(db: Database, currency: Currency) -> None:
    db.set_metadata(CURRENCY_KEY, currency.code)


# ------------- Budget -----------------------------


def default_budget(settings: Optional[Settings] = None) -> Budget:
    return Budget(monthly_limit=(settings or get_settings()).default_monthly_budget)


def load_budget(db: Database, settings: Optional[Settings] = None) -> Budget:
    obj = _get_json_obj(db, BUDGET_KEY)
    if not obj:
        return default_budget(settings)
    try:
        return Budget.model_validate(obj)
    except ValidationError:
        logger.warning("stored budget invalid, using default", extra={"key": BUDGET_KEY})
        return default_budget(settings)


def save_budget(db: Database, budget: Budget) -> None:
    _set_json_obj(db, BUDGET_KEY, budget.model_dump())


def set_monthly_budget(
    db: Database, amount: float, settings: Optional[Settings] = None
) -> Budget:
    if amount < 0:
        log_and_raise(InvalidBudgetError("Monthly budget cannot be negative"))
    budget = load_budget(db, settings).with_monthly_limit(float(amount))
    save_budget(db, budget)
    return budget


def set_category_budget(
    db: Database, category: str, amount: float, settings: Optional[Settings] = None
) -> Budget:
    if amount < 0:
        log_and_raise(InvalidBudgetError(f"Budget for '{category}' cannot be negative"))
    budget = load_budget(db, settings).with_category_limit(category, float(amount))
    save_budget(db, budget)
    return budget


class SettingsStore:
    """Object form of the helpers above, for collaborators that take a store."""

    def __init__(self, db: Database, settings: Optional[Settings] = None):
        self._db = db
        self._settings = settings

    def load_currency(self) -> Optional[Currency]:
        return load_currency(self._db)

    def save_currency(self, currency: Currency) -> None:
        save_currency(self._db, currency)

    def load_budget(self) -> Budget:
        return load_budget(self._db, self._settings)

    def save_budget(self, budget: Budget) -> None:
        save_budget(self._db, budget)


__all__ = [
    "CURRENCY_KEY",
    "BUDGET_KEY",
    "default_currency",
    "load_currency",
    "save_currency",
    "default_budget",
    "load_budget",
    "save_budget",
    "set_monthly_budget",
    "set_category_budget",
    "SettingsStore",
]
