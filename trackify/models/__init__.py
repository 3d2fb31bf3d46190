"""Pydantic domain models for the Trackify expense tracker."""

from .constants import CATEGORIES  # re-export
from .budget import Budget
from .currency import BASE_CURRENCY, CURRENCIES, Currency, find_currency
from .expense import ExpenseIn, ExpenseRecord

__all__ = [
    "CATEGORIES",
    "BASE_CURRENCY",
    "CURRENCIES",
    "Currency",
    "find_currency",
    "Budget",
    "ExpenseIn",
    "ExpenseRecord",
]
