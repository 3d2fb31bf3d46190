"""Exception taxonomy for the tracker.

The analytics engine itself never raises for degenerate numbers (zero limits,
empty months); every divisor has a documented fallback. Errors only surface at
the configuration and storage boundaries.
"""

from __future__ import annotations

import logging
from typing import NoReturn

logger = logging.getLogger("trackify.errors")


class TrackifyError(Exception):
    """Base class for all tracker errors."""

    code = "trackify_error"


class UnknownCurrencyError(TrackifyError):
    code = "unknown_currency"

    def __init__(self, currency_code: str):
        self.currency_code = currency_code
        super().__init__(f"Unsupported currency '{currency_code}'")


class ExpenseNotFoundError(TrackifyError):
    code = "not_found"

    def __init__(self, expense_id: str):
        self.expense_id = expense_id
        super().__init__(f"No expense with id '{expense_id}'")


class InvalidBudgetError(TrackifyError):
    code = "invalid_budget"


def log_and_raise(exc: TrackifyError) -> NoReturn:
    logger.warning("rejected operation", extra={"error": exc.code, "detail": str(exc)})
    raise exc
