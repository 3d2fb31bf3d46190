from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from trackify.core.errors import UnknownCurrencyError, log_and_raise
from trackify.models.currency import BASE_CURRENCY, Currency, find_currency
from trackify.services.money import to_cents

"""Display currency conversion & formatting.

Responsibilities:
    - Rescale base-currency amounts into the selected display currency.
    - Render amounts with symbol, thousands separators and two decimals.
    - Own the selected currency: load it from the settings store on start,
      persist it on every change, reject unknown codes.

Rates are static display multipliers through the base currency (USD); there
is no temporal validity and no rate fetching.
"""

logger = logging.getLogger("trackify.currency")


class SupportsCurrencyStore(Protocol):
    def load_currency(self) -> Optional[Currency]: ...

    def save_currency(self, currency: Currency) -> None: ...


def convert_amount(
    amount: float, target: Currency, source: Currency = BASE_CURRENCY
) -> float:
    return (amount / source.rate) * target.rate


def format_amount(amount: float, currency: Currency) -> str:
    cents = to_cents(abs(amount))
    sign = "-" if amount < 0 and cents != 0 else ""
    number = f"{cents:,.2f}"
    # Alphabetic symbols such as "CHF" read badly glued to the digits.
    sep = " " if currency.symbol.isalpha() else ""
    return f"{sign}{currency.symbol}{sep}{number}"


class CurrencyService:
    """Holds the selected display currency.

    `store` is any object with load_currency/save_currency; when omitted the
    selection lives only in memory. `default` is used when the store has
    nothing (or something no longer in the catalog).
    """

    def __init__(
        self,
        store: Optional[SupportsCurrencyStore] = None,
        default: Currency = BASE_CURRENCY,
        lookup: Callable[[str], Optional[Currency]] = find_currency,
    ):
        self._store = store
        self._lookup = lookup
        loaded = store.load_currency() if store is not None else None
        self._currency = loaded or default
        logger.debug("currency initialized", extra={"currency": self._currency.code})

    @property
    def currency(self) -> Currency:
        return self._currency

    def set_currency(self, code: str) -> Currency:
        new = self._lookup(code)
        if new is None:
            log_and_raise(UnknownCurrencyError(code))
        if new.code != self._currency.code:
            logger.info(
                "currency changed",
                extra={"previous": self._currency.code, "currency": new.code},
            )
        self._currency = new
        if self._store is not None:
            self._store.save_currency(new)
        return new

    def convert(self, amount: float, source: Currency = BASE_CURRENCY) -> float:
        return convert_amount(amount, self._currency, source)

    def format(self, amount: float) -> str:
        return format_amount(amount, self._currency)
