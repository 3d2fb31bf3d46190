from __future__ import annotations

from typing import Dict, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Currency(BaseModel):
    """Display currency; `rate` is units of this currency per 1 base unit."""

    model_config = ConfigDict(frozen=True)

    code: str
    symbol: str
    name: str
    rate: float = Field(..., gt=0)

    @field_validator("code")
    @classmethod
    def upper_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("currency code cannot be empty")
        return v


# Static display multipliers relative to USD; not live exchange rates.
CURRENCIES: List[Currency] = [
    Currency(code="USD", symbol="$", name="US Dollar", rate=1),
    Currency(code="EUR", symbol="€", name="Euro", rate=0.85),
    Currency(code="GBP", symbol="£", name="British Pound", rate=0.73),
    Currency(code="INR", symbol="₹", name="Indian Rupee", rate=83.12),
    Currency(code="JPY", symbol="¥", name="Japanese Yen", rate=149.50),
    Currency(code="CAD", symbol="C$", name="Canadian Dollar", rate=1.35),
    Currency(code="AUD", symbol="A$", name="Australian Dollar", rate=1.52),
    Currency(code="CHF", symbol="CHF", name="Swiss Franc", rate=0.88),
]

_BY_CODE: Dict[str, Currency] = {c.code: c for c in CURRENCIES}
CURRENCY_CODES: Set[str] = set(_BY_CODE)

BASE_CURRENCY: Currency = next(c for c in CURRENCIES if c.rate == 1)


def find_currency(code: Optional[str]) -> Optional[Currency]:
    if not code:
        return None
    return _BY_CODE.get(code.strip().upper())
