"""Money / rounding helpers.

Centralized so every displayed amount goes through the same half-up rounding.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_cents(value: float) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
