from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Budget(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthly_limit: float = Field(0, ge=0)
    category_limits: Dict[str, float] = Field(default_factory=dict)

    @field_validator("category_limits")
    @classmethod
    def non_negative_limits(cls, v: Dict[str, float]) -> Dict[str, float]:
        for category, limit in v.items():
            if limit < 0:
                raise ValueError(f"limit for '{category}' cannot be negative")
        return v

    def with_monthly_limit(self, amount: float) -> "Budget":
        return Budget(monthly_limit=amount, category_limits=dict(self.category_limits))

    def with_category_limit(self, category: str, amount: float) -> "Budget":
        limits = dict(self.category_limits)
        limits[category] = amount
        return Budget(monthly_limit=self.monthly_limit, category_limits=limits)
