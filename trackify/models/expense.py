from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExpenseIn(BaseModel):
    """Entry-form payload. Validation happens here so the engine never has to."""

    amount: float = Field(..., ge=0)
    category: str
    description: str = ""
    date: date

    @field_validator("category")
    @classmethod
    def category_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("category cannot be empty")
        return v.strip()

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        return v.strip()

    def to_record(self, expense_id: str | None = None) -> "ExpenseRecord":
        return ExpenseRecord(
            id=expense_id or uuid.uuid4().hex,
            amount=self.amount,
            category=self.category,
            description=self.description,
            date=self.date,
        )


class ExpenseRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    amount: float = Field(..., ge=0)
    category: str
    description: str = ""
    date: date
