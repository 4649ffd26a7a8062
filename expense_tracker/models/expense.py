"""
Core Data Models for Expense Tracker

These models define the records stored in the two JSON collections.
They are designed to:
1. Enforce the record invariants at load time
2. Serialize to the same JSON layout the data files have always used
3. Stay small - everything else is derived from them

DESIGN DECISION: Amounts are Decimal in memory but written as JSON numbers,
so existing data files keep their shape.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
)


Amount = Annotated[
    Decimal,
    Field(gt=0, description="Positive amount"),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class Expense(BaseModel):
    """
    A single recorded expense.

    The id is assigned by the record store and never changes.
    The date is stamped when the expense is added and never changes.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(
        ...,
        ge=1,
        description="Unique expense identifier"
    )
    date: datetime = Field(
        default_factory=datetime.now,
        description="When the expense was recorded"
    )
    description: str = Field(
        default="",
        description="Free text description"
    )
    amount: Amount
    category: Optional[str] = Field(
        default=None,
        description="Optional free text category"
    )

    @field_validator('category')
    @classmethod
    def empty_category_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Files written by older versions store a missing category as ''."""
        return v or None


class Budget(BaseModel):
    """
    A monthly spending ceiling.

    (month, year) is the key - at most one budget exists per pair.
    """
    model_config = ConfigDict(validate_assignment=True)

    month: int = Field(
        ...,
        ge=1,
        le=12,
        description="Calendar month (1-12)"
    )
    year: int = Field(
        ...,
        ge=1,
        description="Calendar year"
    )
    amount: Amount

    @property
    def key(self) -> tuple[int, int]:
        return (self.month, self.year)
