"""Recurring monthly obligations."""

from __future__ import annotations

from decimal import Decimal
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class FixedExpense(SQLModel, table=True):
    """A monthly bill tracked for visibility.

    Fixed expenses are never posted as expenses; they only feed the
    "total fixed" figure.
    """

    __tablename__: ClassVar[str] = "fixed_expense"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=100, index=True)
    amount: Decimal = Field(max_digits=12, decimal_places=2, nullable=False)
    category: str = Field(nullable=False, max_length=32)
    day_of_month: int = Field(default=1, ge=1, le=31, nullable=False)
    created_by: str = Field(default="", max_length=128)
