"""SQLModel definitions for household expenses and incomes."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class TransactionKind(str, Enum):
    """The two record kinds a household tracks."""

    EXPENSE = "expense"
    INCOME = "income"


class TransactionBase(SQLModel):
    """Columns shared by expenses and incomes.

    Records are owned by the household; ``user_id``/``user_name`` only record
    which member entered them.
    """

    amount: Decimal = Field(max_digits=12, decimal_places=2, nullable=False)
    description: str = Field(nullable=False, max_length=100)
    user_id: str = Field(default="", max_length=128, index=True)
    user_name: str = Field(default="", max_length=100)
    occurred_on: date = Field(nullable=False, index=True)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False)


class Expense(TransactionBase, table=True):
    """Money spent by a household member."""

    __tablename__: ClassVar[str] = "expense"
    kind: ClassVar[TransactionKind] = TransactionKind.EXPENSE

    id: Optional[int] = Field(default=None, primary_key=True)
    category: str = Field(nullable=False, max_length=32, index=True)


class Income(TransactionBase, table=True):
    """Money received by a household member."""

    __tablename__: ClassVar[str] = "income"
    kind: ClassVar[TransactionKind] = TransactionKind.INCOME

    id: Optional[int] = Field(default=None, primary_key=True)
    source: str = Field(nullable=False, max_length=32, index=True)


MODEL_FOR_KIND: dict[TransactionKind, type[Expense] | type[Income]] = {
    TransactionKind.EXPENSE: Expense,
    TransactionKind.INCOME: Income,
}
