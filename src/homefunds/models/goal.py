"""Savings goals."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Goal(SQLModel, table=True):
    """A savings target filled by discrete contributions.

    ``saved_amount`` is only ever changed by the repository's atomic increment.
    """

    __tablename__: ClassVar[str] = "goal"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=100, index=True)
    target_amount: Decimal = Field(max_digits=12, decimal_places=2, nullable=False)
    saved_amount: Decimal = Field(
        default=Decimal("0"), max_digits=12, decimal_places=2, nullable=False
    )
    icon: str = Field(default="wallet", max_length=32)
    color: str = Field(default="#3B82F6", max_length=7)
    deadline: Optional[date] = Field(default=None)
    created_by: str = Field(default="", max_length=128)
