"""SQLModel table exports."""

from .fixed_expense import FixedExpense
from .goal import Goal
from .settings import AppSetting
from .transaction import MODEL_FOR_KIND, Expense, Income, TransactionKind

__all__ = [
    "AppSetting",
    "Expense",
    "FixedExpense",
    "Goal",
    "Income",
    "MODEL_FOR_KIND",
    "TransactionKind",
]
