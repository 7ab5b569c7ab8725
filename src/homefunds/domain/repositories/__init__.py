"""Repository protocol definitions for domain layer."""

from .budget import BudgetSettingRepository
from .fixed_expense import FixedExpenseRepository
from .goal import GoalRepository
from .transaction import TransactionRepository

__all__ = [
    "BudgetSettingRepository",
    "FixedExpenseRepository",
    "GoalRepository",
    "TransactionRepository",
]
