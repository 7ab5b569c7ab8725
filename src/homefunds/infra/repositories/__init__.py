"""Concrete repository implementations using SQLModel."""

from .fixed_expense import SQLModelFixedExpenseRepository
from .goal import SQLModelGoalRepository
from .settings import SQLModelSettingsRepository
from .transaction import SQLModelTransactionRepository, expense_repository, income_repository

__all__ = [
    "SQLModelFixedExpenseRepository",
    "SQLModelGoalRepository",
    "SQLModelSettingsRepository",
    "SQLModelTransactionRepository",
    "expense_repository",
    "income_repository",
]
