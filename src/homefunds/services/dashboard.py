"""Screen-level snapshots assembled from concurrent store reads.

Every loader fans out independent reads with ``asyncio.gather`` (each
synchronous repository call runs in a worker thread) and derives metrics only
after all of them succeed. If any read fails the exception propagates and no
snapshot is produced, so a caller never renders stale or half-computed
figures. Retrying is left to the caller.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Awaitable, Callable, Optional, TypeVar

from ..domain.repositories.budget import BudgetSettingRepository
from ..domain.repositories.fixed_expense import FixedExpenseRepository
from ..domain.repositories.goal import GoalRepository
from ..domain.repositories.transaction import TransactionRepository
from ..logging_config import get_logger
from ..models.fixed_expense import FixedExpense
from ..models.transaction import Expense
from . import aggregation
from .aggregation import BreakdownEntry, MonthTotals, SeriesPoint
from .budgeting import BudgetStatus, GoalProgress, budget_status, goal_progress
from .ledger_service import Movement, filter_by_category, movement_history
from .periods import Period

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class HouseholdStores:
    """The store adapters a snapshot loader reads from."""

    expenses: TransactionRepository
    incomes: TransactionRepository
    budget: BudgetSettingRepository
    fixed_expenses: FixedExpenseRepository
    goals: GoalRepository


@dataclass(frozen=True)
class DashboardSnapshot:
    period: Period
    total_spent: Decimal
    total_income: Decimal
    balance: Decimal
    total_fixed: Decimal
    budget: BudgetStatus
    categories: list[BreakdownEntry]
    recent_expenses: list[Expense]
    fixed_expenses: list[FixedExpense]
    goals: list[GoalProgress]


@dataclass(frozen=True)
class StatsSnapshot:
    period: Period
    total_spent: Decimal
    total_income: Decimal
    balance: Decimal
    category_slices: list[BreakdownEntry]
    contributors: list[BreakdownEntry]
    history: list[SeriesPoint]
    previous_total: Decimal
    month_change: float


@dataclass(frozen=True)
class ProfileSnapshot:
    budget: Decimal
    fixed_expenses: list[FixedExpense]
    total_fixed: Decimal
    goals: list[GoalProgress]


@dataclass(frozen=True)
class HistoryView:
    period: Period
    category: Optional[str]
    expenses: list[Expense]
    total: Decimal


def _in_thread(func: Callable[..., T], *args: Any) -> Awaitable[T]:
    return asyncio.to_thread(func, *args)


async def _gather(label: str, *aws: Awaitable[Any]) -> list[Any]:
    """Await every branch; log and re-raise the first failure."""

    try:
        return list(await asyncio.gather(*aws))
    except Exception:
        logger.exception("Failed to load %s", label)
        raise


async def load_dashboard(
    stores: HouseholdStores, period: Period, *, recent_count: int = 5
) -> DashboardSnapshot:
    """Everything the home screen shows for ``period``."""

    expenses, incomes, recent, budget, fixed, goals = await _gather(
        "dashboard",
        _in_thread(stores.expenses.list_for_month, period.year, period.month),
        _in_thread(stores.incomes.list_for_month, period.year, period.month),
        # Recent spending is deliberately expense-only.
        _in_thread(stores.expenses.list_recent, recent_count),
        _in_thread(stores.budget.get_budget),
        _in_thread(stores.fixed_expenses.list_all),
        _in_thread(stores.goals.list_all),
    )

    total_spent = aggregation.month_total(expenses)
    total_income = aggregation.month_total(incomes)
    return DashboardSnapshot(
        period=period,
        total_spent=total_spent,
        total_income=total_income,
        balance=aggregation.balance(total_spent, total_income),
        total_fixed=aggregation.fixed_total(fixed),
        budget=budget_status(total_spent, budget),
        categories=aggregation.category_breakdown(expenses),
        recent_expenses=recent,
        fixed_expenses=fixed,
        goals=[goal_progress(g) for g in goals],
    )


async def _month_totals(stores: HouseholdStores, period: Period) -> MonthTotals:
    expenses, incomes = await asyncio.gather(
        _in_thread(stores.expenses.list_for_month, period.year, period.month),
        _in_thread(stores.incomes.list_for_month, period.year, period.month),
    )
    return MonthTotals(
        expenses=aggregation.month_total(expenses),
        incomes=aggregation.month_total(incomes),
    )


async def load_stats(
    stores: HouseholdStores, period: Period, *, window_size: int = 6
) -> StatsSnapshot:
    """Monthly statistics plus the trailing history used by the charts."""

    window = max(window_size, 2)  # the previous month is always needed
    earlier = period.trailing(window)[:-1]
    expenses, incomes, *monthly = await _gather(
        "stats",
        _in_thread(stores.expenses.list_for_month, period.year, period.month),
        _in_thread(stores.incomes.list_for_month, period.year, period.month),
        *(_month_totals(stores, p) for p in earlier),
    )

    total_spent = aggregation.month_total(expenses)
    total_income = aggregation.month_total(incomes)
    monthly.append(MonthTotals(expenses=total_spent, incomes=total_income))
    previous_total = monthly[-2].expenses
    return StatsSnapshot(
        period=period,
        total_spent=total_spent,
        total_income=total_income,
        balance=aggregation.balance(total_spent, total_income),
        category_slices=aggregation.top_slices(aggregation.category_breakdown(expenses)),
        contributors=aggregation.top_contributors(expenses),
        history=aggregation.historical_series(monthly, end=period, window_size=window_size),
        previous_total=previous_total,
        month_change=aggregation.month_over_month_change(total_spent, previous_total),
    )


async def load_profile(stores: HouseholdStores) -> ProfileSnapshot:
    """Budget, fixed expenses and goals for the settings screen."""

    budget, fixed, goals = await _gather(
        "profile",
        _in_thread(stores.budget.get_budget),
        _in_thread(stores.fixed_expenses.list_all),
        _in_thread(stores.goals.list_all),
    )
    return ProfileSnapshot(
        budget=budget,
        fixed_expenses=fixed,
        total_fixed=aggregation.fixed_total(fixed),
        goals=[goal_progress(g) for g in goals],
    )


async def load_history(
    stores: HouseholdStores, period: Period, *, category: Optional[str] = None
) -> HistoryView:
    """The period's expenses, optionally narrowed to one category."""

    (expenses,) = await _gather(
        "history",
        _in_thread(stores.expenses.list_for_month, period.year, period.month),
    )
    selected = filter_by_category(expenses, category)
    return HistoryView(
        period=period,
        category=category,
        expenses=selected,
        total=aggregation.month_total(selected),
    )


async def load_movements(stores: HouseholdStores, period: Period) -> list[Movement]:
    """Expenses and incomes of ``period`` merged, newest first."""

    expenses, incomes = await _gather(
        "movements",
        _in_thread(stores.expenses.list_for_month, period.year, period.month),
        _in_thread(stores.incomes.list_for_month, period.year, period.month),
    )
    return movement_history(expenses, incomes)


__all__ = [
    "DashboardSnapshot",
    "HistoryView",
    "HouseholdStores",
    "ProfileSnapshot",
    "StatsSnapshot",
    "load_dashboard",
    "load_history",
    "load_movements",
    "load_profile",
    "load_stats",
]
