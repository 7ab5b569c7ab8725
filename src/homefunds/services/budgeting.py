"""Budget and savings-goal evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from ..domain.repositories.goal import GoalRepository
from ..errors import InvalidAmount, NotFound, ValidationError
from ..logging_config import get_logger
from ..models.goal import Goal
from .aggregation import HUNDRED, as_decimal
from .formatting import round_money
from .ledger_service import AmountInput, parse_amount

logger = get_logger(__name__)

ZERO = Decimal("0")
ONE = Decimal("1")
CRITICAL_RATIO = Decimal("0.9")
WARNING_RATIO = Decimal("0.7")


class Severity(str, Enum):
    """Budget utilisation tier."""

    UNSET = "unset"
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True, slots=True)
class BudgetStatus:
    """Spend measured against the household's monthly budget."""

    spent: Decimal
    budget: Decimal
    progress_ratio: float
    remaining: Decimal
    is_over_budget: bool
    severity: Severity

    @property
    def is_set(self) -> bool:
        return self.severity is not Severity.UNSET


@dataclass(frozen=True, slots=True)
class GoalProgress:
    """How far a goal is towards its target."""

    goal: Goal
    ratio: float
    percent: int


def _clamp(value: Decimal, low: Decimal = ZERO, high: Decimal = ONE) -> Decimal:
    return max(low, min(value, high))


def budget_status(spent: Decimal, budget: Decimal) -> BudgetStatus:
    """Derive utilisation, remaining amount and severity.

    A zero budget means "not configured" and reports ``Severity.UNSET`` rather
    than an overage.
    """

    spent = as_decimal(spent)
    budget = as_decimal(budget)
    if budget <= 0:
        return BudgetStatus(
            spent=spent,
            budget=budget,
            progress_ratio=0.0,
            remaining=budget - spent,
            is_over_budget=False,
            severity=Severity.UNSET,
        )

    ratio = _clamp(spent / budget)
    if ratio >= CRITICAL_RATIO:
        severity = Severity.CRITICAL
    elif ratio > WARNING_RATIO:
        severity = Severity.WARNING
    else:
        severity = Severity.OK

    return BudgetStatus(
        spent=spent,
        budget=budget,
        progress_ratio=float(ratio),
        remaining=budget - spent,
        is_over_budget=spent > budget,
        severity=severity,
    )


def goal_progress(goal: Goal) -> GoalProgress:
    """Ratio of saved to target, capped at 1 for over-funded goals."""

    target = as_decimal(goal.target_amount or 0)
    saved = as_decimal(goal.saved_amount or 0)
    ratio = _clamp(saved / target) if target > 0 else ZERO
    # halves round up: 1 of 8 saved shows 13%
    percent = int(round_money(ratio * HUNDRED, 0))
    return GoalProgress(goal=goal, ratio=float(ratio), percent=percent)


def contribute(*, repository: GoalRepository, goal_id: int, amount: AmountInput) -> Goal:
    """Add ``amount`` to a goal through the store's atomic increment.

    Raises:
        InvalidAmount: ``amount`` is not a positive number with at most two
            decimal places.
        NotFound: the goal does not exist.
    """

    try:
        delta = parse_amount(amount, field="contribution")
    except ValidationError as exc:
        raise InvalidAmount(str(exc)) from exc

    repository.increment_saved(goal_id, delta)
    updated = repository.get_by_id(goal_id)
    if updated is None:
        # Deleted between the increment and the re-read.
        raise NotFound("goal", goal_id)
    logger.info("Goal contribution recorded", extra={"goal_id": goal_id, "delta": delta})
    return updated


__all__ = [
    "BudgetStatus",
    "GoalProgress",
    "Severity",
    "budget_status",
    "contribute",
    "goal_progress",
]
