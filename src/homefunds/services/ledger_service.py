"""Data-entry boundary: validation, record creation and history views."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Union

from ..constants.categories import is_known_category, is_known_source
from ..domain.repositories.budget import BudgetSettingRepository
from ..domain.repositories.fixed_expense import FixedExpenseRepository
from ..domain.repositories.goal import GoalRepository
from ..domain.repositories.transaction import TransactionRepository
from ..errors import StoreUnavailable, ValidationError
from ..models.fixed_expense import FixedExpense
from ..models.goal import Goal
from ..models.transaction import Expense, Income, TransactionKind
from .aggregation import month_total

MAX_DESCRIPTION_LENGTH = 100
CENT = Decimal("0.01")
# NUMERIC(12, 2) leaves ten integer digits
MAX_AMOUNT = Decimal(10) ** 10

AmountInput = Union[Decimal, int, float, str]


@dataclass(frozen=True, slots=True)
class Member:
    """The household member performing a write."""

    user_id: str
    user_name: str


@dataclass(frozen=True, slots=True)
class Movement:
    """An expense or income in the merged movement history."""

    kind: TransactionKind
    record: Union[Expense, Income]

    @property
    def occurred_on(self) -> date:
        return self.record.occurred_on

    @property
    def signed_amount(self) -> Decimal:
        amount = Decimal(self.record.amount)
        return -amount if self.kind is TransactionKind.EXPENSE else amount

    @property
    def bucket(self) -> str:
        if self.kind is TransactionKind.EXPENSE:
            return self.record.category  # type: ignore[union-attr]
        return self.record.source  # type: ignore[union-attr]


def parse_amount(raw: AmountInput, *, allow_zero: bool = False, field: str = "amount") -> Decimal:
    """Turn user input into a two-decimal ``Decimal``.

    Rejects non-numbers, NaN/infinity, values too large for the money
    columns, more than two fraction digits and non-positive values (zero is
    accepted only with ``allow_zero``).
    """

    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        value = raw if isinstance(raw, Decimal) else Decimal(str(raw).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{field} must be a number, got {raw!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if abs(value) >= MAX_AMOUNT:
        raise ValidationError(f"{field} must be less than {MAX_AMOUNT:,}")
    try:
        quantized = value.quantize(CENT)
    except InvalidOperation as exc:
        raise ValidationError(f"{field} must be a number, got {raw!r}") from exc
    if value != quantized:
        raise ValidationError(f"{field} accepts at most two decimal places")
    if value < 0 or (value == 0 and not allow_zero):
        raise ValidationError(f"{field} must be greater than zero")
    return quantized


def clean_description(raw: Optional[str], *, field: str = "description") -> str:
    text = (raw or "").strip()
    if not text:
        raise ValidationError(f"{field} must not be empty")
    if len(text) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(f"{field} must be at most {MAX_DESCRIPTION_LENGTH} characters")
    return text


def _require_category(category: Optional[str]) -> str:
    if not category:
        raise ValidationError("category is required")
    if not is_known_category(category):
        raise ValidationError(f"unknown category {category!r}")
    return category


def _require_source(source: Optional[str]) -> str:
    if not source:
        raise ValidationError("source is required")
    if not is_known_source(source):
        raise ValidationError(f"unknown income source {source!r}")
    return source


def record_expense(
    repo: TransactionRepository,
    *,
    member: Member,
    amount: AmountInput,
    description: str,
    category: str,
    occurred_on: date | None = None,
) -> int:
    """Validate and store an expense, returning its id."""

    expense = Expense(
        amount=parse_amount(amount),
        description=clean_description(description),
        category=_require_category(category),
        user_id=member.user_id,
        user_name=member.user_name,
        occurred_on=occurred_on or date.today(),
    )
    created = repo.create(expense)
    if created.id is None:
        raise StoreUnavailable("store did not assign an id to the new expense")
    return created.id


def record_income(
    repo: TransactionRepository,
    *,
    member: Member,
    amount: AmountInput,
    description: str,
    source: str,
    occurred_on: date | None = None,
) -> int:
    """Validate and store an income, returning its id."""

    income = Income(
        amount=parse_amount(amount),
        description=clean_description(description),
        source=_require_source(source),
        user_id=member.user_id,
        user_name=member.user_name,
        occurred_on=occurred_on or date.today(),
    )
    created = repo.create(income)
    if created.id is None:
        raise StoreUnavailable("store did not assign an id to the new income")
    return created.id


def delete_transaction(repo: TransactionRepository, transaction_id: int) -> None:
    """Hard delete; ``NotFound`` propagates from the repository."""

    repo.delete(transaction_id)


def remove_fixed_expense(repo: FixedExpenseRepository, fixed_expense_id: int) -> None:
    """Drop a recurring obligation; ``NotFound`` when the id is absent."""

    repo.delete(fixed_expense_id)


def remove_goal(repo: GoalRepository, goal_id: int) -> None:
    """Drop a savings goal together with whatever was saved towards it."""

    repo.delete(goal_id)


def save_budget(repo: BudgetSettingRepository, raw: AmountInput) -> Decimal:
    """Store the monthly budget; zero clears it."""

    amount = parse_amount(raw, allow_zero=True, field="budget")
    repo.set_budget(amount)
    return amount


def add_fixed_expense(
    repo: FixedExpenseRepository,
    *,
    member: Member,
    name: str,
    amount: AmountInput,
    category: str,
    day_of_month: int = 1,
) -> FixedExpense:
    """Validate and store a recurring monthly obligation."""

    try:
        day = int(day_of_month)
    except (TypeError, ValueError) as exc:
        raise ValidationError("day_of_month must be a whole number") from exc
    if not 1 <= day <= 31:
        raise ValidationError("day_of_month must be between 1 and 31")
    return repo.create(
        FixedExpense(
            name=clean_description(name, field="name"),
            amount=parse_amount(amount),
            category=_require_category(category),
            day_of_month=day,
            created_by=member.user_id,
        )
    )


def add_goal(
    repo: GoalRepository,
    *,
    member: Member,
    name: str,
    target_amount: AmountInput,
    icon: str = "wallet",
    color: str = "#3B82F6",
    deadline: date | None = None,
) -> Goal:
    """Validate and store a savings goal starting at zero saved."""

    return repo.create(
        Goal(
            name=clean_description(name, field="name"),
            target_amount=parse_amount(target_amount, field="target_amount"),
            saved_amount=Decimal("0"),
            icon=icon,
            color=color,
            deadline=deadline,
            created_by=member.user_id,
        )
    )


def filter_by_category(expenses: Iterable[Expense], category: Optional[str]) -> list[Expense]:
    """Expenses of one category, or all of them when ``category`` is falsy."""

    if not category:
        return list(expenses)
    return [e for e in expenses if e.category == category]


def filtered_total(expenses: Iterable[Expense], category: Optional[str]) -> Decimal:
    return month_total(filter_by_category(expenses, category))


def movement_history(expenses: Iterable[Expense], incomes: Iterable[Income]) -> list[Movement]:
    """Expenses and incomes merged into one list, newest first."""

    movements = [Movement(TransactionKind.EXPENSE, e) for e in expenses]
    movements.extend(Movement(TransactionKind.INCOME, i) for i in incomes)
    return sorted(
        movements,
        key=lambda m: (m.occurred_on, m.record.created_at),
        reverse=True,
    )


__all__ = [
    "Member",
    "Movement",
    "add_fixed_expense",
    "add_goal",
    "clean_description",
    "delete_transaction",
    "filter_by_category",
    "filtered_total",
    "movement_history",
    "parse_amount",
    "record_expense",
    "record_income",
    "remove_fixed_expense",
    "remove_goal",
    "save_budget",
]
