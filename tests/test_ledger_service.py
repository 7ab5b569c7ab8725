"""Tests for the data-entry boundary and history helpers."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from homefunds.errors import NotFound, StoreUnavailable, ValidationError
from homefunds.models import Expense, Income, TransactionKind
from homefunds.services import ledger_service
from homefunds.services.ledger_service import Member, parse_amount


class TestParseAmount:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("12.5", Decimal("12.50")), (3, Decimal("3.00")), (0.1, Decimal("0.10")), (" 7.25 ", Decimal("7.25"))],
    )
    def test_valid(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["", "abc", "-1", "0", "1.234", "NaN", "Infinity", True, "1e30", "-1e30", "99999999999", "10000000000"],
    )
    def test_invalid(self, raw):
        with pytest.raises(ValidationError):
            parse_amount(raw)

    def test_zero_allowed_when_asked(self):
        assert parse_amount("0", allow_zero=True) == Decimal("0.00")

    def test_largest_storable_amount(self):
        assert parse_amount("9999999999.99") == Decimal("9999999999.99")


def test_record_expense_validates_and_persists(expense_repo, member):
    record_id = ledger_service.record_expense(
        expense_repo,
        member=member,
        amount="42.10",
        description="  Groceries  ",
        category="food",
        occurred_on=date(2025, 3, 14),
    )

    stored = expense_repo.get_by_id(record_id)
    assert stored.amount == Decimal("42.10")
    assert stored.description == "Groceries"
    assert (stored.user_id, stored.user_name) == ("u-ana", "Ana")


def test_record_expense_defaults_to_today(expense_repo, member):
    record_id = ledger_service.record_expense(
        expense_repo, member=member, amount="1", description="Bread", category="food"
    )
    assert expense_repo.get_by_id(record_id).occurred_on == date.today()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"amount": "-3", "description": "x", "category": "food"},
        {"amount": "3", "description": "   ", "category": "food"},
        {"amount": "3", "description": "x" * 101, "category": "food"},
        {"amount": "3", "description": "x", "category": ""},
        {"amount": "3", "description": "x", "category": "salary"},
    ],
)
def test_record_expense_rejects_bad_input(expense_repo, member, kwargs):
    with pytest.raises(ValidationError):
        ledger_service.record_expense(expense_repo, member=member, **kwargs)
    assert expense_repo.list_recent(10) == []


def test_record_income_requires_known_source(income_repo, member):
    record_id = ledger_service.record_income(
        income_repo, member=member, amount="1500", description="March salary", source="salary"
    )
    assert income_repo.get_by_id(record_id).source == "salary"

    with pytest.raises(ValidationError):
        ledger_service.record_income(
            income_repo, member=member, amount="10", description="x", source="food"
        )


def test_save_budget_accepts_zero(settings_repo):
    assert ledger_service.save_budget(settings_repo, "500") == Decimal("500.00")
    assert ledger_service.save_budget(settings_repo, "0") == Decimal("0.00")
    assert settings_repo.get_budget() == Decimal("0")
    with pytest.raises(ValidationError):
        ledger_service.save_budget(settings_repo, "-1")


def test_add_fixed_expense_validates_day(fixed_repo, member):
    fixed = ledger_service.add_fixed_expense(
        fixed_repo, member=member, name="Rent", amount="800", category="home", day_of_month=3
    )
    assert fixed.id is not None
    assert fixed.created_by == "u-ana"

    for bad_day in (0, 32, "soon"):
        with pytest.raises(ValidationError):
            ledger_service.add_fixed_expense(
                fixed_repo, member=member, name="Rent", amount="800", category="home", day_of_month=bad_day
            )


def test_add_goal_starts_empty(goal_repo, member):
    goal = ledger_service.add_goal(
        goal_repo, member=member, name="Bike", target_amount="650", deadline=date(2025, 12, 1)
    )
    stored = goal_repo.get_by_id(goal.id)
    assert stored.saved_amount == Decimal("0")
    assert stored.deadline == date(2025, 12, 1)

    with pytest.raises(ValidationError):
        ledger_service.add_goal(goal_repo, member=member, name="Bike", target_amount="0")


def test_filter_by_category_and_total():
    expenses = [
        Expense(amount=Decimal("5"), description="a", category="food", occurred_on=date(2025, 1, 1)),
        Expense(amount=Decimal("7"), description="b", category="home", occurred_on=date(2025, 1, 2)),
        Expense(amount=Decimal("3"), description="c", category="food", occurred_on=date(2025, 1, 3)),
    ]
    assert [e.description for e in ledger_service.filter_by_category(expenses, "food")] == ["a", "c"]
    assert len(ledger_service.filter_by_category(expenses, None)) == 3
    assert ledger_service.filtered_total(expenses, "food") == Decimal("8")
    assert ledger_service.filtered_total(expenses, "") == Decimal("15")


def test_movement_history_merges_newest_first():
    early = datetime(2025, 1, 5, 9, 0)
    late = datetime(2025, 1, 5, 18, 0)
    expenses = [
        Expense(id=1, amount=Decimal("5"), description="lunch", category="food",
                occurred_on=date(2025, 1, 5), created_at=early),
        Expense(id=2, amount=Decimal("9"), description="taxi", category="transport",
                occurred_on=date(2025, 1, 2), created_at=early),
    ]
    incomes = [
        Income(id=1, amount=Decimal("100"), description="gift", source="gift",
               occurred_on=date(2025, 1, 5), created_at=late),
    ]

    movements = ledger_service.movement_history(expenses, incomes)

    assert [(m.kind, m.record.description) for m in movements] == [
        (TransactionKind.INCOME, "gift"),
        (TransactionKind.EXPENSE, "lunch"),
        (TransactionKind.EXPENSE, "taxi"),
    ]
    assert movements[0].signed_amount == Decimal("100")
    assert movements[1].signed_amount == Decimal("-5")
    assert movements[2].bucket == "transport"


def test_member_is_immutable():
    member = Member(user_id="u1", user_name="Ana")
    with pytest.raises(AttributeError):
        member.user_name = "Bea"  # type: ignore[misc]


def test_remove_fixed_expense(fixed_repo, fixed_factory):
    fixed = fixed_factory()

    ledger_service.remove_fixed_expense(fixed_repo, fixed.id)

    assert fixed_repo.list_all() == []
    with pytest.raises(NotFound):
        ledger_service.remove_fixed_expense(fixed_repo, fixed.id)


def test_remove_goal(goal_repo, goal_factory):
    goal = goal_factory(saved_amount="40")

    ledger_service.remove_goal(goal_repo, goal.id)

    assert goal_repo.get_by_id(goal.id) is None
    with pytest.raises(NotFound):
        ledger_service.remove_goal(goal_repo, goal.id)


class _IdlessStore:
    """Transaction store that accepts records but never assigns ids."""

    def create(self, record):
        return record


def test_missing_id_from_store_is_reported(member):
    with pytest.raises(StoreUnavailable):
        ledger_service.record_expense(
            _IdlessStore(), member=member, amount="5", description="Bus", category="transport"
        )
    with pytest.raises(StoreUnavailable):
        ledger_service.record_income(
            _IdlessStore(), member=member, amount="5", description="Tip", source="gift"
        )
