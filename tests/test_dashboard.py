"""Tests for the concurrent snapshot loaders."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from homefunds.errors import StoreUnavailable
from homefunds.services import dashboard
from homefunds.services.budgeting import Severity
from homefunds.services.ledger_service import Member
from homefunds.services.periods import Period

MARCH = Period(2025, 3)


class _BrokenGoals:
    """Goal store whose backend is down."""

    def list_all(self):
        raise StoreUnavailable("goal store offline")


def test_dashboard_snapshot(stores, settings_repo, expense_factory, income_factory, fixed_factory, goal_factory):
    settings_repo.set_budget(Decimal("500"))
    expense_factory(amount="200", category="food", occurred_on=date(2025, 3, 3))
    expense_factory(amount="250", category="home", occurred_on=date(2025, 3, 20))
    expense_factory(amount="999", category="home", occurred_on=date(2025, 2, 27))
    income_factory(amount="1200", occurred_on=date(2025, 3, 1))
    fixed_factory(name="Rent", amount="800")
    fixed_factory(name="Phone", amount="25.50", category="utilities")
    goal_factory(name="Trip", target_amount="1000", saved_amount="250")

    snap = asyncio.run(dashboard.load_dashboard(stores, MARCH, recent_count=2))

    assert snap.total_spent == Decimal("450")
    assert snap.total_income == Decimal("1200")
    assert snap.balance == Decimal("750")
    assert snap.total_fixed == Decimal("825.50")
    assert snap.budget.severity is Severity.CRITICAL
    assert snap.budget.remaining == Decimal("50")
    assert [c.key for c in snap.categories] == ["home", "food"]
    assert [e.amount for e in snap.recent_expenses] == [Decimal("250"), Decimal("200")]
    assert [f.name for f in snap.fixed_expenses] == ["Phone", "Rent"]
    assert snap.goals[0].percent == 25


def test_dashboard_fixed_expenses_do_not_count_as_spending(stores, fixed_factory):
    fixed_factory(amount="800")

    snap = asyncio.run(dashboard.load_dashboard(stores, MARCH))

    assert snap.total_spent == Decimal("0")
    assert snap.total_fixed == Decimal("800")
    assert snap.budget.severity is Severity.UNSET


def test_dashboard_failure_yields_no_snapshot(stores, expense_factory, caplog):
    expense_factory(occurred_on=date(2025, 3, 3))
    broken = replace(stores, goals=_BrokenGoals())

    with caplog.at_level(logging.ERROR, logger="homefunds"):
        with pytest.raises(StoreUnavailable):
            asyncio.run(dashboard.load_dashboard(broken, MARCH))

    assert "Failed to load dashboard" in caplog.text


def test_stats_snapshot(stores, expense_factory, income_factory):
    bea = Member(user_id="u-bea", user_name="Bea")
    expense_factory(amount="100", occurred_on=date(2025, 2, 10))
    expense_factory(amount="90", occurred_on=date(2025, 3, 5))
    expense_factory(amount="60", category="transport", occurred_on=date(2025, 3, 6), who=bea)
    income_factory(amount="400", occurred_on=date(2025, 1, 31))
    income_factory(amount="500", occurred_on=date(2025, 3, 1))

    snap = asyncio.run(dashboard.load_stats(stores, MARCH, window_size=3))

    assert snap.total_spent == Decimal("150")
    assert snap.previous_total == Decimal("100")
    assert snap.month_change == pytest.approx(50.0)
    assert [(c.key, c.total) for c in snap.contributors] == [("Ana", Decimal("90")), ("Bea", Decimal("60"))]
    assert [c.key for c in snap.category_slices] == ["food", "transport"]
    assert [(p.label, p.expenses, p.incomes) for p in snap.history] == [
        ("Jan", Decimal("0"), Decimal("400")),
        ("Feb", Decimal("100"), Decimal("0")),
        ("Mar", Decimal("150"), Decimal("500")),
    ]


def test_stats_without_previous_month_reports_zero_change(stores, expense_factory):
    expense_factory(amount="80", occurred_on=date(2025, 3, 5))

    snap = asyncio.run(dashboard.load_stats(stores, MARCH, window_size=1))

    assert snap.month_change == 0.0
    assert len(snap.history) == 1


def test_profile_snapshot(stores, settings_repo, fixed_factory, goal_factory):
    settings_repo.set_budget(Decimal("1500"))
    fixed_factory(amount="800")
    goal_factory(target_amount="100", saved_amount="150")

    snap = asyncio.run(dashboard.load_profile(stores))

    assert snap.budget == Decimal("1500")
    assert snap.total_fixed == Decimal("800")
    assert snap.goals[0].ratio == 1.0


def test_history_filters_by_category(stores, expense_factory):
    expense_factory(amount="5", category="food", occurred_on=date(2025, 3, 1))
    expense_factory(amount="8", category="health", occurred_on=date(2025, 3, 2))

    view = asyncio.run(dashboard.load_history(stores, MARCH, category="health"))
    everything = asyncio.run(dashboard.load_history(stores, MARCH))

    assert [e.category for e in view.expenses] == ["health"]
    assert view.total == Decimal("8")
    assert everything.total == Decimal("13")


def test_movements_merge_both_kinds(stores, expense_factory, income_factory):
    expense_factory(occurred_on=date(2025, 3, 2))
    income_factory(occurred_on=date(2025, 3, 9))

    movements = asyncio.run(dashboard.load_movements(stores, MARCH))

    assert [m.kind.value for m in movements] == ["income", "expense"]


class _CountingStore:
    """Wraps a transaction store and records each month it is asked for."""

    def __init__(self, inner):
        self.inner = inner
        self.months = []

    def list_for_month(self, year, month):
        self.months.append((year, month))
        return self.inner.list_for_month(year, month)


def test_stats_fetches_each_month_once(stores, expense_factory, income_factory):
    expense_factory(amount="40", occurred_on=date(2025, 3, 5))
    income_factory(amount="70", occurred_on=date(2025, 3, 6))
    expenses = _CountingStore(stores.expenses)
    incomes = _CountingStore(stores.incomes)

    snap = asyncio.run(
        dashboard.load_stats(replace(stores, expenses=expenses, incomes=incomes), MARCH, window_size=3)
    )

    assert sorted(expenses.months) == [(2025, 1), (2025, 2), (2025, 3)]
    assert sorted(incomes.months) == [(2025, 1), (2025, 2), (2025, 3)]
    assert (snap.history[-1].expenses, snap.history[-1].incomes) == (Decimal("40"), Decimal("70"))
