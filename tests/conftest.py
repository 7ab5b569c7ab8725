"""Pytest configuration and shared fixtures for HomeFunds tests.

Provides a throwaway SQLite file per test, the real session factory and
repositories on top of it, and factories for persisted records. Nothing here
touches the real data directory.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

import pytest

from homefunds.config import BaseConfig
from homefunds.infra.database import create_db_engine, create_session_factory, init_database
from homefunds.infra.repositories import (
    SQLModelFixedExpenseRepository,
    SQLModelGoalRepository,
    SQLModelSettingsRepository,
    expense_repository,
    income_repository,
)
from homefunds.logging_config import LOGGER_NAMESPACE
from homefunds.models import Expense, FixedExpense, Goal, Income
from homefunds.services.dashboard import HouseholdStores
from homefunds.services.ledger_service import Member

# =============================================================================
# Configuration & Database Fixtures
# =============================================================================


@pytest.fixture
def config(tmp_path, monkeypatch) -> BaseConfig:
    """Configuration pointing at a per-test data directory."""

    monkeypatch.setenv("HOMEFUNDS_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("HOMEFUNDS_DEV_MODE", "false")
    monkeypatch.delenv("HOMEFUNDS_DATABASE_URL", raising=False)
    monkeypatch.delenv("HOMEFUNDS_HISTORY_WINDOW", raising=False)
    monkeypatch.delenv("HOMEFUNDS_RECENT_COUNT", raising=False)
    monkeypatch.setenv("HOMEFUNDS_MEMBER_ID", "u-ana")
    monkeypatch.setenv("HOMEFUNDS_MEMBER_NAME", "Ana")
    return BaseConfig()


@pytest.fixture
def db_engine(config):
    """Fresh SQLite file with the full schema.

    Yields:
        Engine: engine built exactly as the application builds it
    """
    engine = create_db_engine(config)
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Session factory producing committed/rolled-back transactional scopes."""

    return create_session_factory(db_engine)


@pytest.fixture(autouse=True)
def _reset_homefunds_logging():
    """Drop handlers installed by ``setup_logging`` so tests never share them."""

    yield
    logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def expense_repo(session_factory):
    return expense_repository(session_factory)


@pytest.fixture
def income_repo(session_factory):
    return income_repository(session_factory)


@pytest.fixture
def settings_repo(session_factory):
    return SQLModelSettingsRepository(session_factory)


@pytest.fixture
def fixed_repo(session_factory):
    return SQLModelFixedExpenseRepository(session_factory)


@pytest.fixture
def goal_repo(session_factory):
    return SQLModelGoalRepository(session_factory)


@pytest.fixture
def stores(expense_repo, income_repo, settings_repo, fixed_repo, goal_repo) -> HouseholdStores:
    return HouseholdStores(
        expenses=expense_repo,
        incomes=income_repo,
        budget=settings_repo,
        fixed_expenses=fixed_repo,
        goals=goal_repo,
    )


@pytest.fixture
def member() -> Member:
    return Member(user_id="u-ana", user_name="Ana")


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def expense_factory(expense_repo, member):
    """Factory for persisted expenses.

    Returns:
        Callable: creates an Expense through the repository and returns it
    """

    def _create_expense(
        amount: Decimal | str = "10.00",
        category: str = "food",
        occurred_on: date | None = None,
        description: str = "Test expense",
        who: Member | None = None,
    ) -> Expense:
        who = who or member
        return expense_repo.create(
            Expense(
                amount=Decimal(str(amount)),
                description=description,
                category=category,
                user_id=who.user_id,
                user_name=who.user_name,
                occurred_on=occurred_on or date.today(),
            )
        )

    return _create_expense


@pytest.fixture
def income_factory(income_repo, member):
    """Factory for persisted incomes."""

    def _create_income(
        amount: Decimal | str = "100.00",
        source: str = "salary",
        occurred_on: date | None = None,
        description: str = "Test income",
        who: Member | None = None,
    ) -> Income:
        who = who or member
        return income_repo.create(
            Income(
                amount=Decimal(str(amount)),
                description=description,
                source=source,
                user_id=who.user_id,
                user_name=who.user_name,
                occurred_on=occurred_on or date.today(),
            )
        )

    return _create_income


@pytest.fixture
def goal_factory(goal_repo, member):
    """Factory for persisted savings goals."""

    def _create_goal(
        name: str = "Holiday",
        target_amount: Decimal | str = "1000.00",
        saved_amount: Decimal | str = "0",
    ) -> Goal:
        return goal_repo.create(
            Goal(
                name=name,
                target_amount=Decimal(str(target_amount)),
                saved_amount=Decimal(str(saved_amount)),
                created_by=member.user_id,
            )
        )

    return _create_goal


@pytest.fixture
def fixed_factory(fixed_repo, member):
    """Factory for persisted fixed expenses."""

    def _create_fixed(
        name: str = "Rent",
        amount: Decimal | str = "800.00",
        category: str = "home",
        day_of_month: int = 1,
    ) -> FixedExpense:
        return fixed_repo.create(
            FixedExpense(
                name=name,
                amount=Decimal(str(amount)),
                category=category,
                day_of_month=day_of_month,
                created_by=member.user_id,
            )
        )

    return _create_fixed
