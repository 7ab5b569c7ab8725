"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, create_db_engine, create_session_factory, init_database
from .infra.repositories import (
    SQLModelFixedExpenseRepository,
    SQLModelGoalRepository,
    SQLModelSettingsRepository,
    SQLModelTransactionRepository,
    expense_repository,
    income_repository,
)
from .models.transaction import Expense, Income
from .services.dashboard import HouseholdStores
from .services.ledger_service import Member


@dataclass
class AppContext:
    """Centralized application context with repositories and the acting member."""

    # Configuration
    config: BaseConfig

    # Database
    engine: Engine
    session_factory: SessionFactory

    # Repositories
    expense_repo: SQLModelTransactionRepository[Expense]
    income_repo: SQLModelTransactionRepository[Income]
    settings_repo: SQLModelSettingsRepository
    fixed_expense_repo: SQLModelFixedExpenseRepository
    goal_repo: SQLModelGoalRepository

    member: Member
    stores: HouseholdStores = field(init=False)

    def __post_init__(self) -> None:
        self.stores = HouseholdStores(
            expenses=self.expense_repo,
            incomes=self.income_repo,
            budget=self.settings_repo,
            fixed_expenses=self.fixed_expense_repo,
            goals=self.goal_repo,
        )

    def dispose(self) -> None:
        self.engine.dispose()


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        expense_repo=expense_repository(session_factory),
        income_repo=income_repository(session_factory),
        settings_repo=SQLModelSettingsRepository(
            session_factory, budget_key=config.BUDGET_SETTING_KEY
        ),
        fixed_expense_repo=SQLModelFixedExpenseRepository(session_factory),
        goal_repo=SQLModelGoalRepository(session_factory),
        member=Member(user_id=config.MEMBER_ID, user_name=config.MEMBER_NAME),
    )
