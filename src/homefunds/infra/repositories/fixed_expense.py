"""SQLModel implementation of FixedExpense repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...errors import NotFound
from ...logging_config import get_logger
from ...models.fixed_expense import FixedExpense
from ..database import SessionFactory

logger = get_logger(__name__)


class SQLModelFixedExpenseRepository:
    """SQLModel-based fixed expense repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, fixed_expense_id: int) -> Optional[FixedExpense]:
        """Retrieve a fixed expense by ID."""
        with self.session_factory() as session:
            obj = session.get(FixedExpense, fixed_expense_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[FixedExpense]:
        """List all fixed expenses ordered by name."""
        with self.session_factory() as session:
            statement = select(FixedExpense).order_by(FixedExpense.name, FixedExpense.id)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, fixed_expense: FixedExpense) -> FixedExpense:
        """Create a new fixed expense."""
        with self.session_factory() as session:
            session.add(fixed_expense)
            session.commit()
            session.refresh(fixed_expense)
            session.expunge(fixed_expense)
        logger.info("Created fixed expense", extra={"record_id": fixed_expense.id})
        return fixed_expense

    def update(self, fixed_expense: FixedExpense) -> FixedExpense:
        """Update an existing fixed expense."""
        if fixed_expense.id is None:
            raise NotFound("fixed_expense", None)
        with self.session_factory() as session:
            if session.get(FixedExpense, fixed_expense.id) is None:
                raise NotFound("fixed_expense", fixed_expense.id)
            merged = session.merge(fixed_expense)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def delete(self, fixed_expense_id: int) -> None:
        """Delete a fixed expense by ID."""
        with self.session_factory() as session:
            fixed_expense = session.get(FixedExpense, fixed_expense_id)
            if fixed_expense is None:
                raise NotFound("fixed_expense", fixed_expense_id)
            session.delete(fixed_expense)
            session.commit()
        logger.info("Deleted fixed expense", extra={"record_id": fixed_expense_id})
