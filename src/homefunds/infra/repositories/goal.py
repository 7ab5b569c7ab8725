"""SQLModel implementation of Goal repository."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import update
from sqlmodel import select

from ...errors import NotFound
from ...logging_config import get_logger
from ...models.goal import Goal
from ..database import SessionFactory

logger = get_logger(__name__)


class SQLModelGoalRepository:
    """SQLModel-based goal repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, goal_id: int) -> Optional[Goal]:
        """Retrieve a goal by ID."""
        with self.session_factory() as session:
            obj = session.get(Goal, goal_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[Goal]:
        """List all goals ordered by name."""
        with self.session_factory() as session:
            statement = select(Goal).order_by(Goal.name, Goal.id)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, goal: Goal) -> Goal:
        """Create a new goal."""
        with self.session_factory() as session:
            session.add(goal)
            session.commit()
            session.refresh(goal)
            session.expunge(goal)
        logger.info("Created goal", extra={"record_id": goal.id})
        return goal

    def increment_saved(self, goal_id: int, delta: Decimal) -> None:
        """Add ``delta`` to ``saved_amount`` in a single UPDATE statement.

        The addition happens inside the database, so concurrent contributions
        from several members never overwrite each other.
        """
        statement = (
            update(Goal)
            .where(Goal.id == goal_id)  # type: ignore
            .values(saved_amount=Goal.saved_amount + delta)  # type: ignore
        )
        with self.session_factory() as session:
            result = session.connection().execute(statement)
            if result.rowcount == 0:
                raise NotFound("goal", goal_id)
            session.commit()
        logger.info("Incremented goal savings", extra={"record_id": goal_id, "delta": delta})

    def delete(self, goal_id: int) -> None:
        """Delete a goal by ID."""
        with self.session_factory() as session:
            goal = session.get(Goal, goal_id)
            if goal is None:
                raise NotFound("goal", goal_id)
            session.delete(goal)
            session.commit()
        logger.info("Deleted goal", extra={"record_id": goal_id})
