"""Goal repository protocol."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol

from ...models.goal import Goal


class GoalRepository(Protocol):
    """Repository for savings goals."""

    def get_by_id(self, goal_id: int) -> Optional[Goal]:
        """Retrieve a goal by ID."""
        ...

    def list_all(self) -> list[Goal]:
        """All goals ordered by name."""
        ...

    def create(self, goal: Goal) -> Goal:
        """Create a new goal."""
        ...

    def increment_saved(self, goal_id: int, delta: Decimal) -> None:
        """Atomically add ``delta`` to the stored ``saved_amount``."""
        ...

    def delete(self, goal_id: int) -> None:
        """Delete a goal by ID."""
        ...
