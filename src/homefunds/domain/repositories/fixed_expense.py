"""Fixed expense repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.fixed_expense import FixedExpense


class FixedExpenseRepository(Protocol):
    """Repository for recurring monthly obligations."""

    def get_by_id(self, fixed_expense_id: int) -> Optional[FixedExpense]:
        """Retrieve a fixed expense by ID."""
        ...

    def list_all(self) -> list[FixedExpense]:
        """All fixed expenses ordered by name."""
        ...

    def create(self, fixed_expense: FixedExpense) -> FixedExpense:
        """Create a new fixed expense."""
        ...

    def update(self, fixed_expense: FixedExpense) -> FixedExpense:
        """Update an existing fixed expense."""
        ...

    def delete(self, fixed_expense_id: int) -> None:
        """Delete a fixed expense by ID."""
        ...
