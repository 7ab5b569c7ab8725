"""Budget setting repository protocol."""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol


class BudgetSettingRepository(Protocol):
    """Singleton monthly budget for the household."""

    def get_budget(self) -> Decimal:
        """Return the monthly budget, ``Decimal(0)`` when unset."""
        ...

    def set_budget(self, amount: Decimal) -> None:
        """Upsert the monthly budget."""
        ...
