"""Transaction repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, TypeVar

from ...models.transaction import Expense, Income, TransactionKind

RecordT = TypeVar("RecordT", Expense, Income)


class TransactionRepository(Protocol[RecordT]):
    """Store operations over one record kind (expenses or incomes)."""

    kind: TransactionKind

    def get_by_id(self, transaction_id: int) -> Optional[RecordT]:
        """Retrieve a record by ID."""
        ...

    def filter_by_date_range(self, start_date: date, end_date: date) -> list[RecordT]:
        """Records dated within ``[start_date, end_date]``, newest first."""
        ...

    def list_for_month(self, year: int, month: int) -> list[RecordT]:
        """Records of a calendar month (first to last day inclusive), newest first."""
        ...

    def list_recent(self, count: int) -> list[RecordT]:
        """The ``count`` most recent records regardless of period."""
        ...

    def create(self, record: RecordT) -> RecordT:
        """Persist a new record and return it with its id populated."""
        ...

    def delete(self, transaction_id: int) -> None:
        """Hard delete; raises ``NotFound`` when the id is absent."""
        ...
