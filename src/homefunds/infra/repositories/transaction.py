"""SQLModel implementation of the expense/income repositories."""

from __future__ import annotations

from calendar import monthrange
from datetime import date
from typing import Generic, Optional, TypeVar

from sqlmodel import select

from ...errors import NotFound
from ...logging_config import get_logger
from ...models.transaction import MODEL_FOR_KIND, Expense, Income, TransactionKind
from ..database import SessionFactory

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", Expense, Income)


class SQLModelTransactionRepository(Generic[RecordT]):
    """SQLModel-based repository over one record kind."""

    def __init__(self, session_factory: SessionFactory, kind: TransactionKind):
        """Initialize with a session factory and the record kind to manage."""
        self.session_factory = session_factory
        self.kind = TransactionKind(kind)
        self.model = MODEL_FOR_KIND[self.kind]

    def get_by_id(self, transaction_id: int) -> Optional[RecordT]:
        """Retrieve a record by ID."""
        with self.session_factory() as session:
            obj = session.get(self.model, transaction_id)
            if obj:
                session.expunge(obj)
            return obj

    def filter_by_date_range(self, start_date: date, end_date: date) -> list[RecordT]:
        """Get records dated within ``[start_date, end_date]``, newest first."""
        with self.session_factory() as session:
            statement = (
                select(self.model)
                .where(self.model.occurred_on >= start_date)
                .where(self.model.occurred_on <= end_date)
                .order_by(self.model.occurred_on.desc(), self.model.id.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_for_month(self, year: int, month: int) -> list[RecordT]:
        """Get the records of one calendar month, newest first."""
        start_date = date(year, month, 1)
        end_date = date(year, month, monthrange(year, month)[1])
        return self.filter_by_date_range(start_date, end_date)

    def list_recent(self, count: int) -> list[RecordT]:
        """Get the ``count`` most recent records across all periods."""
        with self.session_factory() as session:
            statement = (
                select(self.model)
                .order_by(self.model.occurred_on.desc(), self.model.id.desc())  # type: ignore
                .limit(max(count, 0))
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, record: RecordT) -> RecordT:
        """Create a new record."""
        if not isinstance(record, self.model):
            raise TypeError(f"{self.kind.value} repository cannot store {type(record).__name__}")
        with self.session_factory() as session:
            session.add(record)
            session.commit()
            session.refresh(record)
            session.expunge(record)
        logger.info(
            "Created %s", self.kind.value, extra={"record_id": record.id, "amount": record.amount}
        )
        return record

    def delete(self, transaction_id: int) -> None:
        """Delete a record by ID."""
        with self.session_factory() as session:
            record = session.get(self.model, transaction_id)
            if record is None:
                raise NotFound(self.kind.value, transaction_id)
            session.delete(record)
            session.commit()
        logger.info("Deleted %s", self.kind.value, extra={"record_id": transaction_id})


def expense_repository(session_factory: SessionFactory) -> SQLModelTransactionRepository[Expense]:
    return SQLModelTransactionRepository(session_factory, TransactionKind.EXPENSE)


def income_repository(session_factory: SessionFactory) -> SQLModelTransactionRepository[Income]:
    return SQLModelTransactionRepository(session_factory, TransactionKind.INCOME)
