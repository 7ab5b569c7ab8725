"""Aggregation engine: pure reductions from transactions to monthly metrics.

Nothing here performs I/O or keeps state. Amounts are accumulated as
``Decimal`` so many small cents never drift; rounding for display lives in
:mod:`homefunds.services.formatting`. Inputs are assumed to come from a store
that validated them on write, so amounts are non-negative and well typed.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Hashable, Iterable, Protocol, Sequence

from .periods import Period

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class HasAmount(Protocol):
    amount: Decimal


@dataclass(frozen=True, slots=True)
class BreakdownEntry:
    """One group of a breakdown: its key, summed total and share of the whole."""

    key: str
    total: Decimal
    percent: float


@dataclass(frozen=True, slots=True)
class MonthTotals:
    """Pre-aggregated totals of one month, as supplied by the caller."""

    expenses: Decimal = ZERO
    incomes: Decimal = ZERO


@dataclass(frozen=True, slots=True)
class SeriesPoint:
    """A labelled month in a historical series."""

    period: Period
    label: str
    expenses: Decimal
    incomes: Decimal

    @property
    def balance(self) -> Decimal:
        return balance(self.expenses, self.incomes)


def as_decimal(value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.1 as Decimal("0.1") instead of the binary float expansion
    return Decimal(str(value))


def month_total(transactions: Iterable[HasAmount]) -> Decimal:
    """Sum of ``amount`` over ``transactions``; zero for an empty input."""

    return sum((as_decimal(t.amount) for t in transactions), ZERO)


def balance(expense_total: Decimal, income_total: Decimal) -> Decimal:
    """Income minus expenses; negative when the household overspent."""

    return as_decimal(income_total) - as_decimal(expense_total)


def percent_of(part: Decimal, whole: Decimal) -> float:
    """``part / whole * 100`` as a float, zero when ``whole`` is zero."""

    if whole <= 0:
        return 0.0
    return float(as_decimal(part) / as_decimal(whole) * HUNDRED)


def group_totals(
    items: Iterable[HasAmount], key: Callable[[HasAmount], Hashable]
) -> list[BreakdownEntry]:
    """Group ``items`` by ``key``, sum amounts and sort descending by total.

    Ties keep first-encounter order (``sorted`` is stable and dicts keep
    insertion order).
    """

    totals: dict[Hashable, Decimal] = {}
    for item in items:
        bucket = key(item)
        totals[bucket] = totals.get(bucket, ZERO) + as_decimal(item.amount)

    grand_total = sum(totals.values(), ZERO)
    ordered = sorted(totals.items(), key=lambda pair: pair[1], reverse=True)
    return [
        BreakdownEntry(key=str(bucket), total=total, percent=percent_of(total, grand_total))
        for bucket, total in ordered
    ]


def category_breakdown(expenses: Iterable[HasAmount]) -> list[BreakdownEntry]:
    """Expense totals per category, largest first."""

    return group_totals(expenses, key=lambda e: getattr(e, "category"))


def source_breakdown(incomes: Iterable[HasAmount]) -> list[BreakdownEntry]:
    """Income totals per source, largest first."""

    return group_totals(incomes, key=lambda i: getattr(i, "source"))


def top_contributors(transactions: Iterable[HasAmount]) -> list[BreakdownEntry]:
    """Totals per member name, largest first."""

    return group_totals(transactions, key=lambda t: getattr(t, "user_name"))


def top_slices(breakdown: Sequence[BreakdownEntry], limit: int = 6) -> list[BreakdownEntry]:
    """Return the first ``limit`` entries of an already sorted breakdown."""

    return list(breakdown[: max(limit, 0)])


def month_over_month_change(current: Decimal, previous: Decimal) -> float:
    """Percent change from ``previous`` to ``current``.

    Zero when there is no prior spending to compare against.
    """

    previous = as_decimal(previous)
    if previous <= 0:
        return 0.0
    return float((as_decimal(current) - previous) / previous * HUNDRED)


def historical_series(
    monthly_totals: Sequence[MonthTotals],
    *,
    end: Period,
    window_size: int = 6,
) -> list[SeriesPoint]:
    """Label per-month totals for charting, oldest to newest.

    ``monthly_totals`` is ordered oldest first and its last entry belongs to
    ``end``. Only the trailing ``window_size`` entries are kept.
    """

    if window_size < 1:
        return []
    kept = list(monthly_totals)[-window_size:]
    periods = end.trailing(len(kept))
    return [
        SeriesPoint(
            period=period,
            label=period.label(),
            expenses=as_decimal(totals.expenses),
            incomes=as_decimal(totals.incomes),
        )
        for period, totals in zip(periods, kept)
    ]


def fixed_total(fixed_expenses: Iterable[HasAmount]) -> Decimal:
    """Sum of recurring obligations (informational; not part of monthly totals)."""

    return month_total(fixed_expenses)


__all__ = [
    "BreakdownEntry",
    "as_decimal",
    "MonthTotals",
    "SeriesPoint",
    "balance",
    "category_breakdown",
    "fixed_total",
    "group_totals",
    "historical_series",
    "month_over_month_change",
    "month_total",
    "percent_of",
    "source_breakdown",
    "top_contributors",
    "top_slices",
]
