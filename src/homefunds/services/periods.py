"""Calendar-month periods used as the aggregation window."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MONTH_SHORT = tuple(name[:3] for name in MONTH_NAMES)


@dataclass(frozen=True, slots=True, order=True)
class Period:
    """A calendar month identified by ``(year, month)``; month is 1-based."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")

    @classmethod
    def of(cls, value: date) -> "Period":
        return cls(value.year, value.month)

    @classmethod
    def current(cls, today: date | None = None) -> "Period":
        return cls.of(today or date.today())

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, monthrange(self.year, self.month)[1])

    def shift(self, months: int) -> "Period":
        """Return the period ``months`` away (negative goes back in time)."""
        index = self.year * 12 + (self.month - 1) + months
        return Period(index // 12, index % 12 + 1)

    def previous(self) -> "Period":
        return self.shift(-1)

    def next(self) -> "Period":
        return self.shift(1)

    def trailing(self, window: int) -> list["Period"]:
        """The ``window`` periods ending at this one, oldest first."""
        return [self.shift(-offset) for offset in range(window - 1, -1, -1)]

    def label(self, *, short: bool = True) -> str:
        return month_short(self.month) if short else month_name(self.month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]


def month_short(month: int) -> str:
    return MONTH_SHORT[month - 1]


def parse_period(raw: str) -> Period:
    """Parse ``YYYY-MM`` into a :class:`Period`."""

    try:
        year_text, month_text = raw.strip().split("-", 1)
        return Period(int(year_text), int(month_text))
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Expected a period like 2025-03, got {raw!r}") from exc


__all__ = ["MONTH_NAMES", "MONTH_SHORT", "Period", "month_name", "month_short", "parse_period"]
