"""Display helpers. Rounding of money happens here and nowhere earlier."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from .aggregation import as_decimal


def round_money(amount: Decimal, decimals: int = 2) -> Decimal:
    """Round half-up to ``decimals`` places."""

    exponent = Decimal(1).scaleb(-decimals)
    return as_decimal(amount).quantize(exponent, rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal, decimals: int = 2, symbol: str = "$") -> str:
    """``Decimal("1234.5")`` -> ``"$1,234.50"``; negatives get a leading minus."""

    rounded = round_money(amount, decimals)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.{decimals}f}"


def format_percent(value: float, decimals: int = 0, *, signed: bool = False) -> str:
    rounded = round_money(Decimal(str(value)), decimals)
    if rounded == 0:
        rounded = abs(rounded)  # no "-0%"
    text = f"{rounded:.{decimals}f}%"
    if signed and rounded > 0:
        return f"+{text}"
    return text


__all__ = ["format_currency", "format_percent", "round_money"]
