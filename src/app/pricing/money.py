"""Cent-precision money helpers

All charge arithmetic runs on integer cents. Decimals are accepted only at
the input boundary (persisted columns, config) and produced only for
output (DTOs, documents).
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

MoneyInput = Optional[Union[Decimal, int, float, str]]

_ONE = Decimal("1")


def _as_decimal(value: MoneyInput) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # repr keeps the shortest round-trip form: 0.1 -> "0.1"
        return Decimal(repr(value))
    return Decimal(value)


def round_half_up(value: Decimal) -> int:
    """Round a decimal to the nearest integer, halves away from zero"""
    return int(value.quantize(_ONE, rounding=ROUND_HALF_UP))


def to_minor_units(value: MoneyInput) -> int:
    """Convert a currency amount to integer cents (round-half-up, None -> 0)"""
    return round_half_up(_as_decimal(value) * 100)


def from_minor_units(cents: int) -> Decimal:
    """Convert integer cents back to a two-place decimal"""
    return Decimal(int(cents)).scaleb(-2)


def apply_rate(cents: int, rate: MoneyInput) -> int:
    """Multiply an amount in cents by a fractional rate, rounding once"""
    return round_half_up(Decimal(int(cents)) * _as_decimal(rate))


def per_day(cents: int, days: int) -> int:
    """Average daily amount in cents; 0 when there are no days"""
    if days <= 0:
        return 0
    return round_half_up(Decimal(int(cents)) / days)


def format_money(cents: int) -> str:
    """Format cents as $X.XX (negative amounts as -$X.XX)"""
    sign = "-" if cents < 0 else ""
    whole, fraction = divmod(abs(int(cents)), 100)
    return f"{sign}${whole}.{fraction:02d}"


def format_amount(value: MoneyInput) -> str:
    """Format a decimal currency amount as $X.XX"""
    return format_money(to_minor_units(value))


def format_percent(rate: MoneyInput) -> str:
    """Format a fractional rate as a percentage: 0.07 -> 7%, 0.075 -> 7.5%"""
    percent = (_as_decimal(rate) * 100).normalize()
    text = format(percent, "f")
    return f"{text}%"
