"""Helpers for parsing scale-display numbers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

__all__ = ["parse_scale_number", "insert_decimal", "round_half_up", "to_kilograms"]

POUND_TO_KG = Decimal("0.453592")


def parse_scale_number(raw: str) -> Optional[Decimal]:
    """Parse '97.4', '97,4' or '974' into a Decimal, or None when unusable."""
    if not raw:
        return None
    value = raw.strip().replace(",", ".")
    if not value:
        return None
    try:
        number = Decimal(value)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def insert_decimal(digits: str) -> Optional[Decimal]:
    """Place a decimal point before the last digit: '974' -> 97.4, '5' -> 0.5."""
    if not digits or not digits.isdigit():
        return None
    return parse_scale_number(f"{digits[:-1]}.{digits[-1]}")


def round_half_up(value: Decimal, places: int = 1) -> Decimal:
    q = Decimal(1).scaleb(-places)
    return value.quantize(q, rounding=ROUND_HALF_UP)


def to_kilograms(pounds: Decimal) -> Decimal:
    return pounds * POUND_TO_KG
