from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

MINOR_UNITS_PER_MAJOR = 100


def round_half_up(value: Union[Decimal, int]) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_minor_units(amount: Decimal) -> int:
    return round_half_up(Decimal(amount) * MINOR_UNITS_PER_MAJOR)


def normalize_currency(code: str) -> str:
    return (code or "").strip().upper()
