from __future__ import annotations

from decimal import Decimal


def format_amount(value: float) -> str:
    """Plain decimal text for a money amount: 1234567 -> "1234567", 12.5 -> "12.5". Never uses an exponent."""
    v = float(value)
    if v.is_integer():
        return str(int(v))
    return format(Decimal(repr(v)), "f")
