# finances/money.py
"""
Currency helpers.

Every figure we store or return goes through round_money():
- 2 decimal places
- half away from zero (1.005 -> 1.01, -1.005 -> -1.01)
- based on the float's shortest repr, so 2.675 rounds like a person would (2.68)
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from finances.errors import InvalidInputError

CENT = Decimal("0.01")

__all__ = ["CENT", "coerce_money", "round_money"]


def coerce_money(value) -> float:
    """
    Turn a raw numeric value (float, int, Decimal, numeric string) into float.
    None, NaN and anything non-numeric become 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return 0.0
    if not number.is_finite():
        return 0.0
    return float(number)


def round_money(value: float) -> float:
    """Round a currency value to 2 decimals, half away from zero."""
    number = Decimal(repr(float(value)))
    if not number.is_finite():
        raise InvalidInputError("Amount must be a finite number")
    # enough digits for any finite float quantized to cents
    with localcontext() as ctx:
        ctx.prec = 400
        # Decimal's ROUND_HALF_UP rounds ties away from zero for negatives too.
        return float(number.quantize(CENT, rounding=ROUND_HALF_UP))
