# pricing/engine/money.py

"""
MONEY HELPERS (ENGINE)

Rules:
- Engine arithmetic runs on unrounded Decimals.
- Rounding to 2dp happens ONLY when a value is rendered or persisted.
- Garbage in (None, "", non-numeric) degrades to zero instead of raising.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")
TWOPLACES = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if value is None or value == "":
        return ZERO

    if isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO

    try:
        out = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO

    return out if out.is_finite() else ZERO


def non_negative(value: Decimal) -> Decimal:
    return value if value > ZERO else ZERO


def percent_of(amount: Decimal, rate: Decimal) -> Decimal:
    return amount * rate / HUNDRED


def money(value) -> Decimal:
    """Quantize to 2dp (render/persist boundary only)."""
    return to_decimal(value).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
