# pricing/engine/price_normalizer.py

"""
PRICE NORMALIZER

Maps a (possibly tax-inclusive) selling price onto a canonical tax-exclusive
base price so every downstream figure is computed from the same value:

    EXCLUSIVE        base = price                 display = price * (1 + r/100)
    INCLUSIVE_SPLIT  base = price / (1 + r/100)   display = price
    INCLUSIVE_MRP    base = price                 display = price

Line totals are ALWAYS base_price * quantity.
"""

from __future__ import annotations

from decimal import Decimal

from .money import HUNDRED, ONE, ZERO
from .types import NormalizedPrice, PricingMode


def normalize_price(price: Decimal, rate: Decimal, mode: PricingMode) -> NormalizedPrice:
    if mode is PricingMode.EXCLUSIVE:
        return NormalizedPrice(
            base_price=price,
            display_price=price * (ONE + rate / HUNDRED),
        )

    if mode is PricingMode.INCLUSIVE_SPLIT:
        # r == 0: nothing to extract
        if rate <= ZERO:
            return NormalizedPrice(base_price=price, display_price=price)
        return NormalizedPrice(
            base_price=price / (ONE + rate / HUNDRED),
            display_price=price,
        )

    if mode is PricingMode.INCLUSIVE_MRP:
        return NormalizedPrice(base_price=price, display_price=price)

    raise ValueError(f"Unsupported pricing mode: {mode!r}")


def extract_included_tax(gross: Decimal, rate: Decimal) -> Decimal:
    """Tax contained in a tax-inclusive amount (MRP analytics)."""
    if rate <= ZERO:
        return ZERO
    return gross - gross / (ONE + rate / HUNDRED)
