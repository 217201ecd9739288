"""
PATH: pricing/engine/__init__.py

Pricing engine export surface.

The engine is pure: no Django, no I/O. Django adapters live in pricing.services.
"""

from .discount_stacker import max_redeemable_points
from .invoice_sequencer import format_bill_number
from .money import money, to_decimal
from .price_normalizer import normalize_price
from .tax_resolver import resolve_tax_rates
from .totals import calculate_breakdown, price_line, redeemable_points_for
from .types import (
    Breakdown,
    CouponRule,
    DiscountKind,
    InclusiveVariant,
    LineItem,
    LoyaltyRedemption,
    PricedLine,
    PriceType,
    PricingMode,
    ProductDiscountRule,
    PromotionContext,
    TaxMode,
    TaxRates,
    TAX_NOTES,
    TaxSettings,
    TradeType,
)

__all__ = [
    "Breakdown",
    "CouponRule",
    "DiscountKind",
    "InclusiveVariant",
    "LineItem",
    "LoyaltyRedemption",
    "PricedLine",
    "PriceType",
    "PricingMode",
    "ProductDiscountRule",
    "PromotionContext",
    "TaxMode",
    "TaxRates",
    "TaxSettings",
    "TradeType",
    "TAX_NOTES",
    "calculate_breakdown",
    "format_bill_number",
    "max_redeemable_points",
    "money",
    "normalize_price",
    "price_line",
    "redeemable_points_for",
    "resolve_tax_rates",
    "to_decimal",
]
