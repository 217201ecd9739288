# pricing/services/quote.py

"""
CART QUOTE SERVICE

One call from a POS cart to a Breakdown. Every screen and the checkout use
this path, so the summary a cashier sees is the figure that gets billed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from django.utils import timezone

from pricing.engine import Breakdown, calculate_breakdown, redeemable_points_for

from .context import line_items_from_cart, promotion_context, tax_settings_for_store


@dataclass(frozen=True)
class CartQuote:
    breakdown: Breakdown
    max_redeemable_points: int = 0
    loyalty_balance: int = 0


def quote_cart(
    *,
    cart,
    now: datetime | None = None,
    cart_items=None,
    coupon_code: str = "",
    customer_phone: str = "",
    redeem_points: int = 0,
    additional_tax_rate=None,
    igst_override=None,
    bill_number: str = "",
) -> CartQuote:
    """
    Price the cart as it stands.

    cart_items may be passed in when the caller already holds locked rows
    (checkout); otherwise they are read from the cart.
    """
    now = now or timezone.now()
    store = cart.store

    if cart_items is None:
        cart_items = list(cart.items.select_related("product"))

    lines = line_items_from_cart(cart_items)
    tax_settings = tax_settings_for_store(
        store,
        igst_override=igst_override,
        additional_tax_rate=additional_tax_rate,
    )
    promotions = promotion_context(
        store=store,
        product_ids=[item.product_id for item in cart_items],
        now=now,
        coupon_code=coupon_code,
        customer_phone=customer_phone,
        redeem_points=redeem_points,
    )

    breakdown = calculate_breakdown(
        lines,
        tax_settings=tax_settings,
        promotions=promotions,
        now=now,
        bill_number=bill_number,
    )

    loyalty = promotions.loyalty
    return CartQuote(
        breakdown=breakdown,
        max_redeemable_points=redeemable_points_for(
            lines, tax_settings=tax_settings, promotions=promotions, now=now
        ),
        loyalty_balance=loyalty.points_available if loyalty else 0,
    )
