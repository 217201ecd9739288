# pricing/services/context.py

"""
ENGINE INPUT BUILDERS (DJANGO -> ENGINE)

Purpose:
- Turn cart rows, store settings and promotion rows into the plain engine
  value objects (LineItem, TaxSettings, PromotionContext).
- Keep every DB read out of the engine.

Failure policy:
- Product discount / loyalty reads that fail degrade to "no promotion"
  (logged at WARNING). A cashier can always bill.
- An unknown, inactive or expired coupon code is an operator error and raises
  CouponError so the counter can show it.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from django.db import DatabaseError, transaction

from pricing.engine import LineItem, PromotionContext, TaxSettings
from promotions.models import Coupon, ProductDiscount
from promotions.services.loyalty import build_redemption
from store.models import BillingSettings

logger = logging.getLogger(__name__)


class CouponError(Exception):
    """Coupon code cannot be applied"""


class UnknownCouponError(CouponError):
    pass


class ExpiredCouponError(CouponError):
    pass


# =====================================================
# LINE ITEMS
# =====================================================


def line_items_from_cart(cart_items: Iterable) -> list[LineItem]:
    """
    Cart rows -> engine lines.

    The catalog price comes from the cart snapshot; tax rates and price type
    come from the product as it stands now.
    """
    lines = []
    for item in cart_items:
        product = item.product
        lines.append(
            LineItem.build(
                product_ref=product.pk,
                quantity=item.quantity,
                catalog_price=item.unit_price,
                cgst_rate=product.cgst_rate,
                sgst_rate=product.sgst_rate,
                igst_rate=product.igst_rate,
                price_type=product.price_type,
                name=product.name,
            )
        )
    return lines


# =====================================================
# TAX SETTINGS
# =====================================================


def tax_settings_for_store(store, *, igst_override=None, additional_tax_rate=None) -> TaxSettings:
    return BillingSettings.for_store(store).to_tax_settings(
        igst_override=igst_override,
        additional_tax_rate=additional_tax_rate,
    )


# =====================================================
# PROMOTIONS
# =====================================================


def _product_discount_rules(product_ids, *, now: datetime) -> dict:
    """
    Active discount per product. When windows overlap the most recently
    started one wins.
    """
    if not product_ids:
        return {}

    try:
        with transaction.atomic():
            rows = list(
                ProductDiscount.objects.filter(
                    product_id__in=list(product_ids),
                    is_active=True,
                    start_at__lte=now,
                    end_at__gte=now,
                ).order_by("product_id", "-start_at")
            )
    except DatabaseError:
        logger.warning("Product discount lookup failed; billing without product discounts", exc_info=True)
        return {}

    rules = {}
    for row in rows:
        rules.setdefault(str(row.product_id), row.to_rule())
    return rules


def resolve_coupon(store, code, *, now: datetime) -> Coupon | None:
    code = (code or "").strip().upper()
    if not code:
        return None

    coupon = Coupon.objects.filter(store=store, code=code).first()
    if coupon is None:
        raise UnknownCouponError(f"Coupon '{code}' does not exist")
    if not coupon.is_valid_at(now):
        raise ExpiredCouponError(f"Coupon '{code}' is not active")
    return coupon


def _loyalty_redemption(store, customer_phone, redeem_points):
    if not (customer_phone or "").strip():
        return None
    try:
        with transaction.atomic():
            return build_redemption(
                store=store,
                customer_phone=customer_phone,
                points_requested=redeem_points,
            )
    except DatabaseError:
        logger.warning(
            "Loyalty lookup failed; billing without redemption",
            extra={"store_id": str(store.pk)},
            exc_info=True,
        )
        return None


def promotion_context(
    *,
    store,
    product_ids,
    now: datetime,
    coupon_code: str = "",
    customer_phone: str = "",
    redeem_points: int = 0,
) -> PromotionContext:
    coupon = resolve_coupon(store, coupon_code, now=now)

    return PromotionContext(
        product_discounts=_product_discount_rules(product_ids, now=now),
        coupon=coupon.to_rule() if coupon else None,
        loyalty=_loyalty_redemption(store, customer_phone, redeem_points),
    )
