# pricing/engine/discount_stacker.py

"""
DISCOUNT STACKER

Fixed order (reordering changes results and is a bug):
1) product discount   per line, BEFORE tax normalization
2) coupon             once, on subtotal + tax (or plain subtotal in MRP mode)
3) additional tax     optional surcharge on the post-coupon amount
4) loyalty            points redemption on what is left

Every step clamps silently. Nothing here raises for an over-sized promotion;
the running amount never goes below zero.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_FLOOR
from typing import Optional

from .money import HUNDRED, ZERO, non_negative, percent_of, to_decimal
from .types import (
    CouponRule,
    DiscountKind,
    LoyaltyRedemption,
    ProductDiscountRule,
    TradeType,
)

logger = logging.getLogger(__name__)

TWO = Decimal("2")


@dataclass(frozen=True)
class ProductDiscountEffect:
    effective_price: Decimal
    unit_discount: Decimal
    label: str = ""


@dataclass(frozen=True)
class AdditionalTaxEffect:
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.cgst + self.sgst + self.igst


@dataclass(frozen=True)
class LoyaltyEffect:
    points: int = 0
    amount: Decimal = ZERO


# ============================================================
# 1) PRODUCT DISCOUNT
# ============================================================


def apply_product_discount(
    price: Decimal,
    rule: Optional[ProductDiscountRule],
    *,
    now: datetime,
) -> ProductDiscountEffect:
    if rule is None or not rule.is_active_at(now):
        return ProductDiscountEffect(effective_price=price, unit_discount=ZERO)

    value = non_negative(to_decimal(rule.value))
    if value == ZERO:
        return ProductDiscountEffect(effective_price=price, unit_discount=ZERO)

    if rule.kind == DiscountKind.PERCENTAGE:
        effective = price * (1 - min(value, HUNDRED) / HUNDRED)
    else:
        effective = price - value

    effective = non_negative(effective)
    return ProductDiscountEffect(
        effective_price=effective,
        unit_discount=price - effective,
        label=rule.label,
    )


# ============================================================
# 2) COUPON
# ============================================================


def coupon_discount(base: Decimal, coupon: Optional[CouponRule]) -> Decimal:
    if coupon is None or base <= ZERO:
        return ZERO

    value = non_negative(to_decimal(coupon.value))
    if value == ZERO:
        return ZERO

    if coupon.kind == DiscountKind.PERCENTAGE:
        amount = percent_of(base, value)
    else:
        amount = value

    if amount > base:
        logger.debug(
            "Coupon clamped to order value",
            extra={"coupon": coupon.code, "requested": str(amount), "base": str(base)},
        )
        return base
    return amount


# ============================================================
# 3) ADDITIONAL TAX
# ============================================================


def additional_tax(amount: Decimal, rate, trade_type: TradeType) -> AdditionalTaxEffect:
    rate = non_negative(to_decimal(rate))
    if rate == ZERO or amount <= ZERO:
        return AdditionalTaxEffect()

    extra = percent_of(amount, rate)
    if trade_type == TradeType.INTER_STATE:
        return AdditionalTaxEffect(igst=extra)

    half = extra / TWO
    return AdditionalTaxEffect(cgst=half, sgst=extra - half)


# ============================================================
# 4) LOYALTY
# ============================================================


def max_redeemable_points(amount: Decimal, redemption: Optional[LoyaltyRedemption]) -> int:
    """
    Highest point count the order can absorb: min(balance, floor(amount / rupees_per_point)).

    Used both for clamping and for pre-filling the redeem box at the counter.
    """
    if redemption is None or not redemption.is_offered or amount <= ZERO:
        return 0

    absorbable = int((amount / redemption.rupees_per_point).to_integral_value(rounding=ROUND_FLOOR))
    return max(0, min(int(redemption.points_available), absorbable))


def loyalty_discount(amount: Decimal, redemption: Optional[LoyaltyRedemption]) -> LoyaltyEffect:
    if redemption is None or not redemption.is_offered:
        return LoyaltyEffect()

    requested = int(redemption.points_requested or 0)
    if requested <= 0:
        return LoyaltyEffect()

    points = min(requested, max_redeemable_points(amount, redemption))
    if points < requested:
        logger.debug(
            "Loyalty redemption clamped",
            extra={
                "requested": requested,
                "granted": points,
                "available": redemption.points_available,
            },
        )

    return LoyaltyEffect(points=points, amount=Decimal(points) * redemption.rupees_per_point)
