# pricing/engine/totals.py

"""
TOTALS AGGREGATOR

(cart lines, TaxSettings, PromotionContext, now) -> Breakdown

Pure function:
- No I/O, no shared state, no rounding mid-calculation.
- Same inputs -> equal Breakdown (safe to recompute on every cart change).

Algorithm:
1) per line: resolve tax -> product discount -> normalize price
2) subtotal = sum(base * qty); per-type tax = sum(base * qty * rate / 100)
3) coupon on subtotal + product tax (MRP: on subtotal; product tax is not billed)
4) additional tax on the post-coupon amount
5) loyalty on the post-additional-tax amount
6) grand_total = max(0, result)

Invariants (hold for every mode):
- tax_amount  == cgst_total + sgst_total + igst_total
- grand_total == max(0, subtotal + tax_amount - coupon - loyalty)
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from .discount_stacker import (
    additional_tax,
    apply_product_discount,
    coupon_discount,
    loyalty_discount,
    max_redeemable_points,
)
from .money import ZERO, non_negative, percent_of
from .price_normalizer import extract_included_tax, normalize_price
from .tax_resolver import resolve_tax_rates
from .types import (
    Breakdown,
    LineItem,
    PricedLine,
    PromotionContext,
    TaxSettings,
)


def price_line(
    line: LineItem,
    *,
    tax_settings: TaxSettings,
    promotions: PromotionContext,
    now: datetime,
) -> PricedLine:
    mode = tax_settings.pricing_mode

    rates = resolve_tax_rates(
        line,
        tax_settings.trade_type,
        igst_override=tax_settings.igst_override,
    )

    discount = apply_product_discount(
        line.catalog_price,
        promotions.discount_for(line.product_ref),
        now=now,
    )

    normalized = normalize_price(discount.effective_price, rates.total, mode)
    line_base = normalized.base_price * line.quantity

    return PricedLine(
        product_ref=line.product_ref,
        name=line.name,
        quantity=line.quantity,
        price_type=line.price_type,
        catalog_price=line.catalog_price,
        effective_price=discount.effective_price,
        base_price=normalized.base_price,
        display_price=normalized.display_price,
        rates=rates,
        line_base=line_base,
        line_cgst=percent_of(line_base, rates.cgst),
        line_sgst=percent_of(line_base, rates.sgst),
        line_igst=percent_of(line_base, rates.igst),
        line_discount=discount.unit_discount * line.quantity,
        discount_label=discount.label,
    )


def _mrp_included_tax(priced: PricedLine) -> tuple:
    """Split the tax inside an MRP line proportionally to its rates."""
    rate = priced.rates.total
    if rate <= ZERO:
        return ZERO, ZERO, ZERO

    included = extract_included_tax(priced.line_base, rate)
    return (
        included * priced.rates.cgst / rate,
        included * priced.rates.sgst / rate,
        included * priced.rates.igst / rate,
    )


def calculate_breakdown(
    lines: Iterable[LineItem],
    *,
    tax_settings: TaxSettings,
    promotions: Optional[PromotionContext] = None,
    now: datetime,
    bill_number: str = "",
) -> Breakdown:
    promotions = promotions or PromotionContext.none()
    mode = tax_settings.pricing_mode

    priced = tuple(
        price_line(line, tax_settings=tax_settings, promotions=promotions, now=now)
        for line in lines
    )

    subtotal = sum((p.line_base for p in priced), ZERO)
    product_discount_total = sum((p.line_discount for p in priced), ZERO)

    line_cgst = sum((p.line_cgst for p in priced), ZERO)
    line_sgst = sum((p.line_sgst for p in priced), ZERO)
    line_igst = sum((p.line_igst for p in priced), ZERO)

    info_cgst = info_sgst = info_igst = ZERO

    if mode.bills_product_tax:
        product_cgst, product_sgst, product_igst = line_cgst, line_sgst, line_igst
    else:
        # MRP: prices are final; tax is reported for analytics only
        product_cgst = product_sgst = product_igst = ZERO
        for p in priced:
            c, s, i = _mrp_included_tax(p)
            info_cgst += c
            info_sgst += s
            info_igst += i

    product_tax = product_cgst + product_sgst + product_igst

    # 2) coupon
    coupon_base = subtotal + product_tax
    coupon_amount = coupon_discount(coupon_base, promotions.coupon)
    after_coupon = non_negative(coupon_base - coupon_amount)

    # 3) additional tax
    extra = additional_tax(after_coupon, tax_settings.additional_tax_rate, tax_settings.trade_type)
    after_extra = after_coupon + extra.total

    # 4) loyalty
    loyalty = loyalty_discount(after_extra, promotions.loyalty)

    cgst_total = product_cgst + extra.cgst
    sgst_total = product_sgst + extra.sgst
    igst_total = product_igst + extra.igst
    tax_amount = cgst_total + sgst_total + igst_total

    grand_total = non_negative(subtotal + tax_amount - coupon_amount - loyalty.amount)

    return Breakdown(
        mode=mode,
        trade_type=tax_settings.trade_type,
        lines=priced,
        subtotal=subtotal,
        cgst_total=cgst_total,
        sgst_total=sgst_total,
        igst_total=igst_total,
        product_tax_amount=product_tax,
        additional_tax_amount=extra.total,
        informational_cgst=info_cgst,
        informational_sgst=info_sgst,
        informational_igst=info_igst,
        product_discount_total=product_discount_total,
        coupon_discount_amount=coupon_amount,
        loyalty_discount_amount=loyalty.amount,
        points_redeemed=loyalty.points,
        tax_amount=tax_amount,
        grand_total=grand_total,
        coupon_code=promotions.coupon.code if promotions.coupon else "",
        bill_number=bill_number,
    )


def redeemable_points_for(
    lines: Iterable[LineItem],
    *,
    tax_settings: TaxSettings,
    promotions: Optional[PromotionContext] = None,
    now: datetime,
) -> int:
    """
    Maximum points the current order can absorb (counter UI pre-fill).

    Computed on the order as it stands right before the loyalty step.
    """
    promotions = promotions or PromotionContext.none()
    if promotions.loyalty is None:
        return 0

    without_loyalty = PromotionContext(
        product_discounts=promotions.product_discounts,
        coupon=promotions.coupon,
    )
    breakdown = calculate_breakdown(
        lines,
        tax_settings=tax_settings,
        promotions=without_loyalty,
        now=now,
    )
    return max_redeemable_points(breakdown.grand_total, promotions.loyalty)