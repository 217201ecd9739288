# pricing/engine/types.py

"""
PRICING ENGINE VALUE TYPES

Purpose:
- Plain, immutable inputs/outputs for the totals engine.
- No Django imports: the engine is usable from services, views, scripts and tests alike.

Inputs:
- LineItem           one product in a cart
- TaxSettings        merchant tax regime (+ operator overrides for this checkout)
- PromotionContext   product discounts, coupon, loyalty redemption

Output:
- Breakdown          the single source of truth for cart summary, receipt and ledger
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Mapping, Optional, Tuple

from .money import ZERO, money, non_negative, to_decimal


# ============================================================
# ENUMS
# ============================================================


class TaxMode(str, Enum):
    EXCLUSIVE = "exclusive"
    INCLUSIVE = "inclusive"


class InclusiveVariant(str, Enum):
    SPLIT = "split"
    MRP = "mrp"


class TradeType(str, Enum):
    INTRA_STATE = "intra_state"
    INTER_STATE = "inter_state"


class PricingMode(str, Enum):
    """
    Tagged variant of (TaxMode, InclusiveVariant).

    Every branch in the engine dispatches on this value; nothing re-derives
    the mode from the raw settings flags.
    """

    EXCLUSIVE = "exclusive"
    INCLUSIVE_SPLIT = "inclusive_split"
    INCLUSIVE_MRP = "inclusive_mrp"

    @property
    def bills_product_tax(self) -> bool:
        return self is not PricingMode.INCLUSIVE_MRP


TAX_NOTES = {
    PricingMode.EXCLUSIVE: "GST added extra",
    PricingMode.INCLUSIVE_SPLIT: "Prices include GST",
    PricingMode.INCLUSIVE_MRP: "MRP Inclusive - Taxes included in price",
}


class PriceType(str, Enum):
    FIXED = "fixed"
    WEIGHT = "weight"


class DiscountKind(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


# ============================================================
# INPUTS
# ============================================================


@dataclass(frozen=True)
class LineItem:
    product_ref: str
    quantity: Decimal
    catalog_price: Decimal
    cgst_rate: Decimal = ZERO
    sgst_rate: Decimal = ZERO
    igst_rate: Decimal = ZERO
    price_type: PriceType = PriceType.FIXED
    name: str = ""

    @classmethod
    def build(
        cls,
        *,
        product_ref,
        quantity,
        catalog_price,
        cgst_rate=None,
        sgst_rate=None,
        igst_rate=None,
        price_type=PriceType.FIXED,
        name: str = "",
    ) -> "LineItem":
        return cls(
            product_ref=str(product_ref),
            quantity=to_decimal(quantity),
            catalog_price=to_decimal(catalog_price),
            cgst_rate=to_decimal(cgst_rate),
            sgst_rate=to_decimal(sgst_rate),
            igst_rate=to_decimal(igst_rate),
            price_type=PriceType(price_type or PriceType.FIXED),
            name=name or "",
        )


@dataclass(frozen=True)
class TaxSettings:
    mode: TaxMode = TaxMode.EXCLUSIVE
    inclusive_variant: InclusiveVariant = InclusiveVariant.SPLIT
    trade_type: TradeType = TradeType.INTRA_STATE

    # Operator-supplied, per checkout
    igst_override: Optional[Decimal] = None
    additional_tax_rate: Decimal = ZERO

    @property
    def pricing_mode(self) -> PricingMode:
        if self.mode == TaxMode.EXCLUSIVE:
            return PricingMode.EXCLUSIVE
        if self.inclusive_variant == InclusiveVariant.MRP:
            return PricingMode.INCLUSIVE_MRP
        return PricingMode.INCLUSIVE_SPLIT

    @property
    def is_inter_state(self) -> bool:
        return self.trade_type == TradeType.INTER_STATE


@dataclass(frozen=True)
class ProductDiscountRule:
    kind: DiscountKind
    value: Decimal
    start_at: datetime
    end_at: datetime

    def is_active_at(self, now: datetime) -> bool:
        return self.start_at <= now <= self.end_at

    @property
    def label(self) -> str:
        if self.kind == DiscountKind.PERCENTAGE:
            return f"{self.value.normalize():f}% off"
        return f"{money(self.value)} off"


@dataclass(frozen=True)
class CouponRule:
    kind: DiscountKind
    value: Decimal
    code: str = ""


@dataclass(frozen=True)
class LoyaltyRedemption:
    points_requested: int
    rupees_per_point: Decimal
    points_available: int
    minimum_points_to_redeem: int = 0

    @property
    def is_offered(self) -> bool:
        """Redemption is opt-in and only offered above the merchant floor."""
        return (
            self.points_available > 0
            and self.points_available >= self.minimum_points_to_redeem
            and self.rupees_per_point > ZERO
        )


@dataclass(frozen=True)
class PromotionContext:
    product_discounts: Mapping[str, ProductDiscountRule] = field(default_factory=dict)
    coupon: Optional[CouponRule] = None
    loyalty: Optional[LoyaltyRedemption] = None

    @classmethod
    def none(cls) -> "PromotionContext":
        return cls()

    def discount_for(self, product_ref: str) -> Optional[ProductDiscountRule]:
        return self.product_discounts.get(str(product_ref))


# ============================================================
# OUTPUTS
# ============================================================


@dataclass(frozen=True)
class TaxRates:
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.cgst + self.sgst + self.igst


@dataclass(frozen=True)
class NormalizedPrice:
    base_price: Decimal
    display_price: Decimal


@dataclass(frozen=True)
class PricedLine:
    product_ref: str
    name: str
    quantity: Decimal
    price_type: PriceType
    catalog_price: Decimal
    effective_price: Decimal
    base_price: Decimal
    display_price: Decimal
    rates: TaxRates
    line_base: Decimal
    line_cgst: Decimal
    line_sgst: Decimal
    line_igst: Decimal
    line_discount: Decimal
    discount_label: str = ""

    @property
    def line_tax(self) -> Decimal:
        return self.line_cgst + self.line_sgst + self.line_igst

    @property
    def line_display_total(self) -> Decimal:
        return self.display_price * self.quantity

    def as_record(self) -> dict:
        """Raw line item as persisted on the ledger (2dp money, full quantity)."""
        return {
            "product_ref": self.product_ref,
            "name": self.name,
            "quantity": str(self.quantity),
            "price_type": self.price_type.value,
            "catalog_price": str(money(self.catalog_price)),
            "effective_price": str(money(self.effective_price)),
            "base_price": str(money(self.base_price)),
            "display_price": str(money(self.display_price)),
            "cgst_rate": str(self.rates.cgst),
            "sgst_rate": str(self.rates.sgst),
            "igst_rate": str(self.rates.igst),
            "tax_rate": str(self.rates.total),
            "line_base": str(money(self.line_base)),
            "line_tax": str(money(self.line_tax)),
            "line_discount": str(money(self.line_discount)),
            "discount_label": self.discount_label,
        }


@dataclass(frozen=True)
class Breakdown:
    mode: PricingMode
    trade_type: TradeType
    lines: Tuple[PricedLine, ...]

    subtotal: Decimal
    cgst_total: Decimal
    sgst_total: Decimal
    igst_total: Decimal

    product_tax_amount: Decimal
    additional_tax_amount: Decimal

    # MRP mode only: tax already inside the price, reported for analytics, never billed
    informational_cgst: Decimal
    informational_sgst: Decimal
    informational_igst: Decimal

    product_discount_total: Decimal
    coupon_discount_amount: Decimal
    loyalty_discount_amount: Decimal
    points_redeemed: int

    tax_amount: Decimal
    grand_total: Decimal

    coupon_code: str = ""
    bill_number: str = ""

    @property
    def informational_tax_amount(self) -> Decimal:
        return self.informational_cgst + self.informational_sgst + self.informational_igst

    @property
    def tax_note(self) -> str:
        return TAX_NOTES[self.mode]

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def with_bill_number(self, bill_number: str) -> "Breakdown":
        return replace(self, bill_number=bill_number)

    def rounded(self) -> dict:
        """
        2dp view of every money figure. Use at render/persist time only.

        Components are rounded first; tax_amount and grand_total are summed
        from the rounded components so the printed/stored figures reconcile:
            tax_amount  == cgst_total + sgst_total + igst_total
            grand_total == max(0, subtotal + tax_amount - coupon - loyalty)
        """
        subtotal = money(self.subtotal)
        cgst = money(self.cgst_total)
        sgst = money(self.sgst_total)
        igst = money(self.igst_total)
        coupon = money(self.coupon_discount_amount)
        loyalty = money(self.loyalty_discount_amount)

        tax_amount = cgst + sgst + igst
        if self.product_tax_amount:
            additional = min(money(self.additional_tax_amount), tax_amount)
        else:
            additional = tax_amount

        return {
            "subtotal": subtotal,
            "cgst_total": cgst,
            "sgst_total": sgst,
            "igst_total": igst,
            "product_tax_amount": tax_amount - additional,
            "additional_tax_amount": additional,
            "informational_tax_amount": money(self.informational_tax_amount),
            "product_discount_total": money(self.product_discount_total),
            "coupon_discount_amount": coupon,
            "loyalty_discount_amount": loyalty,
            "tax_amount": tax_amount,
            "grand_total": non_negative(subtotal + tax_amount - coupon - loyalty),
        }
