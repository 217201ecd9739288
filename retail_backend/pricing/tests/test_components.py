# pricing/tests/test_components.py

from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase

from pricing.engine import (
    CouponRule,
    DiscountKind,
    LineItem,
    LoyaltyRedemption,
    PricingMode,
    TradeType,
    format_bill_number,
    max_redeemable_points,
    normalize_price,
    resolve_tax_rates,
    to_decimal,
)
from pricing.engine.discount_stacker import additional_tax, coupon_discount, loyalty_discount
from pricing.engine.price_normalizer import extract_included_tax


class TaxResolverTests(SimpleTestCase):
    def setUp(self):
        self.line = LineItem.build(
            product_ref="p", quantity=1, catalog_price=100, cgst_rate="9", sgst_rate="9", igst_rate="18"
        )

    def test_intra_state(self):
        rates = resolve_tax_rates(self.line, TradeType.INTRA_STATE)
        self.assertEqual((rates.cgst, rates.sgst, rates.igst), (Decimal("9"), Decimal("9"), Decimal("0")))

    def test_inter_state(self):
        rates = resolve_tax_rates(self.line, TradeType.INTER_STATE)
        self.assertEqual((rates.cgst, rates.sgst, rates.igst), (Decimal("0"), Decimal("0"), Decimal("18")))

    def test_zero_override_falls_back_to_line_rate(self):
        rates = resolve_tax_rates(self.line, TradeType.INTER_STATE, igst_override="0")
        self.assertEqual(rates.igst, Decimal("18"))

    def test_override_ignored_intra_state(self):
        rates = resolve_tax_rates(self.line, TradeType.INTRA_STATE, igst_override="28")
        self.assertEqual(rates.total, Decimal("18"))


class PriceNormalizerTests(SimpleTestCase):
    def test_exclusive(self):
        n = normalize_price(Decimal("100"), Decimal("18"), PricingMode.EXCLUSIVE)
        self.assertEqual((n.base_price, n.display_price), (Decimal("100"), Decimal("118")))

    def test_inclusive_split(self):
        n = normalize_price(Decimal("118"), Decimal("18"), PricingMode.INCLUSIVE_SPLIT)
        self.assertEqual((n.base_price, n.display_price), (Decimal("100"), Decimal("118")))

    def test_inclusive_split_zero_rate(self):
        n = normalize_price(Decimal("50"), Decimal("0"), PricingMode.INCLUSIVE_SPLIT)
        self.assertEqual(n.base_price, Decimal("50"))

    def test_mrp(self):
        n = normalize_price(Decimal("118"), Decimal("18"), PricingMode.INCLUSIVE_MRP)
        self.assertEqual((n.base_price, n.display_price), (Decimal("118"), Decimal("118")))

    def test_extract_included_tax(self):
        self.assertEqual(extract_included_tax(Decimal("236"), Decimal("18")), Decimal("36"))
        self.assertEqual(extract_included_tax(Decimal("236"), Decimal("0")), Decimal("0"))


class StackerTests(SimpleTestCase):
    def test_coupon_percentage(self):
        coupon = CouponRule(kind=DiscountKind.PERCENTAGE, value=Decimal("10"))
        self.assertEqual(coupon_discount(Decimal("236"), coupon), Decimal("23.6"))

    def test_coupon_zero_value_is_inert(self):
        coupon = CouponRule(kind=DiscountKind.FIXED, value=Decimal("0"))
        self.assertEqual(coupon_discount(Decimal("236"), coupon), Decimal("0"))

    def test_additional_tax_split(self):
        effect = additional_tax(Decimal("200"), "5", TradeType.INTRA_STATE)
        self.assertEqual((effect.cgst, effect.sgst, effect.igst), (Decimal("5"), Decimal("5"), Decimal("0")))

        effect = additional_tax(Decimal("200"), "5", TradeType.INTER_STATE)
        self.assertEqual(effect.igst, Decimal("10"))

    def test_max_redeemable_points(self):
        redemption = LoyaltyRedemption(
            points_requested=0,
            rupees_per_point=Decimal("2"),
            points_available=1000,
            minimum_points_to_redeem=100,
        )
        self.assertEqual(max_redeemable_points(Decimal("99.99"), redemption), 49)
        self.assertEqual(max_redeemable_points(Decimal("0"), redemption), 0)

    def test_zero_point_value_redeems_nothing(self):
        redemption = LoyaltyRedemption(points_requested=10, rupees_per_point=Decimal("0"), points_available=500)
        self.assertEqual(loyalty_discount(Decimal("100"), redemption).points, 0)


class BillNumberFormatTests(SimpleTestCase):
    def test_first_bill_of_the_day(self):
        self.assertEqual(format_bill_number(date(2024, 10, 17), 0), "171024-01")

    def test_sequence_padding(self):
        self.assertEqual(format_bill_number(date(2024, 1, 5), 9), "050124-10")

    def test_sequence_past_ninety_nine(self):
        self.assertEqual(format_bill_number(date(2024, 1, 5), 99), "050124-100")


class MoneyTests(SimpleTestCase):
    def test_to_decimal_degrades_to_zero(self):
        for value in (None, "", "abc", "NaN", True):
            self.assertEqual(to_decimal(value), Decimal("0"))

    def test_to_decimal_parses(self):
        self.assertEqual(to_decimal(" 12.50 "), Decimal("12.50"))
        self.assertEqual(to_decimal(3), Decimal("3"))
