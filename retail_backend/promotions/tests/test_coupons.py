from datetime import datetime, timedelta
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.test import TestCase
from django.utils import timezone

from pricing.engine import DiscountKind
from pricing.services.context import ExpiredCouponError, UnknownCouponError, resolve_coupon
from products.models import Product
from promotions.models import Coupon, ProductDiscount
from store.models import Store


class CouponTests(TestCase):
    def setUp(self):
        self.now = timezone.make_aware(datetime(2026, 3, 15, 12, 0))
        self.store = Store.objects.create(name="Main Street")
        self.other_store = Store.objects.create(name="Airport")

    def test_code_is_stored_uppercase(self):
        coupon = Coupon.objects.create(store=self.store, code=" diwali ", kind="percentage", value=Decimal("5"))
        self.assertEqual(coupon.code, "DIWALI")

    def test_code_unique_per_store_ignoring_case(self):
        Coupon.objects.create(store=self.store, code="SAVE", kind="fixed", value=Decimal("5"))

        with self.assertRaises(IntegrityError):
            Coupon.objects.create(store=self.store, code="save", kind="fixed", value=Decimal("7"))

    def test_same_code_allowed_in_another_store(self):
        Coupon.objects.create(store=self.store, code="SAVE", kind="fixed", value=Decimal("5"))
        Coupon.objects.create(store=self.other_store, code="SAVE", kind="fixed", value=Decimal("5"))

        self.assertEqual(Coupon.objects.filter(code="SAVE").count(), 2)

    def test_resolve_is_case_insensitive(self):
        Coupon.objects.create(store=self.store, code="SAVE10", kind="percentage", value=Decimal("10"))

        coupon = resolve_coupon(self.store, "save10", now=self.now)

        rule = coupon.to_rule()
        self.assertEqual(rule.kind, DiscountKind.PERCENTAGE)
        self.assertEqual(rule.value, Decimal("10"))
        self.assertEqual(rule.code, "SAVE10")

    def test_blank_code_means_no_coupon(self):
        self.assertIsNone(resolve_coupon(self.store, "  ", now=self.now))

    def test_unknown_code(self):
        with self.assertRaises(UnknownCouponError):
            resolve_coupon(self.store, "NOPE", now=self.now)

    def test_code_from_other_store_is_unknown(self):
        Coupon.objects.create(store=self.other_store, code="AIR", kind="fixed", value=Decimal("5"))

        with self.assertRaises(UnknownCouponError):
            resolve_coupon(self.store, "AIR", now=self.now)

    def test_window_is_enforced(self):
        Coupon.objects.create(
            store=self.store,
            code="OLD",
            kind="fixed",
            value=Decimal("5"),
            start_at=self.now - timedelta(days=10),
            end_at=self.now - timedelta(days=1),
        )
        Coupon.objects.create(
            store=self.store,
            code="SOON",
            kind="fixed",
            value=Decimal("5"),
            start_at=self.now + timedelta(days=1),
        )

        with self.assertRaises(ExpiredCouponError):
            resolve_coupon(self.store, "OLD", now=self.now)
        with self.assertRaises(ExpiredCouponError):
            resolve_coupon(self.store, "SOON", now=self.now)

    def test_window_end_is_inclusive(self):
        coupon = Coupon.objects.create(
            store=self.store,
            code="EDGE",
            kind="fixed",
            value=Decimal("5"),
            end_at=self.now,
        )
        self.assertTrue(coupon.is_valid_at(self.now))
        self.assertFalse(coupon.is_valid_at(self.now + timedelta(seconds=1)))

    def test_percentage_above_hundred_rejected(self):
        coupon = Coupon(store=self.store, code="HUGE", kind="percentage", value=Decimal("150"))
        with self.assertRaises(ValidationError):
            coupon.full_clean()


class ProductDiscountTests(TestCase):
    def setUp(self):
        self.now = timezone.make_aware(datetime(2026, 3, 15, 12, 0))
        self.product = Product.objects.create(sku="P-1", name="Tea", unit_price=Decimal("50.00"))

    def test_end_before_start_rejected(self):
        discount = ProductDiscount(
            product=self.product,
            kind="fixed",
            value=Decimal("5"),
            start_at=self.now,
            end_at=self.now - timedelta(hours=1),
        )
        with self.assertRaises(ValidationError):
            discount.full_clean()

    def test_rule_label(self):
        discount = ProductDiscount.objects.create(
            product=self.product,
            kind="percentage",
            value=Decimal("10"),
            start_at=self.now - timedelta(days=1),
            end_at=self.now + timedelta(days=1),
        )

        rule = discount.to_rule()

        self.assertTrue(rule.is_active_at(self.now))
        self.assertEqual(rule.kind, DiscountKind.PERCENTAGE)
        self.assertEqual(rule.label, "10% off")
