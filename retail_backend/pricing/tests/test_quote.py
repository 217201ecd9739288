from datetime import datetime, timedelta
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase
from django.utils import timezone

from pos.models import Cart, CartItem
from pricing.services.context import CouponError, promotion_context
from pricing.services.quote import quote_cart
from products.models import Product
from promotions.models import Coupon, LoyaltyAccount, ProductDiscount
from store.models import BillingSettings, Store

User = get_user_model()


class QuoteCartTests(TestCase):
    """
    Cart -> engine wiring.

    GUARANTEES:
    - DB promotion rows reach the engine unchanged
    - A failing promotion lookup degrades to "no promotion", never to an error
    - Coupon problems are reported to the caller
    """

    def setUp(self):
        self.now = timezone.make_aware(datetime(2026, 3, 15, 12, 0))
        self.user = User.objects.create_user(email="c@example.com", password="pass", role="cashier")
        self.store = Store.objects.create(name="Main Street")

        self.product = Product.objects.create(
            sku="P-1",
            name="Detergent",
            store=self.store,
            unit_price=Decimal("100.00"),
            cgst_rate=Decimal("9.00"),
            sgst_rate=Decimal("9.00"),
            stock_quantity=Decimal("50"),
        )
        self.cart = Cart.objects.create(user=self.user, store=self.store)
        CartItem.objects.create(
            cart=self.cart,
            product=self.product,
            quantity=Decimal("2"),
            unit_price=Decimal("100.00"),
        )

    def test_plain_quote(self):
        quote = quote_cart(cart=self.cart, now=self.now)

        self.assertEqual(quote.breakdown.grand_total, Decimal("236"))
        self.assertEqual(quote.max_redeemable_points, 0)
        self.assertEqual(quote.loyalty_balance, 0)

    def test_cart_snapshot_price_is_used(self):
        self.product.unit_price = Decimal("150.00")
        self.product.save()

        quote = quote_cart(cart=self.cart, now=self.now)

        self.assertEqual(quote.breakdown.subtotal, Decimal("200"))

    def test_store_billing_settings_apply(self):
        BillingSettings.objects.create(store=self.store, mode="inclusive", inclusive_bill_type="split")

        quote = quote_cart(cart=self.cart, now=self.now)

        self.assertEqual(quote.breakdown.grand_total.quantize(Decimal("0.01")), Decimal("200.00"))

    def test_active_product_discount_applies(self):
        ProductDiscount.objects.create(
            product=self.product,
            kind="percentage",
            value=Decimal("10"),
            start_at=self.now - timedelta(days=1),
            end_at=self.now + timedelta(days=1),
        )

        quote = quote_cart(cart=self.cart, now=self.now)

        breakdown = quote.breakdown
        self.assertEqual(breakdown.product_discount_total, Decimal("20"))
        self.assertEqual(breakdown.subtotal, Decimal("180"))
        self.assertEqual(breakdown.lines[0].discount_label, "10% off")

    def test_latest_started_discount_wins_on_overlap(self):
        ProductDiscount.objects.create(
            product=self.product,
            kind="fixed",
            value=Decimal("5"),
            start_at=self.now - timedelta(days=5),
            end_at=self.now + timedelta(days=5),
        )
        ProductDiscount.objects.create(
            product=self.product,
            kind="fixed",
            value=Decimal("20"),
            start_at=self.now - timedelta(days=1),
            end_at=self.now + timedelta(days=1),
        )

        quote = quote_cart(cart=self.cart, now=self.now)

        self.assertEqual(quote.breakdown.product_discount_total, Decimal("40"))

    def test_inactive_or_expired_discount_ignored(self):
        ProductDiscount.objects.create(
            product=self.product,
            kind="fixed",
            value=Decimal("5"),
            start_at=self.now - timedelta(days=5),
            end_at=self.now - timedelta(days=1),
        )
        ProductDiscount.objects.create(
            product=self.product,
            kind="fixed",
            value=Decimal("5"),
            start_at=self.now - timedelta(days=1),
            end_at=self.now + timedelta(days=1),
            is_active=False,
        )

        quote = quote_cart(cart=self.cart, now=self.now)

        self.assertEqual(quote.breakdown.product_discount_total, Decimal("0"))

    def test_discount_lookup_failure_degrades(self):
        ProductDiscount.objects.create(
            product=self.product,
            kind="fixed",
            value=Decimal("5"),
            start_at=self.now - timedelta(days=1),
            end_at=self.now + timedelta(days=1),
        )

        with mock.patch.object(ProductDiscount.objects, "filter", side_effect=DatabaseError("boom")):
            with self.assertLogs("pricing.services.context", level="WARNING"):
                quote = quote_cart(cart=self.cart, now=self.now)

        self.assertEqual(quote.breakdown.product_discount_total, Decimal("0"))
        self.assertEqual(quote.breakdown.grand_total, Decimal("236"))

    def test_loyalty_lookup_failure_degrades(self):
        LoyaltyAccount.objects.create(store=self.store, customer_phone="9876543210", points=500)

        with mock.patch(
            "pricing.services.context.build_redemption",
            side_effect=DatabaseError("boom"),
        ):
            with self.assertLogs("pricing.services.context", level="WARNING"):
                quote = quote_cart(
                    cart=self.cart,
                    now=self.now,
                    customer_phone="9876543210",
                    redeem_points=100,
                )

        self.assertEqual(quote.breakdown.loyalty_discount_amount, Decimal("0"))

    def test_loyalty_prefill_and_balance(self):
        LoyaltyAccount.objects.create(store=self.store, customer_phone="9876543210", points=500)

        quote = quote_cart(cart=self.cart, now=self.now, customer_phone="9876543210")

        self.assertEqual(quote.loyalty_balance, 500)
        self.assertEqual(quote.max_redeemable_points, 236)
        self.assertEqual(quote.breakdown.points_redeemed, 0)

    def test_bad_coupon_raises(self):
        Coupon.objects.create(store=self.store, code="OFF", kind="fixed", value=Decimal("5"), is_active=False)

        with self.assertRaises(CouponError):
            quote_cart(cart=self.cart, now=self.now, coupon_code="OFF")

    def test_promotion_context_without_customer(self):
        context = promotion_context(store=self.store, product_ids=[self.product.pk], now=self.now)

        self.assertIsNone(context.coupon)
        self.assertIsNone(context.loyalty)
        self.assertEqual(dict(context.product_discounts), {})
