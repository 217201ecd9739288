from datetime import datetime, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from pos.models import Cart, CartItem
from products.models import Product
from promotions.models import Coupon, LoyaltyAccount
from sales.models import Invoice
from sales.services.checkout_orchestrator import (
    BillNumberCollisionError,
    CheckoutError,
    EmptyCartError,
    StockValidationError,
    checkout_cart,
)
from store.models import BillingSettings, Store

User = get_user_model()


class CheckoutTestBase(TestCase):
    """
    Checkout orchestrator tests.

    GUARANTEES:
    - Invoice figures are the 2dp rendering of the quoted breakdown
    - tax_amount is never null, coupon and loyalty are stored apart
    - Stock is decremented and floored at zero
    - A duplicate bill number fails the whole checkout
    """

    def setUp(self):
        self.now = timezone.make_aware(datetime(2026, 3, 15, 10, 30))

        self.user = User.objects.create_user(
            email="cashier@example.com",
            password="pass",
            role="cashier",
        )
        self.store = Store.objects.create(name="Main Street")

        self.product = Product.objects.create(
            sku="SKU-100",
            name="Shampoo",
            store=self.store,
            unit_price=Decimal("100.00"),
            cgst_rate=Decimal("9.00"),
            sgst_rate=Decimal("9.00"),
            igst_rate=Decimal("18.00"),
            stock_quantity=Decimal("20"),
        )

    def cart_with(self, quantity, *, product=None, unit_price=None):
        product = product or self.product
        cart, _ = Cart.objects.get_or_create(user=self.user, store=self.store, is_active=True)
        CartItem.objects.create(
            cart=cart,
            product=product,
            quantity=Decimal(str(quantity)),
            unit_price=unit_price if unit_price is not None else product.unit_price,
        )
        return cart

    def set_billing(self, **kwargs):
        BillingSettings.objects.update_or_create(store=self.store, defaults=kwargs)


class CheckoutLedgerTests(CheckoutTestBase):
    def test_exclusive_invoice_reconciles(self):
        cart = self.cart_with(2)

        invoice = checkout_cart(user=self.user, cart=cart, now=self.now)

        self.assertEqual(invoice.bill_number, "150326-01")
        self.assertEqual(invoice.subtotal_amount, Decimal("200.00"))
        self.assertEqual(invoice.cgst_amount, Decimal("18.00"))
        self.assertEqual(invoice.sgst_amount, Decimal("18.00"))
        self.assertEqual(invoice.tax_amount, Decimal("36.00"))
        self.assertEqual(invoice.total_amount, Decimal("236.00"))
        self.assertEqual(invoice.pricing_mode, "exclusive")
        self.assertEqual(invoice.trade_type, "intra_state")
        self.assertEqual(len(invoice.items_data), 1)
        self.assertEqual(invoice.items_data[0]["line_base"], "200.00")

    def test_inclusive_split_invoice(self):
        self.set_billing(mode="inclusive", inclusive_bill_type="split")
        cart = self.cart_with(1, unit_price=Decimal("236.00"))

        invoice = checkout_cart(user=self.user, cart=cart, now=self.now)

        self.assertEqual(invoice.pricing_mode, "inclusive_split")
        self.assertEqual(invoice.subtotal_amount, Decimal("200.00"))
        self.assertEqual(invoice.tax_amount, Decimal("36.00"))
        self.assertEqual(invoice.total_amount, Decimal("236.00"))

    def test_mrp_invoice_bills_no_tax(self):
        self.set_billing(mode="inclusive", inclusive_bill_type="mrp")
        cart = self.cart_with(1, unit_price=Decimal("236.00"))

        invoice = checkout_cart(user=self.user, cart=cart, now=self.now)

        self.assertTrue(invoice.is_mrp)
        self.assertEqual(invoice.total_amount, Decimal("236.00"))
        self.assertEqual(invoice.tax_amount, Decimal("0.00"))
        self.assertEqual(invoice.informational_tax_amount, Decimal("36.00"))

    def assertLedgerAddsUp(self, invoice):
        invoice.refresh_from_db()
        self.assertEqual(
            invoice.cgst_amount + invoice.sgst_amount + invoice.igst_amount,
            invoice.tax_amount,
        )
        self.assertEqual(
            invoice.subtotal_amount
            + invoice.tax_amount
            - invoice.discount_amount
            - invoice.loyalty_discount_amount,
            invoice.total_amount,
        )

    def test_half_paisa_taxes_reconcile_with_total(self):
        cart = self.cart_with(1, unit_price=Decimal("12.50"))

        invoice = checkout_cart(user=self.user, cart=cart, now=self.now)

        # 1.125 each way rounds up; tax and total follow the printed halves
        self.assertEqual(invoice.cgst_amount, Decimal("1.13"))
        self.assertEqual(invoice.sgst_amount, Decimal("1.13"))
        self.assertEqual(invoice.tax_amount, Decimal("2.26"))
        self.assertEqual(invoice.total_amount, Decimal("14.76"))
        self.assertLedgerAddsUp(invoice)

    def test_inclusive_split_with_coupon_reconciles(self):
        self.set_billing(mode="inclusive", inclusive_bill_type="split")
        Coupon.objects.create(store=self.store, code="SEVEN", kind="percentage", value=Decimal("7"))
        cart = self.cart_with(3, unit_price=Decimal("4.50"))

        invoice = checkout_cart(user=self.user, cart=cart, coupon_code="SEVEN", now=self.now)

        self.assertEqual(invoice.subtotal_amount, Decimal("11.44"))
        self.assertEqual(invoice.tax_amount, Decimal("2.06"))
        self.assertLedgerAddsUp(invoice)

    def test_coupon_and_loyalty_are_stored_separately(self):
        Coupon.objects.create(store=self.store, code="TEN", kind="fixed", value=Decimal("10.00"))
        LoyaltyAccount.objects.create(store=self.store, customer_phone="9876543210", points=300)
        cart = self.cart_with(2)

        invoice = checkout_cart(
            user=self.user,
            cart=cart,
            coupon_code="ten",
            customer_phone="9876543210",
            redeem_points=100,
            now=self.now,
        )

        # 236 - 10 coupon - 100 loyalty
        self.assertEqual(invoice.discount_amount, Decimal("10.00"))
        self.assertEqual(invoice.loyalty_discount_amount, Decimal("100.00"))
        self.assertEqual(invoice.coupon_code, "TEN")
        self.assertEqual(invoice.points_redeemed, 100)
        self.assertEqual(invoice.total_amount, Decimal("126.00"))

        # floor(126 / 100) = 1 point earned
        self.assertEqual(invoice.points_earned, 1)
        account = LoyaltyAccount.objects.get(store=self.store, customer_phone="9876543210")
        self.assertEqual(account.points, 201)
        self.assertEqual(account.total_spent, Decimal("126.00"))

    def test_first_purchase_opens_loyalty_account(self):
        cart = self.cart_with(5)

        invoice = checkout_cart(
            user=self.user,
            cart=cart,
            customer_phone="9000000001",
            customer_name="Asha",
            now=self.now,
        )

        # 590 -> 5 points
        self.assertEqual(invoice.points_earned, 5)
        account = LoyaltyAccount.objects.get(customer_phone="9000000001")
        self.assertEqual(account.points, 5)
        self.assertEqual(account.customer_name, "Asha")

    def test_additional_tax_is_part_of_tax_amount(self):
        cart = self.cart_with(2)

        invoice = checkout_cart(user=self.user, cart=cart, additional_tax_rate=Decimal("5"), now=self.now)

        self.assertEqual(invoice.additional_tax_amount, Decimal("11.80"))
        self.assertEqual(invoice.tax_amount, Decimal("47.80"))
        self.assertEqual(invoice.total_amount, Decimal("247.80"))

    def test_payment_method_and_customer_recorded(self):
        cart = self.cart_with(1)

        invoice = checkout_cart(
            user=self.user,
            cart=cart,
            customer_name="  Ravi ",
            payment_method=Invoice.PAYMENT_CARD,
            now=self.now,
        )

        self.assertEqual(invoice.customer_name, "Ravi")
        self.assertEqual(invoice.payment_method, "card")
        self.assertEqual(invoice.created_by, self.user)


class CheckoutSideEffectTests(CheckoutTestBase):
    def test_stock_decremented(self):
        cart = self.cart_with(3)

        checkout_cart(user=self.user, cart=cart, now=self.now)

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, Decimal("17"))

    def test_stock_floored_at_zero(self):
        self.product.stock_quantity = Decimal("1")
        self.product.save()
        cart = self.cart_with(3)

        checkout_cart(user=self.user, cart=cart, now=self.now)

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, Decimal("0"))

    def test_weight_line_decrements_fractional_stock(self):
        rice = Product.objects.create(
            sku="RICE",
            name="Rice",
            store=self.store,
            unit_price=Decimal("60.00"),
            price_type=Product.PriceType.WEIGHT,
            stock_quantity=Decimal("10"),
        )
        cart = self.cart_with("2.5", product=rice)

        invoice = checkout_cart(user=self.user, cart=cart, now=self.now)

        rice.refresh_from_db()
        self.assertEqual(rice.stock_quantity, Decimal("7.5"))
        self.assertEqual(invoice.total_amount, Decimal("150.00"))

    def test_cart_cleared_and_closed(self):
        cart = self.cart_with(1)

        checkout_cart(user=self.user, cart=cart, now=self.now)

        cart.refresh_from_db()
        self.assertFalse(cart.is_active)
        self.assertFalse(cart.items.exists())

    def test_empty_cart_rejected(self):
        cart = Cart.objects.create(user=self.user, store=self.store)

        with self.assertRaises(EmptyCartError):
            checkout_cart(user=self.user, cart=cart, now=self.now)

    def test_closed_cart_rejected(self):
        cart = self.cart_with(1)
        cart.is_active = False
        cart.save()

        with self.assertRaises(CheckoutError):
            checkout_cart(user=self.user, cart=cart, now=self.now)

    def test_inactive_product_rejected(self):
        cart = self.cart_with(1)
        self.product.is_active = False
        self.product.save()

        with self.assertRaises(StockValidationError):
            checkout_cart(user=self.user, cart=cart, now=self.now)

        self.assertFalse(Invoice.objects.exists())

    def test_redeeming_more_than_balance_is_clamped(self):
        LoyaltyAccount.objects.create(store=self.store, customer_phone="9111111111", points=150)
        cart = self.cart_with(1)

        invoice = checkout_cart(
            user=self.user,
            cart=cart,
            customer_phone="9111111111",
            redeem_points=500,
            now=self.now,
        )

        # 118 order absorbs at most 118 points
        self.assertEqual(invoice.points_redeemed, 118)
        self.assertEqual(invoice.total_amount, Decimal("0.00"))


class BillNumberTests(CheckoutTestBase):
    def _invoice(self, *, bill_number, created_at, store=None):
        return Invoice.objects.create(
            store=store or self.store,
            bill_number=bill_number,
            created_by=self.user,
            pricing_mode="exclusive",
            trade_type="intra_state",
            total_amount=Decimal("10.00"),
            created_at=created_at,
        )

    def test_sequence_counts_todays_invoices(self):
        self._invoice(bill_number="150326-01", created_at=self.now - timedelta(hours=2))
        self._invoice(bill_number="150326-02", created_at=self.now - timedelta(hours=1))

        invoice = checkout_cart(user=self.user, cart=self.cart_with(1), now=self.now)

        self.assertEqual(invoice.bill_number, "150326-03")

    def test_sequence_resets_at_local_midnight(self):
        yesterday = timezone.make_aware(datetime(2026, 3, 14, 23, 45))
        self._invoice(bill_number="140326-01", created_at=yesterday)

        invoice = checkout_cart(user=self.user, cart=self.cart_with(1), now=self.now)

        self.assertEqual(invoice.bill_number, "150326-01")

    def test_sequence_is_per_store(self):
        other = Store.objects.create(name="Other")
        self._invoice(bill_number="150326-01", created_at=self.now, store=other)

        invoice = checkout_cart(user=self.user, cart=self.cart_with(1), now=self.now)

        self.assertEqual(invoice.bill_number, "150326-01")

    def test_collision_fails_the_checkout(self):
        # One invoice today, but number 02 is already taken
        self._invoice(bill_number="150326-02", created_at=self.now - timedelta(hours=1))
        cart = self.cart_with(2)

        with self.assertRaises(BillNumberCollisionError):
            checkout_cart(user=self.user, cart=cart, now=self.now)

        self.assertEqual(Invoice.objects.count(), 1)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, Decimal("20"))
        cart.refresh_from_db()
        self.assertTrue(cart.is_active)
        self.assertEqual(cart.items.count(), 1)


class InvoiceImmutabilityTests(CheckoutTestBase):
    def test_saved_invoice_cannot_be_modified(self):
        invoice = checkout_cart(user=self.user, cart=self.cart_with(1), now=self.now)

        invoice.total_amount = Decimal("1.00")
        with self.assertRaises(ValueError):
            invoice.save()

        invoice.refresh_from_db()
        self.assertEqual(invoice.total_amount, Decimal("118.00"))
