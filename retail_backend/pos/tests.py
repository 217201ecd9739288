# pos/tests.py

"""
POS TESTS

Run with:
    python manage.py test pos -v 2

Checkout touches:
POS -> Pricing -> Sales (Invoice) -> Products (stock) -> Promotions (loyalty)

Seeds:
- a store (default billing settings: exclusive, intra-state)
- a cashier
- a fixed-price product at 100.00 with 9% CGST + 9% SGST
- a weight-priced product
"""

from __future__ import annotations

import re
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from pos.models import Cart, CartItem
from products.models import Product
from promotions.models import Coupon
from sales.models import Invoice
from store.models import BillingSettings, Counter, Store

User = get_user_model()


class POSBaseTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()

        self.cashier = User.objects.create_user(
            email="cashier@example.com",
            password="testpass123",
            role=User.ROLE_CASHIER,
        )
        self.client.force_authenticate(user=self.cashier)

        self.store = Store.objects.create(name="Main Street", gstin="29ABCDE1234F1Z5")
        self.other_store = Store.objects.create(name="Airport")

        self.product = Product.objects.create(
            sku="SOAP-001",
            name="Sandal Soap",
            store=self.store,
            unit_price=Decimal("100.00"),
            cgst_rate=Decimal("9.00"),
            sgst_rate=Decimal("9.00"),
            igst_rate=Decimal("18.00"),
            stock_quantity=Decimal("10"),
        )

        self.loose_rice = Product.objects.create(
            sku="RICE-LOOSE",
            name="Loose Rice",
            store=self.store,
            unit_price=Decimal("80.00"),
            price_type=Product.PriceType.WEIGHT,
            stock_quantity=Decimal("25"),
        )

    def add(self, product, quantity, store=None):
        return self.client.post(
            reverse("pos:add-cart-item"),
            {
                "store_id": str((store or self.store).id),
                "product_id": str(product.id),
                "quantity": str(quantity),
            },
            format="json",
        )

    def active_cart(self):
        return Cart.objects.get(user=self.cashier, store=self.store, is_active=True)


class POSCartTests(POSBaseTestCase):
    def test_get_empty_cart(self):
        response = self.client.get(reverse("pos:active-cart"), {"store_id": str(self.store.id)})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items"], [])
        self.assertEqual(response.data["item_count"], 0)

    def test_store_id_is_required(self):
        response = self.client.get(reverse("pos:active-cart"))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_add_item_snapshots_catalog_price(self):
        response = self.add(self.product, 2)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["items"]), 1)
        item = response.data["items"][0]
        self.assertEqual(Decimal(item["quantity"]), Decimal("2"))
        self.assertEqual(Decimal(item["unit_price"]), Decimal("100.00"))

    def test_re_adding_increments_quantity(self):
        self.add(self.product, 2)
        response = self.add(self.product, 3)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(response.data["items"][0]["quantity"]), Decimal("5"))

    def test_add_beyond_stock_rejected(self):
        response = self.add(self.product, 11)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "INSUFFICIENT_STOCK")

    def test_existing_quantity_counts_toward_stock(self):
        self.add(self.product, 6)
        response = self.add(self.product, 5)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "INSUFFICIENT_STOCK")
        self.assertEqual(self.active_cart().items.get().quantity, Decimal("6"))

    def test_fractional_quantity_rejected_for_fixed_price_product(self):
        response = self.add(self.product, "1.5")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "INVALID_QUANTITY")

    def test_weight_product_accepts_fractional_quantity(self):
        response = self.add(self.loose_rice, "1.250")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(response.data["items"][0]["catalog_total"]), Decimal("100.00"))

    def test_product_from_other_store_rejected(self):
        foreign = Product.objects.create(
            sku="AIR-1",
            name="Neck Pillow",
            store=self.other_store,
            unit_price=Decimal("500.00"),
            stock_quantity=Decimal("3"),
        )
        response = self.add(foreign, 1)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "STORE_MISMATCH")

    def test_update_and_remove_item(self):
        self.add(self.product, 2)
        item = self.active_cart().items.get()

        url = reverse("pos:update-cart-item", args=[item.id])
        response = self.client.patch(url, {"store_id": str(self.store.id), "quantity": "4"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(response.data["items"][0]["quantity"]), Decimal("4"))

        url = reverse("pos:remove-cart-item", args=[item.id])
        response = self.client.delete(f"{url}?store_id={self.store.id}")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items"], [])

    def test_clear_cart(self):
        self.add(self.product, 1)
        self.add(self.loose_rice, "0.5")

        response = self.client.delete(f"{reverse('pos:clear-cart')}?store_id={self.store.id}")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(CartItem.objects.filter(cart__store=self.store).exists())


class POSCartSummaryTests(POSBaseTestCase):
    def summary(self, **payload):
        return self.client.post(
            reverse("pos:cart-summary"),
            {"store_id": str(self.store.id), **payload},
            format="json",
        )

    def test_summary_exclusive_intra_state(self):
        self.add(self.product, 2)

        response = self.summary()

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        breakdown = response.data["breakdown"]
        self.assertEqual(breakdown["mode"], "exclusive")
        self.assertEqual(breakdown["subtotal"], "200.00")
        self.assertEqual(breakdown["cgst_total"], "18.00")
        self.assertEqual(breakdown["sgst_total"], "18.00")
        self.assertEqual(breakdown["igst_total"], "0.00")
        self.assertEqual(breakdown["grand_total"], "236.00")
        self.assertEqual(breakdown["tax_note"], "GST added extra")

    def test_summary_igst_override_for_inter_state(self):
        BillingSettings.objects.create(store=self.store, trade_type=BillingSettings.Trade.INTER_STATE)
        self.add(self.product, 1)

        response = self.summary(igst_override="12")

        breakdown = response.data["breakdown"]
        self.assertEqual(breakdown["igst_total"], "12.00")
        self.assertEqual(breakdown["cgst_total"], "0.00")
        self.assertEqual(breakdown["grand_total"], "112.00")

    def test_summary_with_coupon(self):
        Coupon.objects.create(store=self.store, code="save10", kind="percentage", value=Decimal("10"))
        self.add(self.product, 2)

        response = self.summary(coupon_code="SAVE10")

        breakdown = response.data["breakdown"]
        self.assertEqual(breakdown["coupon_code"], "SAVE10")
        self.assertEqual(breakdown["coupon_discount_amount"], "23.60")
        self.assertEqual(breakdown["grand_total"], "212.40")

    def test_summary_totals_add_up_after_rounding(self):
        self.product.unit_price = Decimal("12.50")
        self.product.save()
        self.add(self.product, 1)

        breakdown = self.summary().data["breakdown"]

        self.assertEqual(breakdown["cgst_total"], "1.13")
        self.assertEqual(breakdown["sgst_total"], "1.13")
        self.assertEqual(breakdown["tax_amount"], "2.26")
        self.assertEqual(breakdown["grand_total"], "14.76")

    def test_unknown_coupon_is_reported(self):
        self.add(self.product, 1)

        response = self.summary(coupon_code="NOPE")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "INVALID_COUPON")

    def test_summary_of_empty_cart_is_zero(self):
        response = self.summary()

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["breakdown"]["grand_total"], "0.00")
        self.assertEqual(response.data["breakdown"]["lines"], [])


class POSCheckoutTests(POSBaseTestCase):
    def checkout(self, **payload):
        return self.client.post(
            reverse("pos:checkout"),
            {"store_id": str(self.store.id), **payload},
            format="json",
        )

    def test_checkout_success(self):
        self.add(self.product, 2)
        cart = self.active_cart()

        response = self.checkout(payment_method="upi", customer_name="Ravi")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        invoice = Invoice.objects.get()
        self.assertEqual(invoice.total_amount, Decimal("236.00"))
        self.assertEqual(invoice.tax_amount, Decimal("36.00"))
        self.assertEqual(invoice.payment_method, Invoice.PAYMENT_UPI)
        self.assertEqual(invoice.created_by, self.cashier)
        self.assertTrue(re.match(r"^\d{6}-01$", invoice.bill_number))

        self.assertEqual(response.data["invoice"]["bill_number"], invoice.bill_number)
        self.assertEqual(response.data["receipt"]["format"], "thermal")
        self.assertEqual(response.data["receipt"]["totals"]["total"], "236.00")

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, Decimal("8"))

        cart.refresh_from_db()
        self.assertFalse(cart.is_active)
        self.assertEqual(cart.items.count(), 0)

    def test_second_checkout_gets_next_bill_number(self):
        self.add(self.product, 1)
        first = self.checkout().data["invoice"]["bill_number"]

        self.add(self.product, 1)
        second = self.checkout().data["invoice"]["bill_number"]

        self.assertTrue(first.endswith("-01"))
        self.assertTrue(second.endswith("-02"))
        self.assertEqual(first[:6], second[:6])

    def test_thermal_receipt_lines_match_subtotal(self):
        self.add(self.product, 2)

        response = self.checkout()

        totals = response.data["receipt"]["totals"]
        line = response.data["receipt"]["items"][0]
        self.assertEqual(line["rate"], "100.00")
        self.assertEqual(line["amount"], "200.00")
        self.assertEqual(Decimal(line["rate"]) * Decimal(line["quantity"]), Decimal(line["amount"]))
        self.assertEqual(Decimal(line["amount"]), Decimal(totals["subtotal"]))

    def test_checkout_a4_receipt(self):
        self.add(self.product, 1)

        response = self.checkout(receipt_layout="a4")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["receipt"]["title"], "TAX INVOICE")
        self.assertEqual(response.data["receipt"]["items"][0]["sl_no"], 1)

    def test_checkout_records_counter(self):
        counter = Counter.objects.create(store=self.store, name="Till 1")
        self.add(self.product, 1)

        response = self.checkout(counter_id=str(counter.id))

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Invoice.objects.get().counter, counter)
        self.assertEqual(response.data["receipt"]["counter"], "Till 1")

    def test_checkout_counter_from_other_store_fails(self):
        counter = Counter.objects.create(store=self.other_store, name="Till 9")
        self.add(self.product, 1)

        response = self.checkout(counter_id=str(counter.id))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "INVALID_COUNTER")
        self.assertFalse(Invoice.objects.exists())
        self.assertTrue(self.active_cart().items.exists())

    def test_checkout_empty_cart_fails(self):
        response = self.checkout()

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "EMPTY_CART")

    def test_checkout_with_expired_coupon_fails(self):
        Coupon.objects.create(
            store=self.store,
            code="OLD",
            kind="fixed",
            value=Decimal("5"),
            is_active=False,
        )
        self.add(self.product, 1)

        response = self.checkout(coupon_code="OLD")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "INVALID_COUPON")
        self.assertFalse(Invoice.objects.exists())


class POSRoutingTests(TestCase):
    def test_health_is_served_by_the_project_endpoint_only(self):
        client = APIClient()

        response = client.get(reverse("health-check"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"status": "ok", "db": "ok"})

        self.assertEqual(client.get("/api/pos/health/").status_code, status.HTTP_404_NOT_FOUND)
