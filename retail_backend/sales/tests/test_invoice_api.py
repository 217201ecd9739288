from datetime import datetime
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from sales.models import Invoice
from store.models import Counter, Store

User = get_user_model()


class InvoiceAPITests(TestCase):
    """
    Invoice history + receipt endpoints.

    GUARANTEES:
    - Cashiers only see the invoices they billed
    - Managers see every invoice and can filter by store
    - Receipts render in thermal and A4 layouts
    """

    def setUp(self):
        self.client = APIClient()

        self.cashier = User.objects.create_user(email="c1@example.com", password="pass", role="cashier")
        self.other_cashier = User.objects.create_user(email="c2@example.com", password="pass", role="cashier")
        self.manager = User.objects.create_user(email="m@example.com", password="pass", role="manager")

        self.store = Store.objects.create(name="Main Street", gstin="29ABCDE1234F1Z5", phone="080-1234")
        self.other_store = Store.objects.create(name="Airport")
        self.counter = Counter.objects.create(store=self.store, name="Till 1")

        now = timezone.make_aware(datetime(2026, 3, 15, 11, 0))

        self.own = Invoice.objects.create(
            store=self.store,
            counter=self.counter,
            bill_number="150326-01",
            created_by=self.cashier,
            customer_name="Ravi",
            customer_phone="9876543210",
            items_data=[
                {
                    "product_ref": "p1",
                    "name": "Shampoo",
                    "quantity": "2",
                    "price_type": "fixed",
                    "catalog_price": "100.00",
                    "effective_price": "100.00",
                    "base_price": "100.00",
                    "display_price": "118.00",
                    "cgst_rate": "9.00",
                    "sgst_rate": "9.00",
                    "igst_rate": "0",
                    "tax_rate": "18.00",
                    "line_base": "200.00",
                    "line_tax": "36.00",
                    "line_discount": "0.00",
                    "discount_label": "",
                }
            ],
            subtotal_amount=Decimal("200.00"),
            cgst_amount=Decimal("18.00"),
            sgst_amount=Decimal("18.00"),
            tax_amount=Decimal("36.00"),
            total_amount=Decimal("236.00"),
            payment_method=Invoice.PAYMENT_UPI,
            pricing_mode="exclusive",
            trade_type="intra_state",
            created_at=now,
        )

        self.mrp = Invoice.objects.create(
            store=self.other_store,
            bill_number="150326-01",
            created_by=self.other_cashier,
            subtotal_amount=Decimal("236.00"),
            informational_tax_amount=Decimal("36.00"),
            total_amount=Decimal("236.00"),
            pricing_mode="inclusive_mrp",
            trade_type="intra_state",
            created_at=now,
        )

    def test_cashier_sees_only_own_invoices(self):
        self.client.force_authenticate(user=self.cashier)

        res = self.client.get(reverse("invoices-list"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        ids = [row["id"] for row in res.json()["results"]]
        self.assertEqual(ids, [str(self.own.id)])

    def test_cashier_cannot_open_someone_elses_invoice(self):
        self.client.force_authenticate(user=self.cashier)

        res = self.client.get(reverse("invoices-detail", args=[self.mrp.id]))

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_manager_filters_by_store(self):
        self.client.force_authenticate(user=self.manager)

        res = self.client.get(reverse("invoices-list"))
        self.assertEqual(len(res.json()["results"]), 2)

        res = self.client.get(reverse("invoices-list"), {"store_id": str(self.other_store.id)})
        ids = [row["id"] for row in res.json()["results"]]
        self.assertEqual(ids, [str(self.mrp.id)])

    def test_filter_by_customer_phone_and_mode(self):
        self.client.force_authenticate(user=self.manager)

        res = self.client.get(reverse("invoices-list"), {"customer_phone": "9876543210"})
        self.assertEqual([r["id"] for r in res.json()["results"]], [str(self.own.id)])

        res = self.client.get(reverse("invoices-list"), {"pricing_mode": "inclusive_mrp"})
        self.assertEqual([r["id"] for r in res.json()["results"]], [str(self.mrp.id)])

    def test_detail_carries_ledger_figures(self):
        self.client.force_authenticate(user=self.cashier)

        res = self.client.get(reverse("invoices-detail", args=[self.own.id]))

        body = res.json()
        self.assertEqual(body["bill_number"], "150326-01")
        self.assertEqual(body["tax_amount"], "36.00")
        self.assertEqual(body["counter_name"], "Till 1")
        self.assertEqual(body["items_data"][0]["name"], "Shampoo")

    def test_thermal_receipt(self):
        self.client.force_authenticate(user=self.cashier)

        res = self.client.get(reverse("invoices-receipt", args=[self.own.id]))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        body = res.json()
        self.assertEqual(body["format"], "thermal")
        self.assertEqual(body["store"]["gstin"], "29ABCDE1234F1Z5")
        self.assertEqual(body["cashier"], "c1@example.com")
        self.assertEqual(body["counter"], "Till 1")
        self.assertEqual(body["tax_note"], "GST added extra")
        self.assertEqual(body["totals"]["total"], "236.00")
        self.assertNotIn("included_tax", body["totals"])
        self.assertEqual(body["items"][0]["rate"], "100.00")
        self.assertEqual(body["items"][0]["amount"], "200.00")
        self.assertIn("footer", body)

    def test_a4_receipt(self):
        self.client.force_authenticate(user=self.cashier)

        res = self.client.get(reverse("invoices-receipt", args=[self.own.id]), {"layout": "a4"})

        body = res.json()
        self.assertEqual(body["format"], "a4")
        self.assertEqual(body["title"], "TAX INVOICE")
        self.assertEqual(body["items"][0]["sl_no"], 1)
        self.assertEqual(body["items"][0]["taxable_value"], "200.00")
        self.assertEqual(body["items"][0]["tax"], "36.00")

    def test_mrp_receipt_shows_included_tax(self):
        self.client.force_authenticate(user=self.manager)

        res = self.client.get(reverse("invoices-receipt", args=[self.mrp.id]))

        body = res.json()
        self.assertEqual(body["tax_note"], "MRP Inclusive - Taxes included in price")
        self.assertEqual(body["totals"]["tax"], "0.00")
        self.assertEqual(body["totals"]["included_tax"], "36.00")

    def test_unknown_layout_rejected(self):
        self.client.force_authenticate(user=self.cashier)

        res = self.client.get(reverse("invoices-receipt", args=[self.own.id]), {"layout": "pdf"})

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.json()["error"]["code"], "INVALID_LAYOUT")

    def test_invoices_are_read_only(self):
        self.client.force_authenticate(user=self.manager)

        res = self.client.delete(reverse("invoices-detail", args=[self.own.id]))

        self.assertEqual(res.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

    def test_anonymous_rejected(self):
        res = self.client.get(reverse("invoices-list"))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
