from django.contrib.auth import get_user_model
from django.db import IntegrityError
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from pricing.engine import InclusiveVariant, PricingMode, TaxMode, TradeType
from store.models import BillingSettings, Counter, Store

User = get_user_model()


class BillingSettingsModelTests(TestCase):
    def setUp(self):
        self.store = Store.objects.create(name="Main Street")

    def test_store_without_row_bills_exclusive_intra_state(self):
        billing = BillingSettings.for_store(self.store)

        self.assertTrue(billing._state.adding)
        tax_settings = billing.to_tax_settings()
        self.assertEqual(tax_settings.mode, TaxMode.EXCLUSIVE)
        self.assertEqual(tax_settings.trade_type, TradeType.INTRA_STATE)
        self.assertEqual(tax_settings.pricing_mode, PricingMode.EXCLUSIVE)

    def test_inclusive_mrp_maps_to_pricing_mode(self):
        BillingSettings.objects.create(store=self.store, mode="inclusive", inclusive_bill_type="mrp")

        tax_settings = BillingSettings.for_store(self.store).to_tax_settings()

        self.assertEqual(tax_settings.inclusive_variant, InclusiveVariant.MRP)
        self.assertEqual(tax_settings.pricing_mode, PricingMode.INCLUSIVE_MRP)

    def test_zero_igst_override_is_ignored(self):
        tax_settings = BillingSettings.for_store(self.store).to_tax_settings(igst_override="0")
        self.assertIsNone(tax_settings.igst_override)

    def test_one_settings_row_per_store(self):
        BillingSettings.objects.create(store=self.store)
        with self.assertRaises(IntegrityError):
            BillingSettings.objects.create(store=self.store)


class StoreAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(email="a@example.com", password="pass", role="admin")
        self.manager = User.objects.create_user(email="m@example.com", password="pass", role="manager")
        self.cashier = User.objects.create_user(email="c@example.com", password="pass", role="cashier")

        self.store = Store.objects.create(name="Main Street", code="MS01")
        Counter.objects.create(store=self.store, name="Till 2")
        Counter.objects.create(store=self.store, name="Till 1")
        Counter.objects.create(store=self.store, name="Old Till", is_active=False)

    def test_billing_settings_default_payload(self):
        self.client.force_authenticate(user=self.cashier)

        res = self.client.get(reverse("billing-settings", args=[self.store.id]))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        body = res.json()
        self.assertEqual(body["mode"], "exclusive")
        self.assertEqual(body["inclusive_bill_type"], "split")
        self.assertEqual(body["trade_type"], "intra_state")
        self.assertEqual(body["pricing_mode"], "exclusive")

    def test_cashier_cannot_change_billing_settings(self):
        self.client.force_authenticate(user=self.cashier)

        res = self.client.put(
            reverse("billing-settings", args=[self.store.id]),
            {"mode": "inclusive"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(BillingSettings.objects.exists())

    def test_manager_switches_to_mrp(self):
        self.client.force_authenticate(user=self.manager)

        res = self.client.put(
            reverse("billing-settings", args=[self.store.id]),
            {"mode": "inclusive", "inclusive_bill_type": "mrp"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.json()["pricing_mode"], "inclusive_mrp")
        saved = BillingSettings.objects.get(store=self.store)
        self.assertEqual(saved.mode, "inclusive")
        self.assertEqual(saved.trade_type, "intra_state")

    def test_partial_update_keeps_other_fields(self):
        BillingSettings.objects.create(store=self.store, mode="inclusive", inclusive_bill_type="mrp")
        self.client.force_authenticate(user=self.manager)

        res = self.client.put(
            reverse("billing-settings", args=[self.store.id]),
            {"trade_type": "inter_state"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        saved = BillingSettings.objects.get(store=self.store)
        self.assertEqual(saved.inclusive_bill_type, "mrp")
        self.assertEqual(saved.trade_type, "inter_state")

    def test_invalid_mode_rejected(self):
        self.client.force_authenticate(user=self.manager)

        res = self.client.put(
            reverse("billing-settings", args=[self.store.id]),
            {"mode": "sometimes"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_active_counters_listed_by_name(self):
        self.client.force_authenticate(user=self.cashier)

        res = self.client.get(reverse("stores-counters", args=[self.store.id]))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([c["name"] for c in res.json()], ["Till 1", "Till 2"])

    def test_only_admin_creates_stores(self):
        self.client.force_authenticate(user=self.manager)
        res = self.client.post(reverse("stores-list"), {"name": "Airport"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.admin)
        res = self.client.post(reverse("stores-list"), {"name": "Airport", "gstin": "29ABCDE1234F1Z5"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.json()["gstin"], "29ABCDE1234F1Z5")
