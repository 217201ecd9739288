"""
PATH: sales/migrations/0001_initial.py

MIGRATION: CREATE Invoice (immutable bill ledger)

- bill_number unique per store
- coupon and loyalty discounts stored in separate columns
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


def _money(**kwargs):
    return models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12, **kwargs)


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("store", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Invoice",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("bill_number", models.CharField(db_index=True, max_length=32)),
                ("customer_name", models.CharField(blank=True, default="", max_length=255)),
                ("customer_phone", models.CharField(blank=True, db_index=True, default="", max_length=20)),
                ("items_data", models.JSONField(default=list)),
                ("subtotal_amount", _money()),
                ("cgst_amount", _money()),
                ("sgst_amount", _money()),
                ("igst_amount", _money()),
                ("additional_tax_amount", _money()),
                ("tax_amount", _money()),
                ("informational_tax_amount", _money()),
                ("product_discount_amount", _money()),
                ("discount_amount", _money(help_text="Coupon discount")),
                ("loyalty_discount_amount", _money()),
                ("coupon_code", models.CharField(blank=True, default="", max_length=32)),
                ("points_redeemed", models.PositiveIntegerField(default=0)),
                ("points_earned", models.PositiveIntegerField(default=0)),
                ("total_amount", _money()),
                (
                    "payment_method",
                    models.CharField(
                        choices=[("cash", "Cash"), ("card", "Card"), ("upi", "UPI")],
                        default="cash",
                        max_length=16,
                    ),
                ),
                (
                    "pricing_mode",
                    models.CharField(
                        choices=[
                            ("exclusive", "Exclusive"),
                            ("inclusive_split", "Inclusive Split"),
                            ("inclusive_mrp", "Inclusive Mrp"),
                        ],
                        max_length=24,
                    ),
                ),
                (
                    "trade_type",
                    models.CharField(
                        choices=[("intra_state", "Intra State"), ("inter_state", "Inter State")],
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                (
                    "counter",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="invoices",
                        to="store.counter",
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        help_text="Cashier / staff who billed",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="invoices",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="invoices",
                        to="store.store",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["store", "created_at"], name="sales_inv_store_created_idx"),
                ],
            },
        ),
        migrations.AddConstraint(
            model_name="invoice",
            constraint=models.UniqueConstraint(fields=("store", "bill_number"), name="uniq_bill_number_per_store"),
        ),
    ]
