"""
PATH: products/migrations/0001_initial.py

MIGRATION: CREATE Product (GST rates, price type, on-hand stock)
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("store", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("sku", models.CharField(db_index=True, help_text="SKU / barcode", max_length=128, unique=True)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=10)),
                (
                    "price_type",
                    models.CharField(
                        choices=[("fixed", "Fixed (per unit)"), ("weight", "Weight (per kg)")],
                        default="fixed",
                        max_length=16,
                    ),
                ),
                ("cgst_rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5)),
                ("sgst_rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5)),
                ("igst_rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5)),
                ("stock_quantity", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=12)),
                (
                    "low_stock_threshold",
                    models.DecimalField(decimal_places=3, default=Decimal("10.000"), max_digits=12),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "store",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="products",
                        to="store.store",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["sku"], name="products_pr_sku_idx"),
                    models.Index(fields=["name"], name="products_pr_name_idx"),
                ],
            },
        ),
    ]
