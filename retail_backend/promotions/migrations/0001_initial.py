"""
PATH: promotions/migrations/0001_initial.py

MIGRATION: CREATE ProductDiscount, Coupon, LoyaltySettings, LoyaltyAccount
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import django.db.models.deletion
import django.db.models.functions.text
from django.db import migrations, models

import promotions.models.loyalty

DISCOUNT_KIND_CHOICES = [("percentage", "Percentage"), ("fixed", "Fixed amount")]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("products", "0001_initial"),
        ("store", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ProductDiscount",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("kind", models.CharField(choices=DISCOUNT_KIND_CHOICES, max_length=16)),
                ("value", models.DecimalField(decimal_places=2, max_digits=10)),
                ("start_at", models.DateTimeField()),
                ("end_at", models.DateTimeField()),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="discounts",
                        to="products.product",
                    ),
                ),
            ],
            options={
                "ordering": ["-start_at"],
                "indexes": [
                    models.Index(fields=["product", "start_at", "end_at"], name="promo_pd_product_window_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Coupon",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("code", models.CharField(max_length=32)),
                ("kind", models.CharField(choices=DISCOUNT_KIND_CHOICES, max_length=16)),
                ("value", models.DecimalField(decimal_places=2, max_digits=10)),
                ("start_at", models.DateTimeField(blank=True, null=True)),
                ("end_at", models.DateTimeField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="coupons",
                        to="store.store",
                    ),
                ),
            ],
            options={
                "ordering": ["code"],
            },
        ),
        migrations.AddConstraint(
            model_name="coupon",
            constraint=models.UniqueConstraint(
                django.db.models.functions.text.Upper("code"),
                models.F("store"),
                name="uniq_coupon_code_per_store",
            ),
        ),
        migrations.CreateModel(
            name="LoyaltySettings",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("points_per_rupee", models.DecimalField(decimal_places=2, default=Decimal("1.00"), max_digits=8)),
                (
                    "rupees_per_point_redeem",
                    models.DecimalField(decimal_places=2, default=Decimal("1.00"), max_digits=8),
                ),
                (
                    "min_points_to_redeem",
                    models.PositiveIntegerField(default=promotions.models.loyalty._default_min_points),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "store",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="loyalty_settings",
                        to="store.store",
                    ),
                ),
            ],
            options={
                "verbose_name": "loyalty settings",
                "verbose_name_plural": "loyalty settings",
            },
        ),
        migrations.CreateModel(
            name="LoyaltyAccount",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("customer_phone", models.CharField(db_index=True, max_length=20)),
                ("customer_name", models.CharField(blank=True, default="", max_length=255)),
                ("points", models.PositiveIntegerField(default=0)),
                ("total_spent", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="loyalty_accounts",
                        to="store.store",
                    ),
                ),
            ],
        ),
        migrations.AddConstraint(
            model_name="loyaltyaccount",
            constraint=models.UniqueConstraint(
                fields=("store", "customer_phone"),
                name="uniq_loyalty_account_per_store_phone",
            ),
        ),
    ]
