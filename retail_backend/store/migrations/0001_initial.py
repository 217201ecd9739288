"""
PATH: store/migrations/0001_initial.py

MIGRATION: CREATE Store, Counter, BillingSettings
"""

from __future__ import annotations

import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Store",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                (
                    "code",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Unique outlet code (optional). If set, must be unique.",
                        max_length=50,
                        null=True,
                    ),
                ),
                ("gstin", models.CharField(blank=True, help_text="GST identification number", max_length=15)),
                ("address", models.TextField(blank=True)),
                ("phone", models.CharField(blank=True, max_length=50)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.AddConstraint(
            model_name="store",
            constraint=models.UniqueConstraint(
                condition=models.Q(("code__isnull", False), models.Q(("code", ""), _negated=True)),
                fields=("code",),
                name="uniq_store_code_when_present",
            ),
        ),
        migrations.CreateModel(
            name="Counter",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=100)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="counters",
                        to="store.store",
                    ),
                ),
            ],
            options={
                "ordering": ["store", "name"],
            },
        ),
        migrations.AddConstraint(
            model_name="counter",
            constraint=models.UniqueConstraint(fields=("store", "name"), name="uniq_counter_name_per_store"),
        ),
        migrations.CreateModel(
            name="BillingSettings",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "mode",
                    models.CharField(
                        choices=[
                            ("exclusive", "Exclusive (tax added on top)"),
                            ("inclusive", "Inclusive (price contains tax)"),
                        ],
                        default="exclusive",
                        max_length=16,
                    ),
                ),
                (
                    "inclusive_bill_type",
                    models.CharField(
                        choices=[
                            ("split", "Split (base + GST shown)"),
                            ("mrp", "MRP (final price, tax not added)"),
                        ],
                        default="split",
                        max_length=16,
                    ),
                ),
                (
                    "trade_type",
                    models.CharField(
                        choices=[
                            ("intra_state", "Intra-state (CGST + SGST)"),
                            ("inter_state", "Inter-state (IGST)"),
                        ],
                        default="intra_state",
                        max_length=16,
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "store",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="billing_settings",
                        to="store.store",
                    ),
                ),
            ],
            options={
                "verbose_name": "billing settings",
                "verbose_name_plural": "billing settings",
            },
        ),
    ]
