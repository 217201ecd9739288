# promotions/models/loyalty.py

"""
LOYALTY MODELS

- LoyaltySettings: per-store earn/redeem knobs.
- LoyaltyAccount: a customer's point balance at one store, keyed by phone.

Points are integers. Balance never goes negative.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from store.models import Store


def _default_min_points():
    return getattr(settings, "POS_DEFAULT_MIN_POINTS_TO_REDEEM", 100)


class LoyaltySettings(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.OneToOneField(
        Store,
        on_delete=models.CASCADE,
        related_name="loyalty_settings",
    )

    # Earned per LOYALTY_EARN_SPEND_UNIT of bill total
    points_per_rupee = models.DecimalField(max_digits=8, decimal_places=2, default=Decimal("1.00"))

    # Value of one point when redeemed
    rupees_per_point_redeem = models.DecimalField(max_digits=8, decimal_places=2, default=Decimal("1.00"))

    min_points_to_redeem = models.PositiveIntegerField(default=_default_min_points)

    is_active = models.BooleanField(default=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "loyalty settings"
        verbose_name_plural = "loyalty settings"

    def clean(self):
        if self.points_per_rupee is not None and self.points_per_rupee < 0:
            raise ValidationError({"points_per_rupee": "Must be non-negative"})
        if self.rupees_per_point_redeem is not None and self.rupees_per_point_redeem < 0:
            raise ValidationError({"rupees_per_point_redeem": "Must be non-negative"})

    def __str__(self):
        return f"Loyalty | {self.store}"


class LoyaltyAccount(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(
        Store,
        on_delete=models.CASCADE,
        related_name="loyalty_accounts",
    )

    customer_phone = models.CharField(max_length=20, db_index=True)
    customer_name = models.CharField(max_length=255, blank=True, default="")

    points = models.PositiveIntegerField(default=0)
    total_spent = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["store", "customer_phone"],
                name="uniq_loyalty_account_per_store_phone",
            ),
        ]

    def __str__(self):
        return f"{self.customer_phone} | {self.points} pts"
