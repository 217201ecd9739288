"""
PATH: pos/models/cart.py

CART MODEL

Purpose:
- Active POS cart (temporary, mutable).
- Store-scoped: the store decides billing settings, coupons and bill numbering.

Rules:
- One active cart per user per store.
- Converted into an Invoice at checkout.
- Cart is read-only after deactivation.
- Totals are NOT stored here; the pricing engine derives them on demand.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Sum

from store.models import Store

User = settings.AUTH_USER_MODEL


class Cart(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(
        Store,
        on_delete=models.PROTECT,
        related_name="carts",
    )

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="carts",
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "store"],
                condition=models.Q(is_active=True),
                name="one_active_cart_per_user_per_store",
            )
        ]

    def clean(self):
        if self.user_id is None:
            raise ValidationError({"user": "user is required"})
        if self.store_id is None:
            raise ValidationError({"store": "store is required"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    @property
    def item_count(self) -> int:
        """Number of lines (weights make a unit count meaningless)."""
        return self.items.count()

    @property
    def total_quantity(self) -> Decimal:
        total = self.items.aggregate(total=Sum("quantity")).get("total")
        return total or Decimal("0")

    @property
    def is_empty(self) -> bool:
        return not self.items.exists()

    def assert_active(self):
        if not self.is_active:
            raise ValueError("Cart is inactive and cannot be modified")

    def __str__(self):
        status = "ACTIVE" if self.is_active else "CLOSED"
        return f"Cart {self.id} | {self.store.name} | {self.user} | {status}"
