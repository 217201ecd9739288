# promotions/models/discount.py

"""
DISCOUNT MODELS

- ProductDiscount: time-windowed discount on one product, applied per line
  before tax normalization.
- Coupon: code-activated discount applied once to the whole order.

Both are inert outside [start_at, end_at]; the window is inclusive at both ends.
"""

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models.functions import Upper

from pricing.engine import CouponRule, DiscountKind, ProductDiscountRule
from products.models import Product
from store.models import Store


class DiscountKindChoices(models.TextChoices):
    PERCENTAGE = DiscountKind.PERCENTAGE.value, "Percentage"
    FIXED = DiscountKind.FIXED.value, "Fixed amount"


def _validate_kind_value(kind, value):
    if value is None or Decimal(value) < 0:
        raise ValidationError({"value": "Discount value must be non-negative"})
    if kind == DiscountKindChoices.PERCENTAGE and Decimal(value) > Decimal("100"):
        raise ValidationError({"value": "Percentage discount cannot exceed 100"})


class ProductDiscount(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="discounts",
    )

    kind = models.CharField(max_length=16, choices=DiscountKindChoices.choices)
    value = models.DecimalField(max_digits=10, decimal_places=2)

    start_at = models.DateTimeField()
    end_at = models.DateTimeField()

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-start_at"]
        indexes = [
            models.Index(fields=["product", "start_at", "end_at"], name="promo_pd_product_window_idx"),
        ]

    def clean(self):
        _validate_kind_value(self.kind, self.value)
        if self.start_at and self.end_at and self.end_at < self.start_at:
            raise ValidationError({"end_at": "end_at must be on or after start_at"})

    def to_rule(self) -> ProductDiscountRule:
        return ProductDiscountRule(
            kind=DiscountKind(self.kind),
            value=Decimal(self.value),
            start_at=self.start_at,
            end_at=self.end_at,
        )

    def __str__(self):
        return f"{self.product} | {self.kind} {self.value}"


class Coupon(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(
        Store,
        on_delete=models.CASCADE,
        related_name="coupons",
    )

    code = models.CharField(max_length=32)
    kind = models.CharField(max_length=16, choices=DiscountKindChoices.choices)
    value = models.DecimalField(max_digits=10, decimal_places=2)

    # Open-ended when null
    start_at = models.DateTimeField(null=True, blank=True)
    end_at = models.DateTimeField(null=True, blank=True)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["code"]
        constraints = [
            models.UniqueConstraint(
                Upper("code"),
                "store",
                name="uniq_coupon_code_per_store",
            ),
        ]

    def save(self, *args, **kwargs):
        self.code = (self.code or "").strip().upper()
        super().save(*args, **kwargs)

    def clean(self):
        _validate_kind_value(self.kind, self.value)
        if self.start_at and self.end_at and self.end_at < self.start_at:
            raise ValidationError({"end_at": "end_at must be on or after start_at"})

    def is_valid_at(self, now) -> bool:
        if not self.is_active:
            return False
        if self.start_at and now < self.start_at:
            return False
        if self.end_at and now > self.end_at:
            return False
        return True

    def to_rule(self) -> CouponRule:
        return CouponRule(kind=DiscountKind(self.kind), value=Decimal(self.value), code=self.code)

    def __str__(self):
        return f"{self.code} ({self.store})"
