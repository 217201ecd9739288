# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from store.models import Store


class Product(models.Model):
    """
    Represents a sellable catalog product.

    PRICING MODEL (IMPORTANT):
    - unit_price is the merchant-entered catalog price.
      Whether it already contains GST depends on the store's BillingSettings.
    - cgst/sgst/igst are percentages. CGST+SGST apply to intra-state sales,
      IGST to inter-state sales.
    - price_type=weight means quantity is a weight and unit_price is per unit weight.

    STOCK MODEL:
    - stock_quantity is a plain on-hand figure (decimal, to hold weights).
    - POS checks it at add-to-cart time; checkout decrements it (floored at 0).
    """

    class PriceType(models.TextChoices):
        FIXED = "fixed", "Fixed (per unit)"
        WEIGHT = "weight", "Weight (per kg)"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(
        Store,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="products",
    )

    sku = models.CharField(max_length=128, unique=True, db_index=True, help_text="SKU / barcode")
    name = models.CharField(max_length=255, db_index=True)

    unit_price = models.DecimalField(max_digits=10, decimal_places=2)

    price_type = models.CharField(
        max_length=16,
        choices=PriceType.choices,
        default=PriceType.FIXED,
    )

    cgst_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))
    sgst_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))
    igst_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))

    stock_quantity = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal("0.000"))
    low_stock_threshold = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal("10.000"))

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["sku"], name="products_pr_sku_idx"),
            models.Index(fields=["name"], name="products_pr_name_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.sku})"

    def clean(self):
        if self.unit_price is None or Decimal(self.unit_price) < 0:
            raise ValidationError({"unit_price": "Unit price must be non-negative"})

        for field in ("cgst_rate", "sgst_rate", "igst_rate"):
            rate = getattr(self, field)
            if rate is None or not (Decimal("0") <= Decimal(rate) <= Decimal("100")):
                raise ValidationError({field: "Tax rate must be between 0 and 100"})

        if self.stock_quantity is not None and Decimal(self.stock_quantity) < 0:
            raise ValidationError({"stock_quantity": "Stock cannot be negative"})

    @property
    def is_weight_priced(self) -> bool:
        return self.price_type == self.PriceType.WEIGHT

    @property
    def is_low_stock(self) -> bool:
        return Decimal(self.stock_quantity or 0) <= Decimal(self.low_stock_threshold or 0)
