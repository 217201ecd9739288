# pos/models/cart_item.py

"""
CART ITEM MODEL

Purpose:
- Store POS cart line items.
- Unit price is a snapshot of the catalog price at time of add (server-controlled).
- Quantity is a decimal: a unit count for fixed-price products, a weight
  for weight-priced products.

Rules:
- One product per cart (DB constraint).
- Quantity must be > 0; fixed-price products take whole units only.
- Unit price must be >= 0.
"""

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from products.models import Product
from .cart import Cart


class CartItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    cart = models.ForeignKey(
        Cart,
        on_delete=models.CASCADE,
        related_name="items",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="cart_items",
    )

    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        help_text="Units, or weight for weight-priced products",
    )

    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text="Catalog price snapshot at time of adding to cart (server-controlled)",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["cart", "product"],
                name="unique_product_per_cart",
            )
        ]

    def clean(self):
        if self.quantity is None or Decimal(self.quantity) <= 0:
            raise ValidationError({"quantity": "Quantity must be greater than zero"})

        if (
            self.product_id
            and not self.product.is_weight_priced
            and Decimal(self.quantity) != Decimal(self.quantity).to_integral_value()
        ):
            raise ValidationError({"quantity": "Quantity must be a whole number for fixed-price products"})

        if self.unit_price is None or self.unit_price < 0:
            raise ValidationError({"unit_price": "Unit price must be non-negative"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    @property
    def catalog_total(self) -> Decimal:
        """Catalog price x quantity, before tax handling and discounts."""
        return (self.unit_price or Decimal("0.00")) * (self.quantity or Decimal("0"))

    def __str__(self):
        return f"{getattr(self.product, 'name', 'Product')} x {self.quantity}"
