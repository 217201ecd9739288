"""
PATH: pos/serializers/cart_item.py

CART ITEM SERIALIZER

Purpose:
- Serialize cart line items for POS UI.
- unit_price is read-only (server-controlled catalog snapshot).
- Priced figures (tax, discounts, totals) come from the cart summary endpoint.
"""

from rest_framework import serializers

from pos.models import CartItem


class CartItemSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(source="product.id", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    sku = serializers.CharField(source="product.sku", read_only=True)
    price_type = serializers.CharField(source="product.price_type", read_only=True)

    unit_price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        read_only=True,
    )

    catalog_total = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        read_only=True,
    )

    class Meta:
        model = CartItem
        fields = [
            "id",
            "product_id",
            "product_name",
            "sku",
            "price_type",
            "quantity",
            "unit_price",
            "catalog_total",
            "created_at",
        ]
        read_only_fields = fields
