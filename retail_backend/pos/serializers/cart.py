# pos/serializers/cart.py

"""
CART SERIALIZER

Purpose:
- Return a POS cart in a frontend-friendly shape.
- Include store context for multi-store POS operations.
- Money totals are NOT computed here; POST /api/pos/cart/summary/ returns
  the priced breakdown.
"""

from rest_framework import serializers

from pos.models import Cart
from .cart_item import CartItemSerializer


class CartSerializer(serializers.ModelSerializer):
    store_id = serializers.UUIDField(source="store.id", read_only=True)
    store_name = serializers.CharField(source="store.name", read_only=True)

    items = CartItemSerializer(many=True, read_only=True)

    item_count = serializers.IntegerField(read_only=True)
    total_quantity = serializers.DecimalField(max_digits=14, decimal_places=3, read_only=True)

    class Meta:
        model = Cart
        fields = [
            "id",
            "store_id",
            "store_name",
            "user",
            "is_active",
            "items",
            "item_count",
            "total_quantity",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
