# products/serializers/product.py

"""
PRODUCT SERIALIZER

Purpose:
- Catalog lookup payload for the billing screens.
- Carries the tax rates and price type the pricing engine needs.
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "sku",
            "name",
            "store",
            "unit_price",
            "price_type",
            "cgst_rate",
            "sgst_rate",
            "igst_rate",
            "stock_quantity",
            "low_stock_threshold",
            "is_low_stock",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = [
            "id",
            "sku",
            "name",
            "store",
            "unit_price",
            "price_type",
            "cgst_rate",
            "sgst_rate",
            "igst_rate",
            "stock_quantity",
            "low_stock_threshold",
            "is_active",
        ]
        read_only_fields = ["id"]

    def validate(self, attrs):
        instance = Product(**{**self._current_values(), **attrs})
        try:
            instance.clean()
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.message_dict)
        return attrs

    def _current_values(self):
        if self.instance is None:
            return {}
        return {f: getattr(self.instance, f) for f in self.Meta.fields if f not in ("id", "store")}
