# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Catalog admin.

- Tax rates and price type are edited here; they feed the pricing engine.
- Product discounts are managed inline from the promotions app.
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Product
from promotions.models import ProductDiscount


class ProductDiscountInline(admin.TabularInline):
    model = ProductDiscount
    extra = 0
    fields = ("kind", "value", "start_at", "end_at", "is_active")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "sku",
        "name",
        "store",
        "unit_price",
        "price_type",
        "cgst_rate",
        "sgst_rate",
        "igst_rate",
        "stock_quantity",
        "is_low_stock",
        "is_active",
    )
    list_filter = ("is_active", "price_type", "store")
    search_fields = ("sku", "name")
    ordering = ("-created_at",)
    readonly_fields = ("created_at", "updated_at")

    inlines = [ProductDiscountInline]

    @admin.display(boolean=True, description="Low stock")
    def is_low_stock(self, obj):
        return obj.is_low_stock
