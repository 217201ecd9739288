# promotions/admin.py

"""
PROMOTIONS ADMIN

Coupons, product discounts and loyalty knobs are managed here; the POS only
consumes them.
"""

from django.contrib import admin

from promotions.models import Coupon, LoyaltyAccount, LoyaltySettings, ProductDiscount


@admin.register(ProductDiscount)
class ProductDiscountAdmin(admin.ModelAdmin):
    list_display = ("product", "kind", "value", "start_at", "end_at", "is_active")
    list_filter = ("kind", "is_active")
    search_fields = ("product__name", "product__sku")
    ordering = ("-start_at",)


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    list_display = ("code", "store", "kind", "value", "start_at", "end_at", "is_active")
    list_filter = ("store", "kind", "is_active")
    search_fields = ("code",)


@admin.register(LoyaltySettings)
class LoyaltySettingsAdmin(admin.ModelAdmin):
    list_display = ("store", "points_per_rupee", "rupees_per_point_redeem", "min_points_to_redeem", "is_active")


@admin.register(LoyaltyAccount)
class LoyaltyAccountAdmin(admin.ModelAdmin):
    list_display = ("customer_phone", "customer_name", "store", "points", "total_spent", "updated_at")
    list_filter = ("store",)
    search_fields = ("customer_phone", "customer_name")
    readonly_fields = ("created_at", "updated_at")
