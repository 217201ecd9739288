from django.contrib import admin

from .models import Cart, CartItem

# =====================================================
# CART ITEM INLINE (READ-ONLY)
# =====================================================


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    can_delete = False
    readonly_fields = (
        "product",
        "quantity",
        "unit_price",
        "catalog_total",
        "created_at",
    )

    def has_add_permission(self, request, obj=None):
        return False


# =====================================================
# CART ADMIN
# =====================================================


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "store",
        "user",
        "is_active",
        "item_count",
        "created_at",
    )

    readonly_fields = (
        "id",
        "store",
        "user",
        "is_active",
        "created_at",
        "updated_at",
        "item_count",
    )

    search_fields = ("user__email",)
    list_filter = ("is_active", "store", "created_at")

    inlines = [CartItemInline]
