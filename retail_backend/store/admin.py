# store/admin.py

from django.contrib import admin

from store.models import BillingSettings, Counter, Store


class BillingSettingsInline(admin.StackedInline):
    model = BillingSettings
    can_delete = False
    extra = 0
    max_num = 1


class CounterInline(admin.TabularInline):
    model = Counter
    extra = 0
    fields = ("name", "is_active")


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "gstin", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "code", "gstin")
    inlines = [BillingSettingsInline, CounterInline]


@admin.register(Counter)
class CounterAdmin(admin.ModelAdmin):
    list_display = ("name", "store", "is_active", "created_at")
    list_filter = ("store", "is_active")
    search_fields = ("name",)
