# sales/admin.py

from django.contrib import admin

from sales.models import Invoice


# ======================================================
# INVOICE ADMIN (READ-ONLY LEDGER)
# ======================================================


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = (
        "bill_number",
        "store",
        "counter",
        "customer_phone",
        "tax_amount",
        "discount_amount",
        "total_amount",
        "pricing_mode",
        "created_at",
    )
    list_filter = ("store", "pricing_mode", "trade_type", "payment_method", "created_at")
    search_fields = ("bill_number", "customer_phone", "customer_name")
    ordering = ("-created_at",)

    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
