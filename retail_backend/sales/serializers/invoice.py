# sales/serializers/invoice.py

from rest_framework import serializers

from sales.models import Invoice


class InvoiceSerializer(serializers.ModelSerializer):
    """
    Invoice (ledger record) serializer, read-only.
    """

    store_name = serializers.CharField(source="store.name", read_only=True)
    counter_name = serializers.CharField(source="counter.name", read_only=True, default="")
    created_by_email = serializers.EmailField(source="created_by.email", read_only=True, default="")

    class Meta:
        model = Invoice
        fields = [
            "id",
            "bill_number",
            "store",
            "store_name",
            "counter",
            "counter_name",
            "created_by",
            "created_by_email",
            "customer_name",
            "customer_phone",
            "items_data",
            "subtotal_amount",
            "cgst_amount",
            "sgst_amount",
            "igst_amount",
            "additional_tax_amount",
            "tax_amount",
            "informational_tax_amount",
            "product_discount_amount",
            "discount_amount",
            "loyalty_discount_amount",
            "coupon_code",
            "points_redeemed",
            "points_earned",
            "total_amount",
            "payment_method",
            "pricing_mode",
            "trade_type",
            "created_at",
        ]
        read_only_fields = fields


class InvoiceListSerializer(serializers.ModelSerializer):
    class Meta:
        model = Invoice
        fields = [
            "id",
            "bill_number",
            "store",
            "counter",
            "customer_name",
            "customer_phone",
            "tax_amount",
            "discount_amount",
            "total_amount",
            "payment_method",
            "pricing_mode",
            "created_at",
        ]
        read_only_fields = fields
