# pos/serializers/inputs.py

"""
POS REQUEST SERIALIZERS

Validation only; the views hand validated values to the services.
"""

from decimal import Decimal

from rest_framework import serializers

from sales.models import Invoice

RATE_KWARGS = dict(
    max_digits=5,
    decimal_places=2,
    min_value=Decimal("0"),
    max_value=Decimal("100"),
    required=False,
    allow_null=True,
)


class StoreScopedSerializer(serializers.Serializer):
    store_id = serializers.UUIDField(required=False, allow_null=True)


class AddCartItemInputSerializer(StoreScopedSerializer):
    product_id = serializers.UUIDField()
    quantity = serializers.DecimalField(max_digits=12, decimal_places=3, min_value=Decimal("0.001"))


class UpdateCartItemInputSerializer(StoreScopedSerializer):
    quantity = serializers.DecimalField(max_digits=12, decimal_places=3, min_value=Decimal("0.001"))


class CartSummaryInputSerializer(StoreScopedSerializer):
    coupon_code = serializers.CharField(required=False, allow_blank=True, default="")
    customer_phone = serializers.CharField(required=False, allow_blank=True, default="", max_length=20)
    redeem_points = serializers.IntegerField(required=False, min_value=0, default=0)
    additional_tax_rate = serializers.DecimalField(**RATE_KWARGS)
    igst_override = serializers.DecimalField(**RATE_KWARGS)


class CheckoutInputSerializer(CartSummaryInputSerializer):
    counter_id = serializers.UUIDField(required=False, allow_null=True)
    customer_name = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
    payment_method = serializers.ChoiceField(
        choices=[c[0] for c in Invoice.PAYMENT_CHOICES],
        required=False,
        default=Invoice.PAYMENT_CASH,
    )
    receipt_layout = serializers.ChoiceField(choices=["thermal", "a4"], required=False, default="thermal")
