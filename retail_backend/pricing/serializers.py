# pricing/serializers.py

"""
BREAKDOWN SERIALIZERS

Purpose:
- Render an engine Breakdown for the API (cart summary, checkout response).
- Money is rendered to 2dp strings with ROUND_HALF_UP here and nowhere earlier.
- Breakdown totals come from Breakdown.rounded(), the same figures the ledger stores.
"""

from decimal import ROUND_HALF_UP

from rest_framework import serializers


def _money_field(**kwargs):
    return serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        rounding=ROUND_HALF_UP,
        read_only=True,
        **kwargs,
    )


def _rounded_field(name):
    # reads Breakdown.rounded() so the rendered figures reconcile with the ledger
    return _money_field(source=f"rounded.{name}")


class PricedLineSerializer(serializers.Serializer):
    product_id = serializers.CharField(source="product_ref", read_only=True)
    name = serializers.CharField(read_only=True)
    quantity = serializers.DecimalField(max_digits=12, decimal_places=3, read_only=True)
    price_type = serializers.CharField(source="price_type.value", read_only=True)

    catalog_price = _money_field()
    effective_price = _money_field()
    base_price = _money_field()
    display_price = _money_field()

    cgst_rate = serializers.DecimalField(source="rates.cgst", max_digits=5, decimal_places=2, read_only=True)
    sgst_rate = serializers.DecimalField(source="rates.sgst", max_digits=5, decimal_places=2, read_only=True)
    igst_rate = serializers.DecimalField(source="rates.igst", max_digits=5, decimal_places=2, read_only=True)

    line_base = _money_field()
    line_tax = _money_field()
    line_display_total = _money_field()
    line_discount = _money_field()
    discount_label = serializers.CharField(read_only=True)


class BreakdownSerializer(serializers.Serializer):
    mode = serializers.CharField(source="mode.value", read_only=True)
    trade_type = serializers.CharField(source="trade_type.value", read_only=True)
    tax_note = serializers.CharField(read_only=True)

    lines = PricedLineSerializer(many=True, read_only=True)

    subtotal = _rounded_field("subtotal")
    cgst_total = _rounded_field("cgst_total")
    sgst_total = _rounded_field("sgst_total")
    igst_total = _rounded_field("igst_total")
    product_tax_amount = _rounded_field("product_tax_amount")
    additional_tax_amount = _rounded_field("additional_tax_amount")
    informational_tax_amount = _rounded_field("informational_tax_amount")
    product_discount_total = _rounded_field("product_discount_total")
    coupon_discount_amount = _rounded_field("coupon_discount_amount")
    loyalty_discount_amount = _rounded_field("loyalty_discount_amount")
    points_redeemed = serializers.IntegerField(read_only=True)
    tax_amount = _rounded_field("tax_amount")
    grand_total = _rounded_field("grand_total")

    coupon_code = serializers.CharField(read_only=True)
    bill_number = serializers.CharField(read_only=True)


class CartQuoteSerializer(serializers.Serializer):
    breakdown = BreakdownSerializer(read_only=True)
    max_redeemable_points = serializers.IntegerField(read_only=True)
    loyalty_balance = serializers.IntegerField(read_only=True)
