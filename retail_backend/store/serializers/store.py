# store/serializers/store.py

from rest_framework import serializers

from store.models import BillingSettings, Counter, Store


class StoreSerializer(serializers.ModelSerializer):
    """
    Serializer for a store (merchant / branch).
    """

    class Meta:
        model = Store
        fields = [
            "id",
            "name",
            "code",
            "gstin",
            "address",
            "phone",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "created_at",
            "updated_at",
        ]


class CounterSerializer(serializers.ModelSerializer):
    class Meta:
        model = Counter
        fields = ["id", "store", "name", "is_active", "created_at"]
        read_only_fields = ["id", "store", "created_at"]


class BillingSettingsSerializer(serializers.ModelSerializer):
    """
    Merchant tax regime.

    inclusive_bill_type is kept even in exclusive mode so switching modes
    back and forth does not lose the merchant's MRP/split choice.
    """

    store_id = serializers.UUIDField(source="store.id", read_only=True)
    pricing_mode = serializers.SerializerMethodField()

    class Meta:
        model = BillingSettings
        fields = [
            "store_id",
            "mode",
            "inclusive_bill_type",
            "trade_type",
            "pricing_mode",
            "updated_at",
        ]
        read_only_fields = ["store_id", "pricing_mode", "updated_at"]

    def get_pricing_mode(self, obj) -> str:
        return obj.to_tax_settings().pricing_mode.value
