# store/serializers/__init__.py

from .store import BillingSettingsSerializer, CounterSerializer, StoreSerializer

__all__ = [
    "BillingSettingsSerializer",
    "CounterSerializer",
    "StoreSerializer",
]
