# store/views/__init__.py

from .store import BillingSettingsView, StoreViewSet

__all__ = [
    "BillingSettingsView",
    "StoreViewSet",
]
