"""
PATH: store/models/__init__.py

Store models export surface.
"""

from .billing_settings import BillingSettings
from .counter import Counter
from .store import Store

__all__ = [
    "BillingSettings",
    "Counter",
    "Store",
]
