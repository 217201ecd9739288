"""
PATH: promotions/models/__init__.py

Promotions models export surface.
"""

from .discount import Coupon, DiscountKindChoices, ProductDiscount
from .loyalty import LoyaltyAccount, LoyaltySettings

__all__ = [
    "Coupon",
    "DiscountKindChoices",
    "LoyaltyAccount",
    "LoyaltySettings",
    "ProductDiscount",
]
