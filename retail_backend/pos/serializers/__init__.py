"""
PATH: pos/serializers/__init__.py
"""

from .cart import CartSerializer
from .cart_item import CartItemSerializer
from .inputs import (
    AddCartItemInputSerializer,
    CartSummaryInputSerializer,
    CheckoutInputSerializer,
    StoreScopedSerializer,
    UpdateCartItemInputSerializer,
)

__all__ = [
    "AddCartItemInputSerializer",
    "CartItemSerializer",
    "CartSerializer",
    "CartSummaryInputSerializer",
    "CheckoutInputSerializer",
    "StoreScopedSerializer",
    "UpdateCartItemInputSerializer",
]
