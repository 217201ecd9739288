"""
PATH: pos/models/__init__.py

POS models export surface.
"""

from .cart import Cart
from .cart_item import CartItem

__all__ = [
    "Cart",
    "CartItem",
]
