"""
PATH: sales/models/__init__.py

Sales models export surface.
"""

from .invoice import Invoice

__all__ = [
    "Invoice",
]
