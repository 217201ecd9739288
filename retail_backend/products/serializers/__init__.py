# products/serializers/__init__.py

from .product import ProductSerializer, ProductWriteSerializer

__all__ = [
    "ProductSerializer",
    "ProductWriteSerializer",
]
