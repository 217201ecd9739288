# sales/serializers/__init__.py

from .invoice import InvoiceListSerializer, InvoiceSerializer

__all__ = [
    "InvoiceListSerializer",
    "InvoiceSerializer",
]
