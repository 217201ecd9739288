# sales/api/urls.py

"""
SALES API URLS

Provides:
- /api/sales/invoices/                 (list, filterable)
- /api/sales/invoices/<uuid>/          (retrieve)
- /api/sales/invoices/<uuid>/receipt/  (?layout=thermal|a4)

Checkout itself lives under /api/pos/checkout/.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from sales.api.viewsets.invoice import InvoiceViewSet

router = DefaultRouter()
router.register(r"invoices", InvoiceViewSet, basename="invoices")

urlpatterns = [
    path("", include(router.urls)),
]
