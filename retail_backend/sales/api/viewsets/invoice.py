# sales/api/viewsets/invoice.py

"""
======================================================
PATH: sales/api/viewsets/invoice.py
======================================================
INVOICE VIEWSET (STAFF)

Purpose:
- Billing history for staff UI (list + retrieve, filterable).
- Receipt endpoint: print-ready payload in thermal or A4 layout.

Security:
- Requires IsAuthenticated + staff role.
- Cashiers see the invoices they billed; managers/admins see all.
======================================================
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from sales.api.filters import InvoiceFilter
from sales.models import Invoice
from sales.serializers import InvoiceListSerializer, InvoiceSerializer
from sales.services.receipt import FORMATS, FORMAT_THERMAL, ReceiptFormatError, build_receipt
from users.models import User
from users.permissions import IsStaff


class InvoiceViewSet(viewsets.ReadOnlyModelViewSet):
    permission_classes = [IsAuthenticated, IsStaff]
    filterset_class = InvoiceFilter

    def get_serializer_class(self):
        if self.action == "list":
            return InvoiceListSerializer
        return InvoiceSerializer

    def get_queryset(self):
        qs = Invoice.objects.select_related("store", "counter", "created_by").order_by("-created_at")

        user = self.request.user
        if not user.is_superuser and getattr(user, "role", None) == User.ROLE_CASHIER:
            qs = qs.filter(created_by=user)
        return qs

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="layout",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=list(FORMATS),
                description="thermal (default) or a4",
            ),
        ],
        responses={200: dict},
        description="Print-ready receipt payload for an invoice.",
    )
    @action(detail=True, methods=["get"], url_path="receipt")
    def receipt(self, request, pk=None):
        invoice: Invoice = self.get_object()

        fmt = request.query_params.get("layout") or FORMAT_THERMAL
        try:
            payload = build_receipt(invoice, fmt=fmt)
        except ReceiptFormatError as exc:
            return Response(
                {"error": {"code": "INVALID_LAYOUT", "message": str(exc)}},
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(payload, status=status.HTTP_200_OK)
