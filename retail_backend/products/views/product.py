# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Staff product management endpoints (CRUD + low stock alert)
- Catalog search used by the POS product picker

Key rule alignment:
- Store-aware: ?store_id=<uuid> scopes the catalog to one store
  (products with no store are shared and always included).
- Deletion is admin-only.
"""

from django.db.models import F, Q
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from products.models import Product
from products.serializers.product import ProductSerializer, ProductWriteSerializer
from users.permissions import IsManagerOrAdmin, IsStaff


class ProductViewSet(viewsets.ModelViewSet):
    """
    Product endpoints.

    - list/retrieve/search: any staff (cashiers need the catalog)
    - create/update: managers + admins
    - destroy: admins only
    """

    serializer_class = ProductSerializer

    def get_permissions(self):
        if self.action in ("list", "retrieve", "low_stock_alerts"):
            return [IsAuthenticated(), IsStaff()]
        return [IsAuthenticated(), IsManagerOrAdmin()]

    def get_serializer_class(self):
        if self.action in ("create", "update", "partial_update"):
            return ProductWriteSerializer
        return ProductSerializer

    def _get_store_id(self):
        return (self.request.query_params.get("store_id") or "").strip() or None

    def get_queryset(self):
        qs = Product.objects.select_related("store")

        store_id = self._get_store_id()
        if store_id:
            qs = qs.filter(Q(store_id=store_id) | Q(store__isnull=True))

        q = (self.request.query_params.get("q") or "").strip()
        if q:
            qs = qs.filter(Q(name__icontains=q) | Q(sku__icontains=q))

        return qs.order_by("-created_at")

    @extend_schema(
        parameters=[
            OpenApiParameter(name="store_id", type=str, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="q", type=str, location=OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        if getattr(request.user, "role", None) != "admin" and not request.user.is_superuser:
            return Response(
                {"detail": "Only admins can delete products."},
                status=status.HTTP_403_FORBIDDEN,
            )
        return super().destroy(request, *args, **kwargs)

    @action(detail=False, methods=["get"], url_path="alerts/low-stock")
    def low_stock_alerts(self, request):
        """
        GET /api/products/products/alerts/low-stock/?store_id=<uuid>

        Active products at or below their own low_stock_threshold.
        """
        qs = self.get_queryset().filter(
            is_active=True,
            stock_quantity__lte=F("low_stock_threshold"),
        )
        data = ProductSerializer(qs, many=True).data
        return Response({"count": len(data), "results": data})

