# store/views/store.py

"""
STORE VIEWS

Purpose:
- Store listing / management (authenticated staff; writes for admins)
- Counter listing for the checkout screen
- Billing settings (tax regime) per store

Endpoints:
- /api/store/stores/                      CRUD
- /api/store/stores/<id>/counters/        GET active counters
- /api/store/<id>/billing-settings/       GET / PUT
"""

import logging

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from store.models import BillingSettings, Store
from store.serializers import BillingSettingsSerializer, CounterSerializer, StoreSerializer
from users.permissions import IsAdmin, IsManagerOrAdmin, IsStaff

logger = logging.getLogger(__name__)


class StoreViewSet(viewsets.ModelViewSet):
    """
    Store / Branch API
    """

    queryset = Store.objects.all().order_by("name")
    serializer_class = StoreSerializer

    def get_permissions(self):
        if self.action in ("list", "retrieve", "counters"):
            return [IsAuthenticated(), IsStaff()]
        return [IsAuthenticated(), IsAdmin()]

    @extend_schema(responses={200: CounterSerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="counters")
    def counters(self, request, pk=None):
        store = self.get_object()
        qs = store.counters.filter(is_active=True).order_by("name")
        return Response(CounterSerializer(qs, many=True).data, status=status.HTTP_200_OK)


class BillingSettingsView(APIView):
    """
    GET: any staff (the counter screen needs the mode to label prices)
    PUT: managers + admins
    """

    serializer_class = BillingSettingsSerializer

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAuthenticated(), IsStaff()]
        return [IsAuthenticated(), IsManagerOrAdmin()]

    @extend_schema(responses={200: BillingSettingsSerializer})
    def get(self, request, store_id):
        store = get_object_or_404(Store, id=store_id)
        return Response(BillingSettingsSerializer(BillingSettings.for_store(store)).data)

    @extend_schema(request=BillingSettingsSerializer, responses={200: BillingSettingsSerializer})
    def put(self, request, store_id):
        store = get_object_or_404(Store, id=store_id)
        instance = BillingSettings.for_store(store)

        serializer = BillingSettingsSerializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save(store=store)

        logger.info(
            "Billing settings updated",
            extra={
                "store_id": str(store.pk),
                "mode": serializer.instance.mode,
                "inclusive_bill_type": serializer.instance.inclusive_bill_type,
                "trade_type": serializer.instance.trade_type,
            },
        )
        return Response(serializer.data, status=status.HTTP_200_OK)
