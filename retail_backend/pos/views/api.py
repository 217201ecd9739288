# pos/views/api.py

"""
POS API VIEWS

Purpose:
- Store-scoped active cart lifecycle
- Add/update/remove/clear items (server-owned pricing, add-time stock check)
- Cart summary: the priced breakdown for the counter screen
- Checkout: finalizes the cart into an Invoice via the checkout orchestrator

Hard rules:
- Store context is required for POS cart operations.
- Money is server-owned: unit_price is snapshotted from Product on add and
  every total comes from the pricing engine.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import serializers, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from pos.models import Cart, CartItem
from pos.serializers import (
    AddCartItemInputSerializer,
    CartSerializer,
    CartSummaryInputSerializer,
    CheckoutInputSerializer,
    StoreScopedSerializer,
    UpdateCartItemInputSerializer,
)
from pricing.serializers import CartQuoteSerializer
from pricing.services.context import CouponError
from pricing.services.quote import quote_cart
from products.models import Product
from sales.serializers import InvoiceSerializer
from sales.services.checkout_orchestrator import (
    BillNumberCollisionError,
    CheckoutError,
    CounterError,
    EmptyCartError,
    StockValidationError,
    checkout_cart,
)
from sales.services.receipt import build_receipt
from store.models import Store
from users.permissions import IsStaff

logger = logging.getLogger(__name__)


# =====================================================
# API ERROR NORMALIZATION
# =====================================================

def error_response(*, code: str, message: str, http_status: int):
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


# =====================================================
# HELPERS
# =====================================================

def _resolve_store_from_request(*, request) -> Store:
    """
    Resolve the store context for POS actions.

    Priority:
    1) request.query_params.store_id (GET / DELETE)
    2) request.data.store_id (POST / PATCH)
    """
    raw = (request.query_params.get("store_id") or "").strip()
    if not raw:
        raw = str((request.data.get("store_id") if isinstance(request.data, dict) else "") or "").strip()

    if not raw:
        raise serializers.ValidationError(
            {"store_id": "store_id is required for POS cart operations (multi-store scope)."}
        )

    return get_object_or_404(Store, id=raw, is_active=True)


def _get_active_cart_for_store(*, user, store: Store) -> Cart:
    """
    Canonical active cart resolver: exactly one active cart per user per store.
    """
    cart, _ = Cart.objects.get_or_create(
        user=user,
        store=store,
        is_active=True,
    )
    return cart


def _quantity_error(product: Product, quantity: Decimal):
    if not product.is_weight_priced and quantity != quantity.to_integral_value():
        return error_response(
            code="INVALID_QUANTITY",
            message=f"{product.name} is sold per unit; quantity must be a whole number.",
            http_status=status.HTTP_400_BAD_REQUEST,
        )
    if quantity > Decimal(product.stock_quantity or 0):
        return error_response(
            code="INSUFFICIENT_STOCK",
            message=(
                f"Insufficient stock for {product.name}. "
                f"Available: {product.stock_quantity}, Requested: {quantity}"
            ),
            http_status=status.HTTP_400_BAD_REQUEST,
        )
    return None


# =====================================================
# POS API VIEWS
# =====================================================

class ActiveCartView(APIView):
    """
    Retrieve or create the authenticated user's active cart (STORE-SCOPED).
    """

    permission_classes = [IsAuthenticated, IsStaff]
    serializer_class = CartSerializer

    @extend_schema(
        parameters=[StoreScopedSerializer],
        responses={200: CartSerializer},
        description="Get or create the active cart for the authenticated user (requires store_id)",
    )
    def get(self, request):
        store = _resolve_store_from_request(request=request)
        cart = _get_active_cart_for_store(user=request.user, store=store)
        return Response(CartSerializer(cart).data, status=status.HTTP_200_OK)


class AddCartItemView(APIView):
    """
    Add a product to the active cart (STORE-SCOPED).

    Rules:
    - Unit price is OWNED by Product and snapshotted server-side.
    - Requested quantity (existing line + new) must not exceed stock on hand.
    - Weight-priced products accept fractional quantities; others whole units.
    """

    permission_classes = [IsAuthenticated, IsStaff]
    serializer_class = CartSerializer

    @extend_schema(
        request=AddCartItemInputSerializer,
        responses={200: CartSerializer},
        description="Add a product to the active cart (requires store_id; increments quantity if exists)",
    )
    @transaction.atomic
    def post(self, request):
        serializer = AddCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        store = _resolve_store_from_request(request=request)

        product_id = serializer.validated_data["product_id"]
        quantity = serializer.validated_data["quantity"]

        product = get_object_or_404(Product, id=product_id, is_active=True)

        if product.store_id and product.store_id != store.id:
            return error_response(
                code="STORE_MISMATCH",
                message="Product belongs to a different store.",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        cart = _get_active_cart_for_store(user=request.user, store=store)
        existing = CartItem.objects.filter(cart=cart, product=product).first()

        requested = quantity + (existing.quantity if existing else Decimal("0"))
        problem = _quantity_error(product, requested)
        if problem is not None:
            return problem

        if existing is None:
            CartItem.objects.create(
                cart=cart,
                product=product,
                quantity=quantity,
                unit_price=product.unit_price,  # snapshot
            )
        else:
            existing.quantity = requested
            # Refresh snapshot to current product price when item is re-added
            existing.unit_price = product.unit_price
            existing.save(update_fields=["quantity", "unit_price"])

        return Response(CartSerializer(cart).data, status=status.HTTP_200_OK)


class UpdateCartItemView(APIView):
    """
    Set the quantity of a cart item (STORE-SCOPED).
    """

    permission_classes = [IsAuthenticated, IsStaff]
    serializer_class = CartSerializer

    @extend_schema(
        request=UpdateCartItemInputSerializer,
        responses={200: CartSerializer},
        description="Update quantity of a cart item (requires store_id)",
    )
    @transaction.atomic
    def patch(self, request, item_id):
        serializer = UpdateCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        store = _resolve_store_from_request(request=request)
        quantity = serializer.validated_data["quantity"]

        cart = _get_active_cart_for_store(user=request.user, store=store)

        cart_item = get_object_or_404(
            CartItem.objects.select_related("product"),
            id=item_id,
            cart=cart,
            cart__is_active=True,
        )

        problem = _quantity_error(cart_item.product, quantity)
        if problem is not None:
            return problem

        cart_item.quantity = quantity
        cart_item.save(update_fields=["quantity"])

        return Response(CartSerializer(cart).data, status=status.HTTP_200_OK)


class RemoveCartItemView(APIView):
    """
    Remove an item from the active cart (STORE-SCOPED).
    """

    permission_classes = [IsAuthenticated, IsStaff]
    serializer_class = CartSerializer

    @extend_schema(
        parameters=[StoreScopedSerializer],
        responses={200: CartSerializer},
        description="Remove an item from the active cart (requires store_id)",
    )
    @transaction.atomic
    def delete(self, request, item_id):
        store = _resolve_store_from_request(request=request)
        cart = _get_active_cart_for_store(user=request.user, store=store)

        cart_item = get_object_or_404(
            CartItem,
            id=item_id,
            cart=cart,
            cart__is_active=True,
        )

        cart_item.delete()

        return Response(CartSerializer(cart).data, status=status.HTTP_200_OK)


class ClearCartView(APIView):
    """
    Clear the active cart (STORE-SCOPED).
    """

    permission_classes = [IsAuthenticated, IsStaff]
    serializer_class = CartSerializer

    @extend_schema(
        parameters=[StoreScopedSerializer],
        responses={200: CartSerializer},
        description="Clear active cart items (requires store_id)",
    )
    @transaction.atomic
    def delete(self, request):
        store = _resolve_store_from_request(request=request)
        cart = _get_active_cart_for_store(user=request.user, store=store)

        cart.items.all().delete()
        cart.refresh_from_db()

        return Response(CartSerializer(cart).data, status=status.HTTP_200_OK)


class CartSummaryView(APIView):
    """
    Priced breakdown of the active cart (STORE-SCOPED).

    Nothing is written: the same inputs sent to checkout produce the same figures.
    """

    permission_classes = [IsAuthenticated, IsStaff]

    @extend_schema(
        request=CartSummaryInputSerializer,
        responses={200: CartQuoteSerializer},
        description="Cart totals: per-line base/tax, CGST/SGST/IGST, coupon, loyalty, grand total.",
        examples=[
            OpenApiExample(
                "Coupon + loyalty",
                value={
                    "store_id": "07d0722f-92fd-4a83-b84e-6e25f034a647",
                    "coupon_code": "SAVE10",
                    "customer_phone": "9876543210",
                    "redeem_points": 200,
                },
                request_only=True,
            ),
        ],
    )
    def post(self, request):
        serializer = CartSummaryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        store = _resolve_store_from_request(request=request)
        cart = _get_active_cart_for_store(user=request.user, store=store)

        try:
            quote = quote_cart(
                cart=cart,
                coupon_code=data["coupon_code"],
                customer_phone=data["customer_phone"],
                redeem_points=data["redeem_points"],
                additional_tax_rate=data.get("additional_tax_rate"),
                igst_override=data.get("igst_override"),
            )
        except CouponError as exc:
            return error_response(
                code="INVALID_COUPON",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(CartQuoteSerializer(quote).data, status=status.HTTP_200_OK)


class CheckoutCartView(APIView):
    """
    Checkout the active cart and create an immutable Invoice (STORE-SCOPED).

    Calls:
    - sales.services.checkout_orchestrator.checkout_cart()
    """

    permission_classes = [IsAuthenticated, IsStaff]

    @extend_schema(
        request=CheckoutInputSerializer,
        responses={201: dict},
        description="Checkout active cart into an invoice; returns the invoice and its receipt payload.",
        examples=[
            OpenApiExample(
                "Counter checkout",
                value={
                    "store_id": "07d0722f-92fd-4a83-b84e-6e25f034a647",
                    "counter_id": "5b7c2d1e-7a0f-4f39-9d55-1b7f0c8e2a11",
                    "customer_name": "Ravi",
                    "customer_phone": "9876543210",
                    "coupon_code": "SAVE10",
                    "payment_method": "upi",
                    "receipt_layout": "thermal",
                },
                request_only=True,
            ),
        ],
    )
    def post(self, request):
        serializer = CheckoutInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        store = _resolve_store_from_request(request=request)
        cart = _get_active_cart_for_store(user=request.user, store=store)

        try:
            invoice = checkout_cart(
                user=request.user,
                cart=cart,
                counter=data.get("counter_id"),
                customer_name=data["customer_name"],
                customer_phone=data["customer_phone"],
                coupon_code=data["coupon_code"],
                redeem_points=data["redeem_points"],
                additional_tax_rate=data.get("additional_tax_rate"),
                igst_override=data.get("igst_override"),
                payment_method=data["payment_method"],
            )
        except EmptyCartError as exc:
            return error_response(
                code="EMPTY_CART",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except StockValidationError as exc:
            return error_response(
                code="INVALID_ITEMS",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except CounterError as exc:
            return error_response(
                code="INVALID_COUNTER",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except BillNumberCollisionError as exc:
            return error_response(
                code="BILL_NUMBER_COLLISION",
                message=str(exc),
                http_status=status.HTTP_409_CONFLICT,
            )
        except CouponError as exc:
            return error_response(
                code="INVALID_COUPON",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except CheckoutError as exc:
            return error_response(
                code="CHECKOUT_FAILED",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except Exception:
            logger.exception("Checkout failed", extra={"store_id": str(store.pk), "cart_id": str(cart.pk)})
            return error_response(
                code="UNKNOWN_ERROR",
                message="Checkout failed",
                http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {
                "invoice": InvoiceSerializer(invoice).data,
                "receipt": build_receipt(invoice, fmt=data["receipt_layout"]),
            },
            status=status.HTTP_201_CREATED,
        )
