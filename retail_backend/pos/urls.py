"""
PATH: pos/urls.py

POS URLS

Purpose:
- Cart lifecycle
- Cart item operations
- Cart summary (priced breakdown)
- Cart checkout (finalizes to Invoice via checkout orchestrator)
"""

from django.urls import path

from pos.views.api import (
    ActiveCartView,
    AddCartItemView,
    UpdateCartItemView,
    RemoveCartItemView,
    ClearCartView,
    CartSummaryView,
    CheckoutCartView,
)

app_name = "pos"

urlpatterns = [
    path("cart/", ActiveCartView.as_view(), name="active-cart"),
    path("cart/clear/", ClearCartView.as_view(), name="clear-cart"),
    path("cart/summary/", CartSummaryView.as_view(), name="cart-summary"),

    path("cart/items/add/", AddCartItemView.as_view(), name="add-cart-item"),
    path("cart/items/<uuid:item_id>/update/", UpdateCartItemView.as_view(), name="update-cart-item"),
    path("cart/items/<uuid:item_id>/remove/", RemoveCartItemView.as_view(), name="remove-cart-item"),

    path("checkout/", CheckoutCartView.as_view(), name="checkout"),
]
