# sales/services/checkout_orchestrator.py

"""
CHECKOUT ORCHESTRATOR (APPLICATION SERVICE)

Purpose:
- Finalize an active cart into an immutable Invoice (atomic, auditable).

Flow (one DB transaction):
1) lock cart + cart items
2) validate counter / quantities
3) price the cart through the shared quote path (same figures as the summary screen)
4) assign the bill number and embed it in the breakdown
5) decrement stock (floored at 0)
6) update the customer's loyalty account (earn + redeem)
7) write the Invoice
8) clear + deactivate the cart

Hard rules:
- Money values are computed server-side; frontend never calculates totals.
- Rounding to 2dp happens here, at the persist boundary, and nowhere earlier.
- Stock sufficiency is checked when items are added to the cart; checkout
  only decrements and never drives stock negative.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.utils import timezone

from pricing.engine import money
from pricing.services.quote import CartQuote, quote_cart
from products.models import Product
from promotions.services.loyalty import LoyaltyError, apply_bill_to_account
from sales.models import Invoice
from store.models import Counter

from .invoice_sequencer import next_bill_number

logger = logging.getLogger(__name__)


class CheckoutError(Exception):
    """Base checkout exception"""


class EmptyCartError(CheckoutError):
    pass


class StockValidationError(CheckoutError):
    pass


class CounterError(CheckoutError):
    pass


class BillNumberCollisionError(CheckoutError):
    pass


def _resolve_counter(*, store, counter) -> Counter | None:
    if counter is None or counter == "":
        return None

    if not isinstance(counter, Counter):
        counter = Counter.objects.filter(pk=counter).first()
        if counter is None:
            raise CounterError("Counter does not exist")

    if counter.store_id != store.pk:
        raise CounterError("Counter belongs to a different store")
    if not counter.is_active:
        raise CounterError(f"Counter '{counter.name}' is not active")
    return counter


def _validate_items(cart_items):
    for item in cart_items:
        product = item.product
        if not product.is_active:
            raise StockValidationError(f"{product.name} is no longer available for sale")
        if item.quantity is None or Decimal(item.quantity) <= 0:
            raise StockValidationError(f"Invalid quantity for {product.name}. Must be greater than zero.")


def _decrement_stock(cart_items):
    product_ids = [item.product_id for item in cart_items]
    locked = {p.pk: p for p in Product.objects.select_for_update().filter(pk__in=product_ids)}

    for item in cart_items:
        product = locked[item.product_id]
        remaining = Decimal(product.stock_quantity or 0) - Decimal(item.quantity)
        product.stock_quantity = remaining if remaining > 0 else Decimal("0")
        product.save(update_fields=["stock_quantity", "updated_at"])


def _invoice_fields(quote: CartQuote) -> dict:
    breakdown = quote.breakdown
    rounded = breakdown.rounded()
    return dict(
        bill_number=breakdown.bill_number,
        items_data=[line.as_record() for line in breakdown.lines],
        subtotal_amount=rounded["subtotal"],
        cgst_amount=rounded["cgst_total"],
        sgst_amount=rounded["sgst_total"],
        igst_amount=rounded["igst_total"],
        additional_tax_amount=rounded["additional_tax_amount"],
        tax_amount=rounded["tax_amount"],
        informational_tax_amount=rounded["informational_tax_amount"],
        product_discount_amount=rounded["product_discount_total"],
        discount_amount=rounded["coupon_discount_amount"],
        loyalty_discount_amount=rounded["loyalty_discount_amount"],
        coupon_code=breakdown.coupon_code,
        points_redeemed=breakdown.points_redeemed,
        total_amount=rounded["grand_total"],
        pricing_mode=breakdown.mode.value,
        trade_type=breakdown.trade_type.value,
    )


@transaction.atomic
def checkout_cart(
    *,
    user,
    cart,
    counter=None,
    customer_name: str = "",
    customer_phone: str = "",
    coupon_code: str = "",
    redeem_points: int = 0,
    additional_tax_rate=None,
    igst_override=None,
    payment_method: str = Invoice.PAYMENT_CASH,
    now: datetime | None = None,
) -> Invoice:
    now = now or timezone.now()

    # Lock cart row early (prevents racey double-checkout clicks).
    cart = cart.__class__.objects.select_for_update().get(pk=cart.pk)

    if not cart.is_active:
        raise CheckoutError("Cart is not active")

    store = cart.store
    cart_items = list(cart.items.select_related("product").select_for_update())
    if not cart_items:
        raise EmptyCartError("Cart is empty")

    counter = _resolve_counter(store=store, counter=counter)
    _validate_items(cart_items)

    customer_name = (customer_name or "").strip()
    customer_phone = (customer_phone or "").strip()

    bill_number = next_bill_number(store=store, now=now)

    quote = quote_cart(
        cart=cart,
        cart_items=cart_items,
        now=now,
        coupon_code=coupon_code,
        customer_phone=customer_phone,
        redeem_points=redeem_points,
        additional_tax_rate=additional_tax_rate,
        igst_override=igst_override,
        bill_number=bill_number,
    )
    breakdown = quote.breakdown

    _decrement_stock(cart_items)

    try:
        loyalty = apply_bill_to_account(
            store=store,
            customer_phone=customer_phone,
            customer_name=customer_name,
            total=money(breakdown.grand_total),
            points_redeemed=breakdown.points_redeemed,
        )
    except LoyaltyError as exc:
        raise CheckoutError(str(exc)) from exc

    try:
        with transaction.atomic():
            invoice = Invoice.objects.create(
                store=store,
                counter=counter,
                created_by=user,
                customer_name=customer_name,
                customer_phone=customer_phone,
                points_earned=loyalty.points_earned,
                payment_method=payment_method or Invoice.PAYMENT_CASH,
                created_at=now,
                **_invoice_fields(quote),
            )
    except IntegrityError as exc:
        logger.warning(
            "Bill number collision",
            extra={"store_id": str(store.pk), "bill_number": bill_number},
        )
        raise BillNumberCollisionError(
            f"Bill number {bill_number} was just issued by another checkout. Please retry."
        ) from exc

    cart.items.all().delete()
    cart.is_active = False
    cart.save(update_fields=["is_active", "updated_at"])

    logger.info(
        "Invoice created",
        extra={
            "invoice_id": str(invoice.id),
            "bill_number": invoice.bill_number,
            "store_id": str(store.pk),
            "total_amount": str(invoice.total_amount),
            "pricing_mode": invoice.pricing_mode,
        },
    )

    return invoice
