# sales/models/invoice.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from pricing.engine import PricingMode, TradeType
from store.models import Counter, Store

User = settings.AUTH_USER_MODEL


class Invoice(models.Model):
    """
    Ledger record of one completed POS bill.

    GUARANTEES:
    - Immutable once saved (financial record)
    - Every money figure is the 2dp rendering of the same Breakdown
      the cashier saw on screen and the receipt printed

    RECONCILIATION:
    - total_amount     == breakdown.grand_total
    - tax_amount       == breakdown.tax_amount (never null; 0 for MRP without surcharge)
    - discount_amount  == coupon discount ONLY
    - loyalty_discount_amount carries the points redemption value separately

    NUMBERING:
    - bill_number is "DDMMYY-NN", sequential per store per local day
    - unique per store (a racing duplicate fails the checkout instead of
      producing two bills with one number)
    """

    PAYMENT_CASH = "cash"
    PAYMENT_CARD = "card"
    PAYMENT_UPI = "upi"

    PAYMENT_CHOICES = [
        (PAYMENT_CASH, "Cash"),
        (PAYMENT_CARD, "Card"),
        (PAYMENT_UPI, "UPI"),
    ]

    PRICING_MODE_CHOICES = [(m.value, m.value.replace("_", " ").title()) for m in PricingMode]
    TRADE_TYPE_CHOICES = [(t.value, t.value.replace("_", " ").title()) for t in TradeType]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(
        Store,
        on_delete=models.PROTECT,
        related_name="invoices",
    )

    bill_number = models.CharField(max_length=32, db_index=True)

    counter = models.ForeignKey(
        Counter,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="invoices",
    )

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        related_name="invoices",
        help_text="Cashier / staff who billed",
    )

    customer_name = models.CharField(max_length=255, blank=True, default="")
    customer_phone = models.CharField(max_length=20, blank=True, default="", db_index=True)

    # Raw priced lines (strings, see PricedLine.as_record)
    items_data = models.JSONField(default=list)

    subtotal_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    cgst_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    sgst_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    igst_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    additional_tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    # MRP mode: tax contained in the prices (analytics only, not billed)
    informational_tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    product_discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    discount_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Coupon discount",
    )
    loyalty_discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    coupon_code = models.CharField(max_length=32, blank=True, default="")
    points_redeemed = models.PositiveIntegerField(default=0)
    points_earned = models.PositiveIntegerField(default=0)

    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    payment_method = models.CharField(max_length=16, choices=PAYMENT_CHOICES, default=PAYMENT_CASH)

    pricing_mode = models.CharField(max_length=24, choices=PRICING_MODE_CHOICES)
    trade_type = models.CharField(max_length=16, choices=TRADE_TYPE_CHOICES)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["store", "bill_number"],
                name="uniq_bill_number_per_store",
            ),
        ]
        indexes = [
            models.Index(fields=["store", "created_at"], name="sales_inv_store_created_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError(f"Invoice {self.bill_number} is immutable once saved.")
        super().save(*args, **kwargs)

    @property
    def is_mrp(self) -> bool:
        return self.pricing_mode == PricingMode.INCLUSIVE_MRP.value

    def __str__(self):
        return f"{self.bill_number} | {self.total_amount}"
