# store/models/billing_settings.py

"""
BILLING SETTINGS (PER STORE)

Purpose:
- Merchant tax regime consumed by the pricing engine.
- One row per store; a store without a row bills EXCLUSIVE / intra-state.

Rules:
- inclusive_variant only matters when mode = inclusive.
- Operator overrides (IGST override, additional tax) are per checkout and
  are NOT stored here.
"""

import uuid

from django.db import models

from pricing.engine import InclusiveVariant, TaxMode, TaxSettings, TradeType, to_decimal

from .store import Store


class BillingSettings(models.Model):
    class Mode(models.TextChoices):
        EXCLUSIVE = TaxMode.EXCLUSIVE.value, "Exclusive (tax added on top)"
        INCLUSIVE = TaxMode.INCLUSIVE.value, "Inclusive (price contains tax)"

    class InclusiveBillType(models.TextChoices):
        SPLIT = InclusiveVariant.SPLIT.value, "Split (base + GST shown)"
        MRP = InclusiveVariant.MRP.value, "MRP (final price, tax not added)"

    class Trade(models.TextChoices):
        INTRA_STATE = TradeType.INTRA_STATE.value, "Intra-state (CGST + SGST)"
        INTER_STATE = TradeType.INTER_STATE.value, "Inter-state (IGST)"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.OneToOneField(
        Store,
        on_delete=models.CASCADE,
        related_name="billing_settings",
    )

    mode = models.CharField(max_length=16, choices=Mode.choices, default=Mode.EXCLUSIVE)

    inclusive_bill_type = models.CharField(
        max_length=16,
        choices=InclusiveBillType.choices,
        default=InclusiveBillType.SPLIT,
    )

    trade_type = models.CharField(
        max_length=16,
        choices=Trade.choices,
        default=Trade.INTRA_STATE,
    )

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "billing settings"
        verbose_name_plural = "billing settings"

    @classmethod
    def for_store(cls, store: Store) -> "BillingSettings":
        """Saved settings for the store, or an unsaved default row."""
        found = cls.objects.filter(store=store).first()
        return found or cls(store=store)

    def to_tax_settings(self, *, igst_override=None, additional_tax_rate=None) -> TaxSettings:
        override = to_decimal(igst_override)
        return TaxSettings(
            mode=TaxMode(self.mode),
            inclusive_variant=InclusiveVariant(self.inclusive_bill_type),
            trade_type=TradeType(self.trade_type),
            igst_override=override if override > 0 else None,
            additional_tax_rate=to_decimal(additional_tax_rate),
        )

    def __str__(self):
        return f"{self.store} | {self.mode}/{self.inclusive_bill_type} | {self.trade_type}"
