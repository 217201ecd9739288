# store/models/store.py

import uuid

from django.db import models
from django.db.models import Q


class Store(models.Model):
    """
    A merchant outlet.

    The store is the merchant identity for billing:
    - tax settings hang off it (BillingSettings)
    - bill numbers are sequenced per store per day
    - GSTIN is printed on receipts when present
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255)

    code = models.CharField(
        max_length=50,
        null=True,
        blank=True,
        db_index=True,
        help_text="Unique outlet code (optional). If set, must be unique.",
    )

    gstin = models.CharField(max_length=15, blank=True, help_text="GST identification number")

    address = models.TextField(blank=True)
    phone = models.CharField(max_length=50, blank=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["code"],
                condition=Q(code__isnull=False) & ~Q(code=""),
                name="uniq_store_code_when_present",
            ),
        ]

    def __str__(self):
        c = (self.code or "").strip()
        if c:
            return f"{self.name} ({c})"
        return self.name
