# sales/services/invoice_sequencer.py

"""
BILL NUMBER SEQUENCER

next number = format(today, count of this store's invoices since local midnight)

Concurrency:
- The count is a read, not a reservation. Two checkouts racing on the same
  store can compute the same number; the (store, bill_number) unique
  constraint rejects the second insert and checkout reports it.
"""

from __future__ import annotations

from datetime import datetime

from django.utils import timezone

from pricing.engine import format_bill_number
from sales.models import Invoice


def local_day_start(now: datetime) -> datetime:
    local_now = timezone.localtime(now)
    return local_now.replace(hour=0, minute=0, second=0, microsecond=0)


def issued_today(*, store, now: datetime) -> int:
    return Invoice.objects.filter(store=store, created_at__gte=local_day_start(now)).count()


def next_bill_number(*, store, now: datetime | None = None) -> str:
    now = now or timezone.now()
    return format_bill_number(timezone.localtime(now).date(), issued_today(store=store, now=now))
