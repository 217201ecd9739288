# pricing/engine/invoice_sequencer.py

"""
BILL NUMBER FORMAT

"DDMMYY-NN": NN is (invoices already issued today by the merchant) + 1,
zero-padded to two digits. Past 99 the counter simply grows ("171026-100").
"""

from __future__ import annotations

from datetime import date


def format_bill_number(day: date, issued_today: int) -> str:
    sequence = max(0, int(issued_today or 0)) + 1
    return f"{day:%d%m%y}-{sequence:02d}"
