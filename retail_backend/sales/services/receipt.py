# sales/services/receipt.py

"""
RECEIPT PAYLOAD BUILDER

Purpose:
- Print-ready receipt/invoice payload built from a saved Invoice.
- Two layouts:
    thermal  compact roll receipt (58/80mm printers)
    a4       full-page tax invoice with per-line tax columns

Rules:
- Figures come from the Invoice only (the ledger is the receipt's source).
- No rendering here: PDF / ESC-POS generation happens on the client or a
  print service.
- MRP bills state that taxes are included and show the included tax as
  information, never as a charge.
"""

from __future__ import annotations

from django.utils import timezone

from pricing.engine import TAX_NOTES, PricingMode

FORMAT_THERMAL = "thermal"
FORMAT_A4 = "a4"
FORMATS = (FORMAT_THERMAL, FORMAT_A4)


class ReceiptFormatError(ValueError):
    pass


def _amount(value) -> str:
    return f"{value:.2f}"


def _store_header(store) -> dict:
    return {
        "name": store.name,
        "address": store.address,
        "phone": store.phone,
        "gstin": store.gstin,
    }


def _totals(invoice) -> dict:
    totals = {
        "subtotal": _amount(invoice.subtotal_amount),
        "cgst": _amount(invoice.cgst_amount),
        "sgst": _amount(invoice.sgst_amount),
        "igst": _amount(invoice.igst_amount),
        "additional_tax": _amount(invoice.additional_tax_amount),
        "tax": _amount(invoice.tax_amount),
        "product_discount": _amount(invoice.product_discount_amount),
        "coupon_discount": _amount(invoice.discount_amount),
        "loyalty_discount": _amount(invoice.loyalty_discount_amount),
        "total": _amount(invoice.total_amount),
    }
    if invoice.is_mrp:
        totals["included_tax"] = _amount(invoice.informational_tax_amount)
    return totals


def _thermal_items(invoice) -> list:
    # rate and amount are both tax-exclusive; amounts add up to the subtotal
    return [
        {
            "name": row.get("name", ""),
            "quantity": row.get("quantity", "0"),
            "price_type": row.get("price_type", "fixed"),
            "rate": row.get("base_price", "0.00"),
            "amount": row.get("line_base", "0.00"),
            "discount_label": row.get("discount_label", ""),
        }
        for row in invoice.items_data or []
    ]


def _a4_items(invoice) -> list:
    items = []
    for index, row in enumerate(invoice.items_data or [], start=1):
        items.append(
            {
                "sl_no": index,
                "name": row.get("name", ""),
                "quantity": row.get("quantity", "0"),
                "price_type": row.get("price_type", "fixed"),
                "catalog_price": row.get("catalog_price", "0.00"),
                "base_price": row.get("base_price", "0.00"),
                "cgst_rate": row.get("cgst_rate", "0"),
                "sgst_rate": row.get("sgst_rate", "0"),
                "igst_rate": row.get("igst_rate", "0"),
                "taxable_value": row.get("line_base", "0.00"),
                "tax": row.get("line_tax", "0.00"),
                "discount": row.get("line_discount", "0.00"),
                "discount_label": row.get("discount_label", ""),
            }
        )
    return items


def build_receipt(invoice, *, fmt: str = FORMAT_THERMAL) -> dict:
    fmt = (fmt or FORMAT_THERMAL).strip().lower()
    if fmt not in FORMATS:
        raise ReceiptFormatError(f"Unsupported receipt format: {fmt}")

    cashier = invoice.created_by
    payload = {
        "format": fmt,
        "store": _store_header(invoice.store),
        "bill_number": invoice.bill_number,
        "issued_at": timezone.localtime(invoice.created_at).isoformat(),
        "counter": invoice.counter.name if invoice.counter else "",
        "cashier": cashier.email if cashier else "",
        "customer": {
            "name": invoice.customer_name,
            "phone": invoice.customer_phone,
        },
        "pricing_mode": invoice.pricing_mode,
        "trade_type": invoice.trade_type,
        "tax_note": TAX_NOTES[PricingMode(invoice.pricing_mode)],
        "coupon_code": invoice.coupon_code,
        "payment_method": invoice.payment_method,
        "loyalty": {
            "points_redeemed": invoice.points_redeemed,
            "points_earned": invoice.points_earned,
        },
        "totals": _totals(invoice),
    }

    if fmt == FORMAT_A4:
        payload["items"] = _a4_items(invoice)
        payload["title"] = "TAX INVOICE"
    else:
        payload["items"] = _thermal_items(invoice)
        payload["footer"] = "Thank you! Visit again."

    return payload
