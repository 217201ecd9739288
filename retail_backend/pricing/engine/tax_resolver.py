# pricing/engine/tax_resolver.py

"""
TAX RESOLVER

Inter-state sale:  IGST only (operator override wins when > 0), CGST = SGST = 0.
Intra-state sale:  CGST + SGST exactly as entered on the line, IGST = 0.

CGST/SGST are summed as entered; a 50/50 split is never assumed.
"""

from __future__ import annotations

from typing import Optional

from .money import ZERO, non_negative, to_decimal
from .types import LineItem, TaxRates, TradeType


def resolve_tax_rates(
    line: LineItem,
    trade_type: TradeType,
    *,
    igst_override: Optional[object] = None,
) -> TaxRates:
    if trade_type == TradeType.INTER_STATE:
        override = to_decimal(igst_override)
        igst = override if override > ZERO else to_decimal(line.igst_rate)
        return TaxRates(igst=non_negative(igst))

    return TaxRates(
        cgst=non_negative(to_decimal(line.cgst_rate)),
        sgst=non_negative(to_decimal(line.sgst_rate)),
    )
