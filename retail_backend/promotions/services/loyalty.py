# promotions/services/loyalty.py

"""
LOYALTY SERVICE

Purpose:
- Accrue points on a completed bill.
- Deduct points that were redeemed on that bill.

Rules:
- Earned points = floor(total * points_per_rupee / LOYALTY_EARN_SPEND_UNIT).
  With the defaults (1 point per rupee, unit 100) that is one point per 100 spent.
- A store without LoyaltySettings uses the defaults.
- Inactive LoyaltySettings: no accrual and no redemption.
- Balance never goes below zero.
- Must be called inside the checkout transaction (row is locked for update).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR

from django.conf import settings
from django.db import transaction

from pricing.engine import LoyaltyRedemption, to_decimal
from promotions.models import LoyaltyAccount, LoyaltySettings

logger = logging.getLogger(__name__)


class LoyaltyError(Exception):
    """Base loyalty exception"""


class InsufficientPointsError(LoyaltyError):
    pass


@dataclass(frozen=True)
class LoyaltyUpdate:
    account: LoyaltyAccount | None
    points_earned: int = 0
    points_redeemed: int = 0


def _normalize_phone(phone) -> str:
    return str(phone or "").strip()


def settings_for_store(store) -> LoyaltySettings:
    found = LoyaltySettings.objects.filter(store=store).first()
    return found or LoyaltySettings(store=store)


def find_account(*, store, customer_phone) -> LoyaltyAccount | None:
    phone = _normalize_phone(customer_phone)
    if not phone:
        return None
    return LoyaltyAccount.objects.filter(store=store, customer_phone=phone).first()


def build_redemption(*, store, customer_phone, points_requested) -> LoyaltyRedemption | None:
    """
    Engine input for a redemption request, or None when nothing can be redeemed.
    """
    loyalty_settings = settings_for_store(store)
    if not loyalty_settings.is_active:
        return None

    account = find_account(store=store, customer_phone=customer_phone)
    if account is None:
        return None

    return LoyaltyRedemption(
        points_requested=max(0, int(points_requested or 0)),
        rupees_per_point=to_decimal(loyalty_settings.rupees_per_point_redeem),
        points_available=int(account.points),
        minimum_points_to_redeem=int(loyalty_settings.min_points_to_redeem),
    )


def points_earned_for(total, loyalty_settings: LoyaltySettings) -> int:
    if not loyalty_settings.is_active:
        return 0

    spend_unit = to_decimal(getattr(settings, "LOYALTY_EARN_SPEND_UNIT", 100))
    if spend_unit <= 0:
        return 0

    earned = to_decimal(total) * to_decimal(loyalty_settings.points_per_rupee) / spend_unit
    return max(0, int(earned.to_integral_value(rounding=ROUND_FLOOR)))


@transaction.atomic
def apply_bill_to_account(
    *,
    store,
    customer_phone,
    customer_name: str = "",
    total,
    points_redeemed: int = 0,
) -> LoyaltyUpdate:
    """
    Record one completed bill against the customer's loyalty account.

    Creates the account on first earn. A bill that neither earns nor redeems
    leaves no trace.
    """
    phone = _normalize_phone(customer_phone)
    if not phone:
        return LoyaltyUpdate(account=None)

    loyalty_settings = settings_for_store(store)
    earned = points_earned_for(total, loyalty_settings)
    redeemed = max(0, int(points_redeemed or 0))

    account = (
        LoyaltyAccount.objects.select_for_update()
        .filter(store=store, customer_phone=phone)
        .first()
    )

    if account is None:
        if redeemed:
            raise InsufficientPointsError("Customer has no loyalty account to redeem from")
        if not earned:
            return LoyaltyUpdate(account=None)
        account = LoyaltyAccount(store=store, customer_phone=phone, customer_name=customer_name or "")

    if redeemed > account.points:
        raise InsufficientPointsError(
            f"Cannot redeem {redeemed} points. Available: {account.points}"
        )

    account.points = account.points - redeemed + earned
    account.total_spent = to_decimal(account.total_spent) + to_decimal(total)
    if customer_name:
        account.customer_name = customer_name
    account.save()

    logger.info(
        "Loyalty account updated",
        extra={
            "store_id": str(store.pk),
            "customer_phone": phone,
            "points_earned": earned,
            "points_redeemed": redeemed,
            "balance": account.points,
        },
    )

    return LoyaltyUpdate(account=account, points_earned=earned, points_redeemed=redeemed)
