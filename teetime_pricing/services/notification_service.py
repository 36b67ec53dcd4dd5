"""
Panic Notification Service — turns an active panic flag into a notification
record. Records are handed to an external push dispatcher; nothing is sent
from here.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional

from teetime_pricing.config import Settings, get_settings
from teetime_pricing.models.schemas import PanicNotification, PricingResult, TimeSlot

logger = logging.getLogger(__name__)


def build_panic_title(minutes_left: int, discount_rate: float) -> str:
    if minutes_left <= 10:
        return f"Urgent! Tee-off in {minutes_left} min"
    if discount_rate >= 0.2:
        return f"Flash deal {round(discount_rate * 100)}% off! {minutes_left} min left"
    return f"Last call! Closing in {minutes_left} min"


def build_panic_message(
    club_name: str,
    base_price: int,
    final_price: int,
    minutes_left: int,
) -> str:
    discount = base_price - final_price
    if discount > 0:
        percent = round(discount / base_price * 100)
        return f"{club_name} | Book now for {percent}% off! {base_price:,} → {final_price:,}"
    return f"{club_name} | Tee-off in {minutes_left} min! Book now"


def build_panic_notification(
    slot: TimeSlot,
    club_name: str,
    result: PricingResult,
    clock: datetime,
    settings: Optional[Settings] = None,
) -> Optional[PanicNotification]:
    """Notification for a slot in panic mode, or None when the flag is off."""
    if not result.panic_mode.active or result.is_blocked:
        return None

    settings = settings or get_settings()
    minutes_left = result.panic_mode.minutes_left

    return PanicNotification(
        slot_id=slot.id,
        title=build_panic_title(minutes_left, result.discount_rate),
        message=build_panic_message(club_name, result.base_price, result.final_price, minutes_left),
        payload={
            "original_price": result.base_price,
            "final_price": result.final_price,
            "discount_rate": result.discount_rate,
            "minutes_left": minutes_left,
            "club_name": club_name,
            "starts_at": slot.starts_at.isoformat(),
            "reason": result.panic_mode.reason,
            "factors": [f.model_dump(mode="json") for f in result.factors],
        },
        priority=settings.panic_notification_priority,
        expires_at=clock + timedelta(minutes=settings.panic_notification_expiry_mins),
    )


def collect_panic_notifications(
    quotes: Iterable[tuple[TimeSlot, PricingResult]],
    club_name: str,
    clock: datetime,
    settings: Optional[Settings] = None,
) -> list[PanicNotification]:
    """Batch form over (slot, result) pairs, e.g. the output of QuoteService.quote_many."""
    notifications = []
    for slot, result in quotes:
        notification = build_panic_notification(slot, club_name, result, clock, settings)
        if notification is not None:
            notifications.append(notification)
    logger.info(f"Built {len(notifications)} panic notifications for {club_name}")
    return notifications
