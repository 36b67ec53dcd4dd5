"""
API routes — thin HTTP layer that delegates to the QuoteService.

Routes:
  GET  /health               → API health check
  POST /api/pricing/quote    → Price one slot
  POST /api/pricing/quotes   → Price a listing of slots against hourly forecasts
  POST /api/pricing/confirm  → Re-price at purchase time (409 if blocked or stale)
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from teetime_pricing.config import get_settings
from teetime_pricing.models.enums import WeatherLabel
from teetime_pricing.models.schemas import (
    Customer,
    PanicNotification,
    PricingContext,
    PricingResult,
    TimeSlot,
    WeatherSnapshot,
)
from teetime_pricing.services.audit_service import context_fingerprint
from teetime_pricing.services.notification_service import collect_panic_notifications
from teetime_pricing.services.quote_service import (
    QuoteService,
    SlotBlockedError,
    StaleQuoteError,
    describe_weather,
    select_closest_weather,
)

logger = logging.getLogger(__name__)

# ── Routers ──────────────────────────────────────────────
health_router = APIRouter()
pricing_router = APIRouter()


@lru_cache()
def get_quote_service() -> QuoteService:
    return QuoteService()


# ── Request / response schemas ───────────────────────────
class QuoteResponse(BaseModel):
    fingerprint: str
    weather: WeatherLabel
    result: PricingResult


class BatchQuoteRequest(BaseModel):
    slots: list[TimeSlot]
    customer: Optional[Customer] = None
    forecasts: list[WeatherSnapshot] = []
    proximity_km: Optional[float] = None
    clock: Optional[datetime] = None
    club_name: str = ""  # set to also build panic notifications


class SlotQuote(BaseModel):
    slot_id: int
    starts_at: datetime
    weather: WeatherLabel
    result: PricingResult


class BatchQuoteResponse(BaseModel):
    clock: datetime
    quotes: list[SlotQuote]
    panic_notifications: list[PanicNotification] = []


class ConfirmRequest(BaseModel):
    context: PricingContext
    quoted_price: int


# ── Health ───────────────────────────────────────────────

@health_router.get("/health")
async def health_check():
    settings = get_settings()
    return {
        "status": "ok",
        "app": settings.app_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Quotes ───────────────────────────────────────────────

@pricing_router.post("/quote", response_model=QuoteResponse)
async def quote_slot(
    context: PricingContext,
    service: QuoteService = Depends(get_quote_service),
):
    if context.clock is None:
        context = context.model_copy(update={"clock": datetime.now(timezone.utc)})

    result = service.quote(
        context.slot,
        customer=context.customer,
        weather=context.weather,
        proximity_km=context.proximity_km,
        clock=context.clock,
    )
    return QuoteResponse(
        fingerprint=context_fingerprint(context),
        weather=describe_weather(context.weather),
        result=result,
    )


@pricing_router.post("/quotes", response_model=BatchQuoteResponse)
async def quote_listing(
    body: BatchQuoteRequest,
    service: QuoteService = Depends(get_quote_service),
):
    clock = body.clock or datetime.now(timezone.utc)
    priced = service.quote_many(
        body.slots,
        customer=body.customer,
        forecasts=body.forecasts,
        proximity_km=body.proximity_km,
        clock=clock,
    )

    quotes = [
        SlotQuote(
            slot_id=slot.id,
            starts_at=slot.starts_at,
            weather=describe_weather(select_closest_weather(slot.starts_at, body.forecasts)),
            result=result,
        )
        for slot, result in priced
    ]

    notifications = []
    if body.club_name:
        notifications = collect_panic_notifications(priced, body.club_name, clock)

    return BatchQuoteResponse(clock=clock, quotes=quotes, panic_notifications=notifications)


# ── Purchase-time recompute ──────────────────────────────

@pricing_router.post("/confirm", response_model=PricingResult)
async def confirm_purchase(
    body: ConfirmRequest,
    service: QuoteService = Depends(get_quote_service),
):
    try:
        return service.confirm_purchase(body.context, body.quoted_price)
    except SlotBlockedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StaleQuoteError as e:
        raise HTTPException(
            status_code=409,
            detail={
                "message": str(e),
                "quoted_price": e.quoted_price,
                "current_price": e.current_price,
            },
        )
