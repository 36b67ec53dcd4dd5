"""
Quote Service — the calling layer around the pricing engine.

Builds pricing contexts from slot, customer and forecast records, supplies
the wall clock (the engine never reads one), and re-prices at purchase time
so a stale quote is never honoured.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from teetime_pricing.engine.pricing_engine import calculate_pricing
from teetime_pricing.engine.rules_config import PricingRules, get_pricing_rules
from teetime_pricing.models.enums import WeatherLabel
from teetime_pricing.models.schemas import (
    Customer,
    PricingContext,
    PricingResult,
    TimeSlot,
    WeatherSnapshot,
)

logger = logging.getLogger(__name__)


class SlotBlockedError(ValueError):
    """The slot cannot be purchased: the recomputed price is blocked."""

    def __init__(self, slot_id: int, reason: str):
        self.slot_id = slot_id
        self.reason = reason
        super().__init__(f"Slot {slot_id} is blocked ({reason})")


class StaleQuoteError(ValueError):
    """The quoted price no longer matches the price at purchase time."""

    def __init__(self, slot_id: int, quoted_price: int, current_price: int):
        self.slot_id = slot_id
        self.quoted_price = quoted_price
        self.current_price = current_price
        super().__init__(
            f"Quote for slot {slot_id} is stale: quoted {quoted_price}, now {current_price}"
        )


# ── Forecast helpers ─────────────────────────────────────


def select_closest_weather(
    starts_at: datetime,
    forecasts: Sequence[WeatherSnapshot],
) -> Optional[WeatherSnapshot]:
    """Pick the hourly forecast nearest the slot's start hour. Earliest wins ties."""
    best: Optional[WeatherSnapshot] = None
    best_gap = float("inf")
    for forecast in forecasts:
        if forecast.target_hour is None:
            continue
        gap = abs(forecast.target_hour - starts_at.hour)
        if gap < best_gap:
            best = forecast
            best_gap = gap
    return best


def describe_weather(weather: Optional[WeatherSnapshot]) -> WeatherLabel:
    """Coarse label for a forecast, using the same thresholds as the weather discount."""
    if weather is None:
        return WeatherLabel.UNKNOWN
    if weather.rainfall_mm >= 1 or weather.precipitation_probability_pct >= 60:
        return WeatherLabel.RAIN
    if weather.precipitation_probability_pct >= 30:
        return WeatherLabel.CLOUDY
    return WeatherLabel.SUNNY


# ── Service ──────────────────────────────────────────────


class QuoteService:
    """Prices slots for listings and re-prices them at purchase time."""

    def __init__(self, rules: Optional[PricingRules] = None):
        self.rules = rules or get_pricing_rules()

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def quote(
        self,
        slot: TimeSlot,
        customer: Optional[Customer] = None,
        weather: Optional[WeatherSnapshot] = None,
        proximity_km: Optional[float] = None,
        clock: Optional[datetime] = None,
    ) -> PricingResult:
        context = PricingContext(
            slot=slot,
            customer=customer,
            weather=weather,
            proximity_km=proximity_km,
            clock=clock or self._now(),
        )
        return calculate_pricing(context, self.rules)

    def quote_many(
        self,
        slots: Sequence[TimeSlot],
        customer: Optional[Customer] = None,
        forecasts: Sequence[WeatherSnapshot] = (),
        proximity_km: Optional[float] = None,
        clock: Optional[datetime] = None,
    ) -> list[tuple[TimeSlot, PricingResult]]:
        """Price a listing. All slots share one clock so the page is consistent."""
        clock = clock or self._now()
        results = [
            (
                slot,
                self.quote(
                    slot,
                    customer=customer,
                    weather=select_closest_weather(slot.starts_at, forecasts),
                    proximity_km=proximity_km,
                    clock=clock,
                ),
            )
            for slot in slots
        ]
        logger.info(f"Quoted {len(results)} slots at {clock.isoformat()}")
        return results

    def confirm_purchase(self, context: PricingContext, quoted_price: int) -> PricingResult:
        """
        Recompute the price with purchase-time inputs.
        Raises SlotBlockedError or StaleQuoteError; returns the fresh result otherwise.
        """
        if context.clock is None:
            context = context.model_copy(update={"clock": self._now()})

        result = calculate_pricing(context, self.rules)
        slot_id = context.slot.id

        if result.is_blocked:
            logger.info(f"Purchase refused for slot {slot_id}: blocked")
            raise SlotBlockedError(slot_id, result.block_reason.value)

        if result.final_price != quoted_price:
            logger.info(
                f"Purchase refused for slot {slot_id}: quoted {quoted_price}, "
                f"recomputed {result.final_price}"
            )
            raise StaleQuoteError(slot_id, quoted_price, result.final_price)

        logger.info(f"Purchase price confirmed for slot {slot_id}: {result.final_price}")
        return result
