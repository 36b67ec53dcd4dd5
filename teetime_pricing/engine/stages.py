"""
Pricing stages, applied in a fixed order by the engine:

  1. BlockingStage         severe weather short-circuits everything
  2. StepDiscountStage     flat time-urgency markdown, seeded per slot
  3. PercentDiscountStage  weather → segment → proximity, compounding
  4. GovernanceStage       discount cap, then the hard price floor
  5. PanicDetector         urgency flag, never touches the price

Stages 2-4 share a PriceLedger: the running price plus the append-only
factor list. Factor order is part of the audit trail.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Optional

from teetime_pricing.engine.rules_config import (
    BlockConfig,
    StepConfig,
    WeatherDiscountConfig,
    SegmentDiscountConfig,
    ProximityDiscountConfig,
    GovernanceConfig,
    PanicConfig,
    PricingRules,
)
from teetime_pricing.engine.seeded_random import SeededGenerator
from teetime_pricing.models.enums import BlockReason, FactorCode
from teetime_pricing.models.schemas import (
    PanicMode,
    PricingContext,
    PricingFactor,
    WeatherSnapshot,
)

logger = logging.getLogger(__name__)


def minutes_until_start(starts_at: datetime, clock: Optional[datetime]) -> Optional[float]:
    """Fractional minutes from clock to start; None when no clock was supplied."""
    if clock is None:
        return None
    return (starts_at - clock) / timedelta(milliseconds=1) / 60000


def ratio(amount: float, base: float) -> float:
    """amount / base, with 0.0 for a zero base."""
    if base == 0:
        return 0.0
    return amount / base


class PriceLedger:
    """Running price and the factors that produced it, for one pricing call."""

    def __init__(self, base_price: int):
        self.base_price = base_price
        self.current_price = base_price
        self.factors: list[PricingFactor] = []

    def adjust(self, code: FactorCode, description: str, amount: int, rate: float) -> None:
        """Apply a signed adjustment and record it."""
        self.current_price += amount
        self.factors.append(
            PricingFactor(code=code, description=description, amount=amount, rate=rate)
        )


# ── 1. Blocking ──────────────────────────────────────────


class BlockingStage:
    """Safety rule: the slot is unavailable in a storm."""

    def __init__(self, rules: BlockConfig):
        self.rules = rules

    def check(self, weather: Optional[WeatherSnapshot]) -> Optional[BlockReason]:
        if weather is None:
            return None
        if weather.rainfall_mm >= self.rules.rainfall_mm:
            logger.debug(f"Blocked: rainfall {weather.rainfall_mm}mm >= {self.rules.rainfall_mm}mm")
            return BlockReason.WEATHER_STORM
        return None


# ── 2. Step discount ─────────────────────────────────────


class StepSchedule:
    """Minutes-before-start boundaries at which steps 1, 2 and 3 activate."""

    def __init__(self, step1_start: int, step2_start: int, step3_start: int):
        self.step1_start = step1_start
        self.step2_start = step2_start
        self.step3_start = step3_start

    @property
    def boundaries(self) -> tuple[int, int, int]:
        return (self.step1_start, self.step2_start, self.step3_start)

    def level_at(self, minutes: Optional[float]) -> int:
        if minutes is None or minutes > self.step1_start:
            return 0
        if minutes > self.step2_start:
            return 1
        if minutes > self.step3_start:
            return 2
        return 3

    def next_step_at(self, starts_at: datetime, level: int) -> Optional[datetime]:
        """Timestamp at which the next step activates; None once at the last step."""
        if level >= 3:
            return None
        return starts_at - timedelta(minutes=self.boundaries[level])


class StepDiscountStage:
    """
    Flat currency markdown growing as the start approaches.

    Only the timing of each step is randomized, per slot, so every viewer
    sees the same schedule for the same slot. The magnitude depends on the
    price tier alone.
    """

    def __init__(self, rules: StepConfig):
        self.rules = rules

    def schedule_for(self, slot_id: int) -> StepSchedule:
        # Two draws from one generator, step 1 duration first.
        generator = SeededGenerator(slot_id)
        step1_start = self.rules.step1_start_minutes
        step1_duration = generator.range(self.rules.min_step_minutes, self.rules.max_step_minutes)
        step2_start = step1_start - step1_duration
        step2_duration = generator.range(self.rules.min_step_minutes, self.rules.max_step_minutes)
        step3_start = step2_start - step2_duration
        return StepSchedule(step1_start, step2_start, step3_start)

    def step_amount(self, base_price: int) -> int:
        if base_price >= self.rules.price_threshold:
            return self.rules.high_price_step_amount
        return self.rules.low_price_step_amount

    def apply(self, ledger: PriceLedger, schedule: StepSchedule, minutes: Optional[float]) -> int:
        """Deduct the step markdown, if any. Returns the step level."""
        level = schedule.level_at(minutes)
        if level > 0:
            deduction = level * self.step_amount(ledger.base_price)
            ledger.adjust(
                FactorCode.TIME_STEP,
                f"Urgency Deal (Step {level})",
                -deduction,
                ratio(deduction, ledger.base_price),
            )
            logger.debug(f"Step level {level}: -{deduction}")
        return level


# ── 3. Percent discounts ─────────────────────────────────


class PercentDiscountStage:
    """Weather, segment and proximity discounts, each on the already-discounted price."""

    def __init__(
        self,
        weather: WeatherDiscountConfig,
        segment: SegmentDiscountConfig,
        proximity: ProximityDiscountConfig,
    ):
        self.weather = weather
        self.segment = segment
        self.proximity = proximity

    def apply(self, ledger: PriceLedger, context: PricingContext) -> None:
        # Order matters: each rate compounds on the previous result.
        self._apply_weather(ledger, context.weather)
        self._apply_segment(ledger, context)
        self._apply_proximity(ledger, context.proximity_km)

    def _apply_weather(self, ledger: PriceLedger, weather: Optional[WeatherSnapshot]) -> None:
        if weather is None:
            return
        cfg = self.weather
        if (
            weather.rainfall_mm >= cfg.rain_rainfall_mm
            or weather.precipitation_probability_pct >= cfg.rain_probability_pct
        ):
            self._discount(ledger, FactorCode.WEATHER, cfg.rain_description, cfg.rain_rate)
        elif weather.precipitation_probability_pct >= cfg.cloudy_probability_pct:
            self._discount(ledger, FactorCode.WEATHER, cfg.cloudy_description, cfg.cloudy_rate)

    def _apply_segment(self, ledger: PriceLedger, context: PricingContext) -> None:
        if context.customer is None:
            return
        segment = context.customer.loyalty_segment
        rate = self.segment.rates.get(segment, 0.0)
        if rate > 0:
            description = self.segment.descriptions.get(segment, f"{segment.value} Member")
            self._discount(ledger, FactorCode.VIP_STATUS, description, rate)

    def _apply_proximity(self, ledger: PriceLedger, proximity_km: Optional[float]) -> None:
        if proximity_km is None or proximity_km > self.proximity.max_distance_km:
            return
        self._discount(ledger, FactorCode.LBS_NEARBY, self.proximity.description, self.proximity.rate)

    @staticmethod
    def _discount(ledger: PriceLedger, code: FactorCode, description: str, rate: float) -> None:
        amount = math.floor(ledger.current_price * rate)
        ledger.adjust(code, description, -amount, rate)
        logger.debug(f"{code.value}: -{amount} ({rate:.0%} of running price)")


# ── 4. Governance ────────────────────────────────────────


class GovernanceStage:
    """Caps the aggregate discount, then enforces the absolute price floor."""

    def __init__(self, rules: GovernanceConfig):
        self.rules = rules

    def apply(self, ledger: PriceLedger) -> None:
        base_price = ledger.base_price
        max_discount = math.floor(base_price * self.rules.max_discount_rate)
        min_price = base_price - max_discount

        if ledger.current_price < min_price:
            correction = min_price - ledger.current_price
            ledger.adjust(
                FactorCode.MAX_CAP,
                f"Max Discount Cap ({self.rules.max_discount_rate:.0%})",
                correction,
                ratio(correction, base_price),
            )
            logger.debug(f"Discount cap applied: +{correction}")

        # Only reachable with a cap above 100%.
        if ledger.current_price < self.rules.min_price:
            logger.warning(
                f"Price {ledger.current_price} fell below floor {self.rules.min_price} "
                f"(base {base_price}); clamping"
            )
            ledger.current_price = self.rules.min_price


# ── 5. Panic detection ───────────────────────────────────


class PanicDetector:
    """
    Informational urgency flag for slots about to start.

    Uses its own generator, seeded apart from the step schedule, so the
    trigger is decorrelated from step timing.
    """

    def __init__(self, rules: PanicConfig):
        self.rules = rules

    def detect(self, slot_id: int, minutes: Optional[float]) -> PanicMode:
        if minutes is None:
            return PanicMode()

        minutes_left = math.floor(minutes)
        if 0 < minutes <= self.rules.max_minutes:
            generator = SeededGenerator(slot_id + self.rules.seed_offset)
            if generator.next() > self.rules.trigger_threshold:
                reason = (
                    self.rules.urgent_message
                    if minutes <= self.rules.urgent_minutes
                    else self.rules.moderate_message
                )
                logger.debug(f"Panic mode for slot {slot_id}: {minutes_left} min left")
                return PanicMode(active=True, minutes_left=minutes_left, reason=reason)

        return PanicMode(active=False, minutes_left=minutes_left, reason="")


def build_stages(rules: PricingRules) -> tuple[
    BlockingStage, StepDiscountStage, PercentDiscountStage, GovernanceStage, PanicDetector
]:
    """Instantiate every stage from one rules object."""
    return (
        BlockingStage(rules.block),
        StepDiscountStage(rules.step),
        PercentDiscountStage(rules.weather, rules.segment, rules.proximity),
        GovernanceStage(rules.governance),
        PanicDetector(rules.panic),
    )
