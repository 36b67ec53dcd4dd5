"""
Data schemas for pricing inputs and outputs.
Inputs are assembled by the calling layer from persisted records; outputs
are produced fresh per request and never mutated afterwards.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator

from .enums import (
    LoyaltySegment,
    FactorCode,
    BlockReason,
    NotificationType,
    NotificationStatus,
)


# ── Inputs ───────────────────────────────────────────────


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive timestamps are taken as UTC so they compare with the wall clock."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TimeSlot(BaseModel):
    """A bookable tee time."""
    id: int
    starts_at: datetime
    base_price: int  # currency units, >= 0 by upstream contract

    @field_validator("starts_at")
    @classmethod
    def starts_at_as_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)


class Customer(BaseModel):
    loyalty_segment: LoyaltySegment = LoyaltySegment.FUTURE


class WeatherSnapshot(BaseModel):
    """Forecast for the slot's hour."""
    rainfall_mm: float = 0.0
    precipitation_probability_pct: int = 0
    target_hour: Optional[int] = None  # only used to pick the closest forecast


class PricingContext(BaseModel):
    """Everything the engine needs. Absent optional fields skip their stage."""
    slot: TimeSlot
    customer: Optional[Customer] = None
    weather: Optional[WeatherSnapshot] = None
    proximity_km: Optional[float] = None
    clock: Optional[datetime] = None  # caller-supplied "now"

    @field_validator("clock")
    @classmethod
    def clock_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)


# ── Outputs ──────────────────────────────────────────────


class PricingFactor(BaseModel):
    """
    One line of the price breakdown. Negative amount = discount.
    rate is relative to the running price when applied, or to the base
    price for TIME_STEP and MAX_CAP.
    """
    code: FactorCode
    description: str
    amount: int
    rate: float

    model_config = {"frozen": True}


class StepStatus(BaseModel):
    current_step: int = 0  # 0-3
    next_step_at: Optional[datetime] = None

    model_config = {"frozen": True}


class PanicMode(BaseModel):
    active: bool = False
    minutes_left: int = 0
    reason: str = ""

    model_config = {"frozen": True}


class PricingResult(BaseModel):
    final_price: int
    base_price: int
    discount_rate: float = 0.0
    is_blocked: bool = False
    block_reason: Optional[BlockReason] = None
    factors: tuple[PricingFactor, ...] = ()
    step_status: StepStatus = Field(default_factory=StepStatus)
    panic_mode: PanicMode = Field(default_factory=PanicMode)

    model_config = {"frozen": True}


# ── Notifications ────────────────────────────────────────


class PanicNotification(BaseModel):
    """A panic-deal notification record, ready for an external push service."""
    slot_id: int
    type: NotificationType = NotificationType.PANIC_DEAL
    title: str
    message: str
    payload: dict[str, Any] = {}
    status: NotificationStatus = NotificationStatus.PENDING
    priority: int = 1
    expires_at: datetime
