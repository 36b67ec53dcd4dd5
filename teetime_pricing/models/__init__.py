"""Models — enums and pydantic schemas."""

from teetime_pricing.models.enums import (
    LoyaltySegment,
    FactorCode,
    BlockReason,
    WeatherLabel,
    NotificationType,
    NotificationStatus,
)
from teetime_pricing.models.schemas import (
    TimeSlot,
    Customer,
    WeatherSnapshot,
    PricingContext,
    PricingFactor,
    StepStatus,
    PanicMode,
    PricingResult,
    PanicNotification,
)

__all__ = [
    "LoyaltySegment",
    "FactorCode",
    "BlockReason",
    "WeatherLabel",
    "NotificationType",
    "NotificationStatus",
    "TimeSlot",
    "Customer",
    "WeatherSnapshot",
    "PricingContext",
    "PricingFactor",
    "StepStatus",
    "PanicMode",
    "PricingResult",
    "PanicNotification",
]
