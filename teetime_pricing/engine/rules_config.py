"""
Rules Config Store — loads the pricing rule constants.

Rules are a deployment-level setting: read once from an optional JSON file
and cached. Falls back to the built-in defaults if no file is configured or
the file cannot be read. The defaults are the production constants; changing
them changes every price the engine produces.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from teetime_pricing.config import get_settings
from teetime_pricing.models.enums import LoyaltySegment

logger = logging.getLogger(__name__)


# ── Config models ────────────────────────────────────────

class BlockConfig(BaseModel):
    """Severe-weather blocking."""
    rainfall_mm: float = 10.0


class StepConfig(BaseModel):
    """Time-urgency fixed-amount markdown."""
    step1_start_minutes: int = 120
    min_step_minutes: int = 10
    max_step_minutes: int = 30
    price_threshold: int = 100000
    high_price_step_amount: int = 10000
    low_price_step_amount: int = 5000


class WeatherDiscountConfig(BaseModel):
    rain_rainfall_mm: float = 1.0
    rain_probability_pct: int = 60
    rain_rate: float = 0.20
    rain_description: str = "Rain Forecast (20%)"
    cloudy_probability_pct: int = 30
    cloudy_rate: float = 0.10
    cloudy_description: str = "Cloudy Skies (10%)"


class SegmentDiscountConfig(BaseModel):
    """Per-segment rates. Segments not listed get no discount."""
    rates: dict[LoyaltySegment, float] = {LoyaltySegment.PRESTIGE: 0.05}
    descriptions: dict[LoyaltySegment, str] = {
        LoyaltySegment.PRESTIGE: "PRESTIGE Member (5%)",
    }


class ProximityDiscountConfig(BaseModel):
    max_distance_km: float = 15.0
    rate: float = 0.10
    description: str = "Local Resident (10%)"


class GovernanceConfig(BaseModel):
    max_discount_rate: float = 0.40
    min_price: int = 0  # last-resort floor


class PanicConfig(BaseModel):
    seed_offset: int = 999
    max_minutes: float = 30.0
    urgent_minutes: float = 10.0
    trigger_threshold: float = 0.8
    urgent_message: str = "Urgent! Tee-off is moments away"
    moderate_message: str = "Almost gone! Book now"


class PricingRules(BaseModel):
    """All pricing constants, grouped by stage."""
    block: BlockConfig = BlockConfig()
    step: StepConfig = StepConfig()
    weather: WeatherDiscountConfig = WeatherDiscountConfig()
    segment: SegmentDiscountConfig = SegmentDiscountConfig()
    proximity: ProximityDiscountConfig = ProximityDiscountConfig()
    governance: GovernanceConfig = GovernanceConfig()
    panic: PanicConfig = PanicConfig()


# ── Store class ──────────────────────────────────────────

class RulesConfigStore:
    """
    Loads PricingRules from the configured JSON file. Falls back to defaults.
    Cached per path after first load for the lifetime of the process.
    """

    _cache: dict[str, PricingRules] = {}

    def __init__(self, path: Optional[str] = None):
        self.path = path if path is not None else get_settings().pricing_rules_path

    def get_rules(self) -> PricingRules:
        rules = RulesConfigStore._cache.get(self.path)
        if rules is None:
            rules = self._load()
            RulesConfigStore._cache[self.path] = rules
        return rules

    def _load(self) -> PricingRules:
        if not self.path:
            return PricingRules()

        path = Path(self.path)
        if not path.exists():
            logger.warning(f"Pricing rules file {path} not found, using defaults")
            return PricingRules()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            rules = PricingRules(**data)
        except (OSError, json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning(f"Failed loading pricing rules from {path}, using defaults: {e}")
            return PricingRules()

        logger.info(f"Loaded pricing rules from {path}")
        return rules

    @classmethod
    def invalidate(cls) -> None:
        """Drop the cached rules so the next call reloads them."""
        cls._cache.clear()


def get_pricing_rules() -> PricingRules:
    """Return the process-wide pricing rules."""
    return RulesConfigStore().get_rules()
