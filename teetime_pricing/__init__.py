"""Dynamic tee-time pricing engine."""

from teetime_pricing.engine.pricing_engine import calculate_pricing

__all__ = ["calculate_pricing"]
