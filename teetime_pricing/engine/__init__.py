"""Pricing engine — seeded generator, stages, rules and the composer."""

from teetime_pricing.engine.seeded_random import SeededGenerator
from teetime_pricing.engine.rules_config import PricingRules, RulesConfigStore, get_pricing_rules
from teetime_pricing.engine.pricing_engine import calculate_pricing, ResultComposer

__all__ = [
    "SeededGenerator",
    "PricingRules",
    "RulesConfigStore",
    "get_pricing_rules",
    "calculate_pricing",
    "ResultComposer",
]
