"""
Tests: RulesConfigStore loading and fallback.

Run with:
    pytest teetime_pricing/tests/test_rules_config.py -v
"""

import json

import pytest

from teetime_pricing.engine.rules_config import PricingRules, RulesConfigStore
from teetime_pricing.models.enums import LoyaltySegment


@pytest.fixture(autouse=True)
def fresh_cache():
    RulesConfigStore.invalidate()
    yield
    RulesConfigStore.invalidate()


class TestDefaults:
    def test_production_constants(self):
        rules = PricingRules()
        assert rules.block.rainfall_mm == 10.0
        assert rules.step.step1_start_minutes == 120
        assert (rules.step.min_step_minutes, rules.step.max_step_minutes) == (10, 30)
        assert rules.step.high_price_step_amount == 10000
        assert rules.step.low_price_step_amount == 5000
        assert rules.weather.rain_rate == 0.20
        assert rules.weather.cloudy_rate == 0.10
        assert rules.segment.rates == {LoyaltySegment.PRESTIGE: 0.05}
        assert rules.proximity.max_distance_km == 15.0
        assert rules.governance.max_discount_rate == 0.40
        assert rules.panic.seed_offset == 999
        assert rules.panic.trigger_threshold == 0.8

    def test_empty_path_uses_defaults(self):
        assert RulesConfigStore(path="").get_rules() == PricingRules()


class TestFileOverride:
    def test_partial_override(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({
            "governance": {"max_discount_rate": 0.3},
            "segment": {"rates": {"PRESTIGE": 0.05, "CHERRY": 0.02}},
        }))
        rules = RulesConfigStore(path=str(path)).get_rules()
        assert rules.governance.max_discount_rate == 0.3
        assert rules.segment.rates[LoyaltySegment.CHERRY] == 0.02
        # untouched sections keep defaults
        assert rules.step == PricingRules().step

    def test_result_is_cached(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"block": {"rainfall_mm": 20}}))
        first = RulesConfigStore(path=str(path)).get_rules()
        path.write_text(json.dumps({"block": {"rainfall_mm": 5}}))
        assert RulesConfigStore(path=str(path)).get_rules() is first

    def test_each_path_gets_its_own_rules(self, tmp_path):
        first = tmp_path / "a.json"
        first.write_text(json.dumps({"block": {"rainfall_mm": 20}}))
        second = tmp_path / "b.json"
        second.write_text(json.dumps({"block": {"rainfall_mm": 5}}))
        assert RulesConfigStore(path=str(first)).get_rules().block.rainfall_mm == 20
        assert RulesConfigStore(path=str(second)).get_rules().block.rainfall_mm == 5
        assert RulesConfigStore(path=str(first)).get_rules().block.rainfall_mm == 20

    def test_defaults_do_not_shadow_file(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"block": {"rainfall_mm": 20}}))
        assert RulesConfigStore(path="").get_rules() == PricingRules()
        assert RulesConfigStore(path=str(path)).get_rules().block.rainfall_mm == 20

    def test_invalidate_reloads(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"block": {"rainfall_mm": 20}}))
        RulesConfigStore(path=str(path)).get_rules()
        path.write_text(json.dumps({"block": {"rainfall_mm": 5}}))
        RulesConfigStore.invalidate()
        assert RulesConfigStore(path=str(path)).get_rules().block.rainfall_mm == 5


class TestFallback:
    def test_missing_file(self, tmp_path):
        rules = RulesConfigStore(path=str(tmp_path / "nope.json")).get_rules()
        assert rules == PricingRules()

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text("{not json")
        assert RulesConfigStore(path=str(path)).get_rules() == PricingRules()

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"step": {"min_step_minutes": "soon"}}))
        assert RulesConfigStore(path=str(path)).get_rules() == PricingRules()

    def test_non_object_document(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps([1, 2, 3]))
        assert RulesConfigStore(path=str(path)).get_rules() == PricingRules()
