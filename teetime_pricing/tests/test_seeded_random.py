"""
Tests: SeededGenerator reproducibility.

Run with:
    pytest teetime_pricing/tests/test_seeded_random.py -v
"""

from teetime_pricing.engine.seeded_random import SeededGenerator


class TestNext:
    def test_first_draws_for_seed_42(self):
        gen = SeededGenerator(42)
        assert gen.next() == 206659 / 233280
        assert gen.next() == 190736 / 233280

    def test_values_in_unit_interval(self):
        gen = SeededGenerator(7)
        for _ in range(1000):
            value = gen.next()
            assert 0 <= value < 1

    def test_separate_instances_do_not_share_state(self):
        a = SeededGenerator(42)
        b = SeededGenerator(42)
        a.next()
        a.next()
        # b is unaffected by draws on a
        assert b.next() == 206659 / 233280

    def test_panic_seed_for_slot_42(self):
        # slot 42 + 999 offset
        assert SeededGenerator(1041).next() == 167158 / 233280


class TestRange:
    def test_step_durations_for_seed_42(self):
        gen = SeededGenerator(42)
        assert gen.range(10, 30) == 28
        assert gen.range(10, 30) == 27

    def test_step_durations_for_seed_1(self):
        gen = SeededGenerator(1)
        assert gen.range(10, 30) == 15
        assert gen.range(10, 30) == 21

    def test_range_is_inclusive_and_bounded(self):
        seen = set()
        for seed in range(500):
            gen = SeededGenerator(seed)
            for _ in range(2):
                value = gen.range(10, 30)
                assert 10 <= value <= 30
                seen.add(value)
        assert 10 in seen and 30 in seen

    def test_call_order_matters(self):
        gen = SeededGenerator(42)
        gen.next()
        # skipping a draw shifts every later value
        assert gen.range(10, 30) == 27
