"""
Dynamic tee-time pricing engine.

Layer order:
  1. Block       (severe weather → unavailable, no discounts)
  2. Step        (flat urgency markdown, seeded by slot id)
  3. Percent     (weather → segment → proximity)
  4. Governance  (40% cap, floor at 0)
  5. Panic flag  (seeded by slot id + offset, informational)
  6. Compose     (final price, rate, breakdown)

The engine is a pure function of its context: no clock reads, no I/O, no
shared state. Identical contexts give identical results.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from teetime_pricing.engine.rules_config import PricingRules
from teetime_pricing.engine.stages import (
    PriceLedger,
    StepSchedule,
    build_stages,
    minutes_until_start,
    ratio,
)
from teetime_pricing.models.enums import BlockReason
from teetime_pricing.models.schemas import (
    PanicMode,
    PricingContext,
    PricingResult,
    StepStatus,
)

logger = logging.getLogger(__name__)


def round_rate(value: float) -> float:
    """Round to two decimals, halves away from zero on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class ResultComposer:
    """Assembles the PricingResult from the ledger and stage outcomes."""

    def compose(
        self,
        context: PricingContext,
        ledger: PriceLedger,
        step_level: int,
        schedule: StepSchedule,
        panic_mode: PanicMode,
    ) -> PricingResult:
        base_price = ledger.base_price
        final_price = math.floor(ledger.current_price)
        return PricingResult(
            final_price=final_price,
            base_price=base_price,
            discount_rate=round_rate(ratio(base_price - final_price, base_price)),
            is_blocked=False,
            factors=tuple(ledger.factors),
            step_status=StepStatus(
                current_step=step_level,
                next_step_at=schedule.next_step_at(context.slot.starts_at, step_level),
            ),
            panic_mode=panic_mode,
        )

    def blocked(self, context: PricingContext, reason: BlockReason) -> PricingResult:
        base_price = context.slot.base_price
        return PricingResult(
            final_price=base_price,
            base_price=base_price,
            discount_rate=0.0,
            is_blocked=True,
            block_reason=reason,
            factors=(),
        )


def calculate_pricing(
    context: PricingContext,
    rules: Optional[PricingRules] = None,
) -> PricingResult:
    """
    Compute the price of one slot for one customer at context.clock.
    Uses the built-in rules unless the caller passes loaded ones.
    """
    rules = rules or PricingRules()
    blocking, step, percent, governance, panic = build_stages(rules)
    composer = ResultComposer()
    slot = context.slot

    # ── Block ────────────────────────────────────────────
    block_reason = blocking.check(context.weather)
    if block_reason is not None:
        logger.info(f"Slot {slot.id} blocked: {block_reason.value}")
        return composer.blocked(context, block_reason)

    minutes = minutes_until_start(slot.starts_at, context.clock)
    ledger = PriceLedger(slot.base_price)

    # ── Step ─────────────────────────────────────────────
    schedule = step.schedule_for(slot.id)
    step_level = step.apply(ledger, schedule, minutes)

    # ── Weather → segment → proximity ────────────────────
    percent.apply(ledger, context)

    # ── Cap, then floor ──────────────────────────────────
    governance.apply(ledger)

    # ── Panic flag (price untouched) ─────────────────────
    panic_mode = panic.detect(slot.id, minutes)

    # ── Compose ──────────────────────────────────────────
    result = composer.compose(context, ledger, step_level, schedule, panic_mode)
    logger.debug(
        f"Slot {slot.id}: {result.base_price} → {result.final_price} "
        f"({result.discount_rate:.0%}, {len(result.factors)} factors, step {step_level})"
    )
    return result
