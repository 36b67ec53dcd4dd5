"""
Tee-Time Pricing — Main Entry Point

Quote one slot from the command line:
    python -m teetime_pricing.main --slot-id 42 --base-price 100000 --minutes 80

Run as an API server:
    python -m teetime_pricing.main --serve
    # or: uvicorn teetime_pricing.api:app --reload --port 8000

Or import and run programmatically:
    from teetime_pricing.main import run
    result = run(slot_id=42, base_price=100000, minutes_before_start=80)
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from teetime_pricing.config import get_settings
from teetime_pricing.models.enums import LoyaltySegment
from teetime_pricing.models.schemas import (
    Customer,
    PricingContext,
    PricingResult,
    TimeSlot,
    WeatherSnapshot,
)
from teetime_pricing.engine.pricing_engine import calculate_pricing
from teetime_pricing.engine.rules_config import get_pricing_rules
from teetime_pricing.services.audit_service import context_fingerprint
from teetime_pricing.utils.logger import setup_logging


def run(
    slot_id: int,
    base_price: int,
    minutes_before_start: float,
    segment: Optional[str] = None,
    rainfall_mm: Optional[float] = None,
    precipitation_pct: Optional[int] = None,
    proximity_km: Optional[float] = None,
) -> PricingResult:
    """Price a single slot that starts `minutes_before_start` from now."""
    setup_logging()

    clock = datetime.now(timezone.utc)
    weather = None
    if rainfall_mm is not None or precipitation_pct is not None:
        weather = WeatherSnapshot(
            rainfall_mm=rainfall_mm or 0.0,
            precipitation_probability_pct=precipitation_pct or 0,
        )

    context = PricingContext(
        slot=TimeSlot(
            id=slot_id,
            starts_at=clock + timedelta(minutes=minutes_before_start),
            base_price=base_price,
        ),
        customer=Customer(loyalty_segment=LoyaltySegment(segment.upper())) if segment else None,
        weather=weather,
        proximity_km=proximity_km,
        clock=clock,
    )

    result = calculate_pricing(context, get_pricing_rules())
    _print_summary(context, result)
    return result


def _print_summary(context: PricingContext, result: PricingResult) -> None:
    """Print a human-readable breakdown of the pricing result."""
    logger = logging.getLogger(__name__)

    logger.info("")
    logger.info("-" * 60)
    logger.info("  PRICING RESULT")
    logger.info("-" * 60)
    logger.info(f"  Slot:           {context.slot.id} @ {context.slot.starts_at.isoformat()}")
    logger.info(f"  Fingerprint:    {context_fingerprint(context)[:16]}...")
    logger.info(f"  Base Price:     {result.base_price:,}")

    if result.is_blocked:
        logger.info(f"  BLOCKED:        {result.block_reason.value}")
        logger.info("-" * 60)
        return

    for factor in result.factors:
        logger.info(
            f"    {factor.code.value:<11} {factor.amount:>+10,}  "
            f"({factor.rate:.1%})  {factor.description}"
        )
    logger.info(f"  Final Price:    {result.final_price:,}  (-{result.discount_rate:.0%})")
    logger.info(f"  Step:           {result.step_status.current_step}")
    if result.step_status.next_step_at:
        logger.info(f"  Next Step At:   {result.step_status.next_step_at.isoformat()}")
    if result.panic_mode.active:
        logger.info(f"  PANIC:          {result.panic_mode.reason} ({result.panic_mode.minutes_left} min)")
    logger.info("-" * 60)


def serve(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Start the FastAPI server."""
    import uvicorn

    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run("teetime_pricing.api:app", host=host, port=port, reload=get_settings().debug)


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Quote a tee-time slot or run the pricing API.")
    parser.add_argument("--serve", action="store_true", help="run the HTTP API")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--slot-id", type=int, default=1)
    parser.add_argument("--base-price", type=int, default=100000)
    parser.add_argument("--minutes", type=float, default=180.0, help="minutes until tee-off")
    parser.add_argument("--segment", choices=[s.value for s in LoyaltySegment], type=str.upper)
    parser.add_argument("--rain", type=float, help="rainfall in mm")
    parser.add_argument("--pop", type=int, help="precipitation probability (%%)")
    parser.add_argument("--distance", type=float, help="customer distance to venue in km")
    args = parser.parse_args(argv)

    if args.serve:
        serve(port=args.port)
    else:
        run(
            slot_id=args.slot_id,
            base_price=args.base_price,
            minutes_before_start=args.minutes,
            segment=args.segment,
            rainfall_mm=args.rain,
            precipitation_pct=args.pop,
            proximity_km=args.distance,
        )


if __name__ == "__main__":
    main()
