"""
Audit Service — fingerprints pricing inputs and builds the breakdown record
that the reservation write path persists alongside the final price.
"""

from __future__ import annotations

from typing import Any

from teetime_pricing.models.schemas import PricingContext, PricingResult
from teetime_pricing.utils.hashing import canonical_json, sha256_hash


def context_fingerprint(context: PricingContext) -> str:
    """
    SHA-256 over the full input tuple, clock included.
    Safe as a cache key: equal fingerprints mean equal results.
    """
    return sha256_hash(canonical_json(context.model_dump(mode="json")))


def build_audit_record(context: PricingContext, result: PricingResult) -> dict[str, Any]:
    """JSON-serializable record of one computation, factors kept in order."""
    dumped = result.model_dump(mode="json")
    return {
        "fingerprint": context_fingerprint(context),
        "slot_id": context.slot.id,
        "clock": _clock_iso(context),
        "base_price": result.base_price,
        "final_price": result.final_price,
        "discount_rate": result.discount_rate,
        "is_blocked": result.is_blocked,
        "block_reason": dumped["block_reason"],
        "factors": dumped["factors"],
        "step_status": dumped["step_status"],
    }


def _clock_iso(context: PricingContext) -> str | None:
    return context.clock.isoformat() if context.clock else None
