"""Services — QuoteService, audit records, panic notifications."""

from teetime_pricing.services.quote_service import (
    QuoteService,
    SlotBlockedError,
    StaleQuoteError,
    select_closest_weather,
    describe_weather,
)
from teetime_pricing.services.audit_service import build_audit_record, context_fingerprint
from teetime_pricing.services.notification_service import (
    build_panic_notification,
    collect_panic_notifications,
)

__all__ = [
    "QuoteService",
    "SlotBlockedError",
    "StaleQuoteError",
    "select_closest_weather",
    "describe_weather",
    "build_audit_record",
    "context_fingerprint",
    "build_panic_notification",
    "collect_panic_notifications",
]
