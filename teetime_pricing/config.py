"""
Application configuration using Pydantic Settings.
All environment-specific values are centralized here.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "Tee-Time Pricing Engine"
    debug: bool = False

    # ── Pricing rules ────────────────────────────────────
    pricing_rules_path: str = ""  # JSON override; empty = built-in defaults

    # ── Venue (for proximity) ────────────────────────────
    venue_latitude: float = 37.4563
    venue_longitude: float = 126.7052

    # ── Panic notifications ──────────────────────────────
    panic_notification_priority: int = 1  # 1 = highest
    panic_notification_expiry_mins: int = 60

    # ── Logging ──────────────────────────────────────────
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "TEETIME_",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
