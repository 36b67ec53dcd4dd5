"""
FastAPI application factory and API package.

Run with:
    uvicorn teetime_pricing.api:app --reload --port 8000

Or via main.py:
    python -m teetime_pricing.main --serve
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from teetime_pricing.config import get_settings
from teetime_pricing.api.routes import pricing_router, health_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Application factory — create and configure the FastAPI instance."""
    settings = get_settings()

    application = FastAPI(
        title="Tee-Time Pricing API",
        description="Dynamic tee-time pricing: quotes, listings and purchase-time re-pricing",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
    )

    # CORS: listing UIs call this directly (adjust origins in production)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(health_router, tags=["Health"])
    application.include_router(pricing_router, prefix="/api/pricing", tags=["Pricing"])

    logger.info(f"Created {settings.app_name} API")
    return application


# Module-level instance for `uvicorn teetime_pricing.api:app`
app = create_app()
