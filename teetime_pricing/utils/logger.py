"""Centralized logging configuration.
Call setup_logging() once at process startup (CLI run or API server).
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from teetime_pricing.config import get_settings

_FORMAT = (
    "\n%(asctime)s │ %(levelname)-8s │ %(name)s │ %(funcName)s:%(lineno)d\n"
    "  %(message)s"
)


def _resolve_level(level: Optional[str]) -> int:
    name = (level or get_settings().log_level).upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger. Level defaults to TEETIME_LOG_LEVEL."""
    root = logging.getLogger()
    # Avoid duplicate handlers on repeated calls
    if root.handlers:
        return

    resolved = _resolve_level(level)
    root.setLevel(resolved)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)

    # Per-stage engine decisions are DEBUG; server chatter stays quieter
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("fastapi").setLevel(logging.INFO)

    if level is not None and logging.getLevelName(level.upper()) != resolved:
        logging.getLogger(__name__).warning(f"Unknown log level {level!r}, using INFO")
