"""
Hashing utilities for quote fingerprints and audit records.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def sha256_hash(content: str | bytes) -> str:
    """Return the SHA-256 hex digest of the given content."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def canonical_json(data: Any) -> str:
    """Serialize to JSON with sorted keys and no whitespace, so equal data hashes equally."""
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
