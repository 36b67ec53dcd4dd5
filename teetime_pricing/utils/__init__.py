from .logger import setup_logging
from .hashing import sha256_hash, canonical_json
from .geo import haversine_km, distance_to_venue_km

__all__ = [
    "setup_logging",
    "sha256_hash",
    "canonical_json",
    "haversine_km",
    "distance_to_venue_km",
]
