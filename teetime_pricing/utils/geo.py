"""
Great-circle distance helpers for the proximity (LBS) discount.

The engine only consumes a caller-computed ``proximity_km``; these helpers
are what the calling layer uses to derive it from customer coordinates.
"""

from __future__ import annotations

import math
from typing import Optional

from teetime_pricing.config import Settings, get_settings

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in kilometres between two (lat, lon) points in degrees."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_to_venue_km(
    latitude: float,
    longitude: float,
    settings: Optional[Settings] = None,
) -> float:
    """Distance from the given coordinates to the configured venue."""
    settings = settings or get_settings()
    return haversine_km(latitude, longitude, settings.venue_latitude, settings.venue_longitude)
