"""Client-side geo-fence check.

Runs on the (untrusted) device, so it is a compliance signal only and never a
substitute for the checkin guard.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..core.constants import EARTH_RADIUS_METERS
from ..settings.model import OfficeLocation


@dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeoFenceResult:
    allowed: bool
    distance_meters: Optional[float] = None


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def check_geofence(position: Optional[Position], office: OfficeLocation) -> GeoFenceResult:
    if not office.enabled:
        return GeoFenceResult(allowed=True)

    # Location permission denied / unavailable.
    if position is None:
        return GeoFenceResult(allowed=False)

    distance = haversine_distance(position.latitude, position.longitude, office.latitude, office.longitude)
    return GeoFenceResult(allowed=distance <= office.radius_meters, distance_meters=distance)
