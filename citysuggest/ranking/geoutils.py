"""Geographic helpers used to boost nearby suggestions."""
from __future__ import annotations

import math

_EARTH_RADIUS_KM = 6371.0


def haversine_distance_km(
    lat1: float, lon1: float, lat2: float, lon2: float
) -> float:
    """Great-circle distance between two points, in kilometres."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    sin_delta_phi = math.sin(delta_phi / 2.0)
    sin_delta_lambda = math.sin(delta_lambda / 2.0)

    a = sin_delta_phi ** 2 + math.cos(phi1) * math.cos(phi2) * sin_delta_lambda ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return _EARTH_RADIUS_KM * c


def proximity(distance_km: float, scale_km: float) -> float:
    """Map a distance to ``(0, 1]``; strictly decreasing, 1 at distance 0."""

    return 1.0 / (1.0 + max(distance_km, 0.0) / scale_km)


__all__ = ["haversine_distance_km", "proximity"]
