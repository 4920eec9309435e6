"""
Distance calculation using the Haversine formula.

Assumption
----------
Drivers see straight-line (great-circle) distances, not road distances.
Good enough to order a day's drops by proximity without a routing engine.

Complexity: O(1) per call.
"""

import math

EARTH_RADIUS_KM = 6_371.0


def haversine_km(
    lat1: float, lng1: float, lat2: float, lng2: float
) -> float:
    """Return the great-circle distance in **km** between two points."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    # rounding can push a just past 1 for near-antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def format_distance(km: float) -> str:
    """Render ``km`` as ``"500m"`` below one kilometre, else ``"3.4km"``."""
    if km < 1:
        # half-up, not round()'s half-to-even
        return f"{math.floor(km * 1000 + 0.5)}m"
    return f"{km:.1f}km"
