"""Great-circle distance on a spherical Earth."""

import math

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in meters.

    Inputs are not range-checked; out-of-range degrees still give a finite
    number for finite input.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (math.sin(dlat / 2) ** 2 +
         math.cos(phi1) * math.cos(phi2) *
         math.sin(dlon / 2) ** 2)
    # Rounding can push a a hair outside [0, 1] for near-antipodal points
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
