"""
utils/geo.py
------------
Great-circle distance on a spherical Earth.
"""

import math

from config import EARTH_RADIUS_KM


def great_circle_km(
    lat1: float, lon1: float, lat2: float, lon2: float, radius_km: float = EARTH_RADIUS_KM
) -> float:
    """
    Distance in kilometres between two points given in decimal degrees.

    Uses the spherical law of cosines:
        d = R * acos(cos φ1 · cos φ2 · cos(λ2 − λ1) + sin φ1 · sin φ2)

    The acos argument is clamped to [-1, 1]; rounding
    can push it just past 1.0 for nearly coincident points, which would
    otherwise yield NaN.
    """
    if lat1 == lat2 and lon1 == lon2:
        # cos² + sin² may round below 1.0 and leave a residue of ~1e-4 km
        return 0.0

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_lambda = math.radians(lon2) - math.radians(lon1)

    cosine = (
        math.cos(phi1) * math.cos(phi2) * math.cos(delta_lambda)
        + math.sin(phi1) * math.sin(phi2)
    )
    cosine = max(-1.0, min(1.0, cosine))
    return radius_km * math.acos(cosine)
