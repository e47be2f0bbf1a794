"""Great-circle distance helpers on a spherical Earth."""

from __future__ import annotations

import math

LatLng = tuple[float, float]

EARTH_RADIUS_M = 6371000.0


def get_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute the great-circle distance between two points in metres.

    Uses the Haversine formula with the mean Earth radius. Inputs are decimal
    degrees and are not validated: out-of-range latitude or longitude still yields
    a finite, non-negative number. Infinite or NaN inputs give ``nan`` rather than
    an exception. The longitude difference is fed straight into ``sin`` so
    date-line crossings need no normalisation.
    """

    if not all(math.isfinite(v) for v in (lat1, lon1, lat2, lon2)):
        return math.nan

    phi1 = math.radians(lat1)
    lambda1 = math.radians(lon1)
    phi2 = math.radians(lat2)
    lambda2 = math.radians(lon2)

    dphi = phi2 - phi1
    dlambda = lambda2 - lambda1

    sin_dphi = math.sin(dphi / 2.0)
    sin_dlambda = math.sin(dlambda / 2.0)

    a = sin_dphi**2 + math.cos(phi1) * math.cos(phi2) * sin_dlambda**2
    # floating point drift near antipodes can push a just outside [0, 1]
    a = min(1.0, max(0.0, a))
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_M * c


def haversine_distance_m(point_a: LatLng, point_b: LatLng) -> float:
    """Same as :func:`get_distance` for ``(lat, lon)`` tuples."""

    lat1, lon1 = point_a
    lat2, lon2 = point_b
    return get_distance(lat1, lon1, lat2, lon2)


__all__ = ["EARTH_RADIUS_M", "LatLng", "get_distance", "haversine_distance_m"]
