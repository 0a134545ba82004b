# gpxmap/analyze/geo.py
"""
Great-circle helpers for GPXmap

All distances use a fixed Earth radius of 6371 km so that results are
reproducible regardless of the `haversine` package's own mean radius.
"""

from __future__ import annotations

import math

from haversine import haversine, Unit

from gpxmap.formats.gpx import GeoPoint

EARTH_RADIUS_KM = 6371.0


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance between two points, in kilometres."""
    angle = haversine(
        (a.latitude, a.longitude),
        (b.latitude, b.longitude),
        unit=Unit.RADIANS,
    )
    return angle * EARTH_RADIUS_KM


def bearing_degrees(a: GeoPoint, b: GeoPoint) -> float:
    """
    Initial compass bearing from `a` to `b`, in [0, 360).

    0 is north, 90 east. Identical points have no direction; 0 is returned.
    """
    if a.latitude == b.latitude and a.longitude == b.longitude:
        return 0.0

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    x = math.sin(dlon) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)

    deg = math.degrees(math.atan2(x, y)) % 360.0
    # -tiny % 360 can round up to exactly 360.0
    return 0.0 if deg >= 360.0 else deg
