# gpxmap/render/viewport.py
"""
Bounding region covering every rendered point.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from gpxmap.formats.gpx import GeoPoint


@dataclass(frozen=True)
class BoundingRegion:
    south: float
    west: float
    north: float
    east: float

    @classmethod
    def around(cls, point: GeoPoint) -> "BoundingRegion":
        """Zero-area region at a single point."""
        return cls(point.latitude, point.longitude, point.latitude, point.longitude)

    def extend(self, point: GeoPoint) -> "BoundingRegion":
        """Smallest region covering self and `point` (returns self if already covered)."""
        if self.contains(point):
            return self
        return BoundingRegion(
            south=min(self.south, point.latitude),
            west=min(self.west, point.longitude),
            north=max(self.north, point.latitude),
            east=max(self.east, point.longitude),
        )

    def contains(self, point: GeoPoint) -> bool:
        return (
            self.south <= point.latitude <= self.north
            and self.west <= point.longitude <= self.east
        )

    @property
    def corners(self) -> list[list[float]]:
        """[[south, west], [north, east]], the shape Leaflet's fitBounds expects."""
        return [[self.south, self.west], [self.north, self.east]]


def fit_region(points: Iterable[GeoPoint]) -> Optional[BoundingRegion]:
    """Region covering all points, or None when there are none."""
    region: Optional[BoundingRegion] = None
    for p in points:
        region = BoundingRegion.around(p) if region is None else region.extend(p)
    return region
