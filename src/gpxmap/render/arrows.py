# gpxmap/render/arrows.py
"""
Direction-of-travel markers

A greedy fixed-interval sampler: walk the track summing segment lengths
and drop a marker whenever at least `threshold_km` has been covered since
the previous marker. The baseline resets to the distance at the emission
point (not to the nearest multiple of the threshold), so markers are
spaced >= threshold_km apart, not exactly threshold_km.
"""

from __future__ import annotations

from dataclasses import dataclass

from gpxmap.analyze.geo import bearing_degrees, distance_km
from gpxmap.formats.gpx import GeoPoint, Track

DEFAULT_ARROW_THRESHOLD_KM = 3.0


@dataclass(frozen=True)
class DirectionMarker:
    position: GeoPoint
    bearing_degrees: float
    cumulative_distance_km: float


def place_direction_markers(
    track: Track, threshold_km: float = DEFAULT_ARROW_THRESHOLD_KM
) -> list[DirectionMarker]:
    """
    Markers for one track, in travel order.

    Each marker sits on the start point of the segment that crossed the
    threshold and points along that segment. At most one marker is
    emitted per segment.
    """
    if threshold_km <= 0:
        raise ValueError(f"threshold_km must be > 0, got {threshold_km}")

    markers: list[DirectionMarker] = []
    accumulated = 0.0
    last_arrow = 0.0

    for p0, p1 in zip(track.points, track.points[1:]):
        accumulated += distance_km(p0, p1)
        if accumulated - last_arrow >= threshold_km:
            markers.append(
                DirectionMarker(
                    position=p0,
                    bearing_degrees=bearing_degrees(p0, p1),
                    cumulative_distance_km=accumulated,
                )
            )
            last_arrow = accumulated

    return markers
