# gpxmap/render/segments.py
"""
Per-segment elevation coloring.

Every adjacent point pair of every track becomes one ColoredSegment,
colored by the average elevation of its two endpoints against the
document-wide ElevationRange. Output order is track, then position.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from gpxmap.formats.gpx import GeoPoint, Track
from gpxmap.render.colors import RGB, ElevationRange, HIGH_COLOR, LOW_COLOR, color_for


@dataclass(frozen=True)
class ColoredSegment:
    start: GeoPoint
    end: GeoPoint
    color: RGB


def iter_colored_segments(
    tracks: Iterable[Track],
    elevation_range: ElevationRange,
    *,
    low: RGB = LOW_COLOR,
    high: RGB = HIGH_COLOR,
    gamma: float = 1.0,
) -> Iterator[ColoredSegment]:
    for track in tracks:
        pts = track.points
        for p0, p1 in zip(pts, pts[1:]):
            avg = (p0.elevation_or_zero + p1.elevation_or_zero) / 2
            yield ColoredSegment(
                start=p0,
                end=p1,
                color=color_for(avg, elevation_range, low=low, high=high, gamma=gamma),
            )
