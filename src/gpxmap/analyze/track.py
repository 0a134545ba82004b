# gpxmap/analyze/track.py
"""
Track analysis functions for GPXmap
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import chain
from typing import Iterable, Optional

from gpxmap.analyze.geo import distance_km
from gpxmap.formats.gpx import Document, GeoPoint, Track
from gpxmap.render.arrows import DEFAULT_ARROW_THRESHOLD_KM, place_direction_markers
from gpxmap.render.colors import ElevationRange


def elevation_range_of(
    tracks: Iterable[Track],
) -> tuple[Optional[ElevationRange], list[GeoPoint]]:
    """
    Document-wide elevation range plus the flattened point list.

    Missing elevations count as 0. With no points at all the range is
    undefined and None is returned; callers skip segment coloring then.
    The flattened points are returned so viewport fitting can reuse them.
    """
    points = list(chain.from_iterable(t.points for t in tracks))
    if not points:
        return None, points

    elevations = [p.elevation_or_zero for p in points]
    return ElevationRange(min=min(elevations), max=max(elevations)), points


def compute_step_metrics(points):
    """Return per-segment distance (km) and elevation change (m)."""
    ds = []
    dzs = []

    for p0, p1 in zip(points, points[1:]):
        ds.append(distance_km(p0, p1))
        dzs.append(p1.elevation_or_zero - p0.elevation_or_zero)

    return ds, dzs


@dataclass(frozen=True)
class TrackSummary:
    name: Optional[str]
    points: int
    segments: int
    distance_km: float
    ascent_m: float
    descent_m: float
    elevation_range: Optional[ElevationRange]
    direction_markers: int


def summarize_track(
    track: Track, threshold_km: float = DEFAULT_ARROW_THRESHOLD_KM
) -> TrackSummary:
    ds, dzs = compute_step_metrics(track.points)
    rng, _ = elevation_range_of([track])

    return TrackSummary(
        name=track.name,
        points=len(track.points),
        segments=len(ds),
        distance_km=sum(ds),
        ascent_m=sum(dz for dz in dzs if dz > 0),
        descent_m=-sum(dz for dz in dzs if dz < 0),
        elevation_range=rng,
        direction_markers=len(place_direction_markers(track, threshold_km)),
    )


def summarize_document(
    doc: Document, threshold_km: float = DEFAULT_ARROW_THRESHOLD_KM
) -> list[TrackSummary]:
    """One summary per track, in document order."""
    return [summarize_track(t, threshold_km) for t in doc.tracks]
