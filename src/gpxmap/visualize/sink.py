# gpxmap/visualize/sink.py
"""
Map sink interface for GPXmap

The render pipeline never talks to a map library directly. It hands
segments, markers, popups and a viewport to a MapSink and keeps the
opaque handles it gets back, so it can remove exactly those overlays
on the next load.

Implementations:
  - RecordingMapSink   in-memory, for tests and dry runs (here)
  - FoliumMapSink      interactive Leaflet/HTML map (gpxmap.visualize.folium_map)
  - MatplotlibMapSink  static figure (gpxmap.visualize.plot)
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Hashable, Optional, Protocol

from gpxmap.errors import MapSinkError
from gpxmap.formats.gpx import GeoPoint
from gpxmap.render.segments import ColoredSegment
from gpxmap.render.viewport import BoundingRegion
from gpxmap.render.waypoints import PopupContent

ARROW = "arrow"
WAYPOINT = "waypoint"


@dataclass(frozen=True)
class LineStyle:
    weight: float = 4.0
    opacity: float = 0.9


@dataclass(frozen=True)
class MarkerStyle:
    """
    kind:
      ARROW     direction marker, rotated clockwise from north
      WAYPOINT  plain pin, optionally titled
    """
    kind: str = WAYPOINT
    rotation_degrees: float = 0.0
    title: Optional[str] = None


class MapSink(Protocol):
    def draw_line(self, segment: ColoredSegment, style: LineStyle) -> Hashable: ...

    def draw_marker(self, position: GeoPoint, style: MarkerStyle) -> Hashable: ...

    def show_popup(self, handle: Hashable, content: PopupContent) -> None: ...

    def fit_viewport(self, region: BoundingRegion) -> None: ...

    def remove_overlay(self, handle: Hashable) -> None: ...


# ---------------------------------------------------------------------------
# Shared overlay bookkeeping
# ---------------------------------------------------------------------------
@dataclass
class Overlay:
    kind: str                 # "line" or "marker"
    geometry: Any             # ColoredSegment or GeoPoint
    style: Any                # LineStyle or MarkerStyle
    popup: Optional[PopupContent] = None


@dataclass
class OverlayStore:
    """
    Handle -> Overlay table shared by the concrete sinks.

    Handles are plain increasing ints; callers must treat them as opaque.
    """
    overlays: dict[int, Overlay] = field(default_factory=dict)
    viewport: Optional[BoundingRegion] = None
    _ids: Any = field(default_factory=lambda: itertools.count(1), repr=False)

    def add(self, overlay: Overlay) -> int:
        handle = next(self._ids)
        self.overlays[handle] = overlay
        return handle

    def get(self, handle: Hashable) -> Overlay:
        try:
            return self.overlays[handle]
        except KeyError:
            raise MapSinkError(f"Unknown overlay handle: {handle!r}") from None

    def remove(self, handle: Hashable) -> Overlay:
        overlay = self.get(handle)
        del self.overlays[handle]
        return overlay

    def of_kind(self, kind: str) -> list[Overlay]:
        return [o for o in self.overlays.values() if o.kind == kind]


class RecordingMapSink:
    """Keeps every call in memory; nothing is drawn."""

    def __init__(self) -> None:
        self.store = OverlayStore()
        self.fit_calls: list[BoundingRegion] = []

    def draw_line(self, segment: ColoredSegment, style: LineStyle) -> int:
        return self.store.add(Overlay("line", segment, style))

    def draw_marker(self, position: GeoPoint, style: MarkerStyle) -> int:
        return self.store.add(Overlay("marker", position, style))

    def show_popup(self, handle: Hashable, content: PopupContent) -> None:
        self.store.get(handle).popup = content

    def fit_viewport(self, region: BoundingRegion) -> None:
        self.store.viewport = region
        self.fit_calls.append(region)

    def remove_overlay(self, handle: Hashable) -> None:
        self.store.remove(handle)

    # convenience views for assertions
    @property
    def lines(self) -> list[Overlay]:
        return self.store.of_kind("line")

    @property
    def markers(self) -> list[Overlay]:
        return self.store.of_kind("marker")

    @property
    def viewport(self) -> Optional[BoundingRegion]:
        return self.store.viewport
