# gpxmap/render/pipeline.py
"""
Track rendering pipeline for GPXmap

Flow for one load:

    clear previous overlays
      -> read file text          (TrackReadError)
      -> parse GPX               (GpxParseError)
      -> elevation range over all track points
      -> colored segments + direction markers, per track
      -> waypoint markers (+ popups)
      -> fit viewport to every track point and waypoint

The renderer is the only owner of the overlays it placed on the sink:
it tracks their handles in two lists (lines, markers) and removes exactly
those on the next load. Everything runs synchronously on the caller's
thread.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import chain
from pathlib import Path
from typing import Hashable, Optional

from gpxmap.analyze.track import elevation_range_of
from gpxmap.config import RenderSettings
from gpxmap.errors import GpxParseError, TrackReadError
from gpxmap.formats.gpx import Document, parse_gpx_text, read_track_text
from gpxmap.render.arrows import place_direction_markers
from gpxmap.render.segments import iter_colored_segments
from gpxmap.render.viewport import BoundingRegion, fit_region
from gpxmap.render.waypoints import annotate_waypoints
from gpxmap.util.logging import log
from gpxmap.visualize.sink import ARROW, WAYPOINT, LineStyle, MapSink, MarkerStyle


@dataclass(frozen=True)
class RenderResult:
    segments: int
    direction_markers: int
    waypoint_markers: int
    region: Optional[BoundingRegion]


class TrackRenderer:
    def __init__(self, sink: MapSink, settings: Optional[RenderSettings] = None) -> None:
        self.sink = sink
        self.settings = settings or RenderSettings()
        self.line_handles: list[Hashable] = []
        self.marker_handles: list[Hashable] = []

    @property
    def overlay_count(self) -> int:
        return len(self.line_handles) + len(self.marker_handles)

    def clear_overlays(self) -> None:
        """Remove every overlay this renderer placed on the sink."""
        for handle in self.line_handles:
            self.sink.remove_overlay(handle)
        for handle in self.marker_handles:
            self.sink.remove_overlay(handle)
        self.line_handles = []
        self.marker_handles = []

    def render_track(self, document: Document) -> RenderResult:
        """
        Draw `document` on the sink, replacing the previous run.

        Empty parts are not errors: no tracks means no segments or arrows,
        and with no points at all the viewport is left alone.
        """
        self.clear_overlays()
        s = self.settings
        line_style = LineStyle(weight=s.line_weight, opacity=s.line_opacity)

        elevation_range, track_points = elevation_range_of(document.tracks)

        n_segments = 0
        if elevation_range is not None:
            for seg in iter_colored_segments(
                document.tracks, elevation_range,
                low=s.low_color, high=s.high_color, gamma=s.gamma,
            ):
                self.line_handles.append(self.sink.draw_line(seg, line_style))
                n_segments += 1

        n_arrows = 0
        for track in document.tracks:
            for marker in place_direction_markers(track, s.arrow_threshold_km):
                style = MarkerStyle(
                    kind=ARROW,
                    rotation_degrees=marker.bearing_degrees,
                    title=f"{marker.cumulative_distance_km:.1f} km",
                )
                self.marker_handles.append(self.sink.draw_marker(marker.position, style))
                n_arrows += 1

        annotations = annotate_waypoints(document.waypoints)
        for ann in annotations:
            handle = self.sink.draw_marker(ann.position, MarkerStyle(kind=WAYPOINT, title=ann.title))
            self.marker_handles.append(handle)
            if ann.popup is not None:
                self.sink.show_popup(handle, ann.popup)

        region = fit_region(chain(track_points, (a.position for a in annotations)))
        if region is not None:
            self.sink.fit_viewport(region)

        return RenderResult(
            segments=n_segments,
            direction_markers=n_arrows,
            waypoint_markers=len(annotations),
            region=region,
        )

    def load_file(self, path: Path) -> RenderResult:
        """
        Clear, read, parse and render one GPX file.

        Read and parse failures are logged and re-raised; the map is left
        empty (the clear already happened) and nothing is partially drawn.

        Raises:
          TrackReadError, GpxParseError
        """
        self.clear_overlays()
        try:
            document = parse_gpx_text(read_track_text(path))
        except (TrackReadError, GpxParseError) as e:
            log(f"Render aborted for {path}: {e}")
            raise

        result = self.render_track(document)
        log(
            f"Rendered {path}: {result.segments} segments, "
            f"{result.direction_markers} arrows, {result.waypoint_markers} waypoints"
        )
        return result
