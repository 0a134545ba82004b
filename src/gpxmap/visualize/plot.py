# gpxmap/visualize/plot.py
"""
Plotting routines for GPXmap

MatplotlibMapSink draws the track on a plain lon/lat axes (no tiles) and
saves it as a static image. Popups cannot be clicked in a static figure,
so their text is drawn as a label next to the waypoint instead.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Hashable

from matplotlib.figure import Figure

from gpxmap.errors import MapSinkError
from gpxmap.formats.gpx import GeoPoint
from gpxmap.render.segments import ColoredSegment
from gpxmap.render.viewport import BoundingRegion
from gpxmap.render.waypoints import PopupContent
from gpxmap.util.paths import ensure_dir
from gpxmap.visualize.sink import ARROW, LineStyle, MarkerStyle, Overlay, OverlayStore

# Margin around the fitted region, in degrees; also keeps a
# single-point region from collapsing the axes.
_MIN_PAD_DEG = 0.005


class MatplotlibMapSink:
    def __init__(self, *, figsize: tuple[float, float] = (8, 6), dpi: int = 150) -> None:
        self.fig = Figure(figsize=figsize, dpi=dpi)
        self.ax = self.fig.add_subplot()
        self.ax.set_xlabel("Longitude")
        self.ax.set_ylabel("Latitude")
        self.ax.set_title("Track coloured by elevation")
        self.dpi = dpi
        self.store = OverlayStore()
        # handle -> matplotlib artists drawn for it
        self._artists: dict[int, list[Any]] = {}

    def draw_line(self, segment: ColoredSegment, style: LineStyle) -> int:
        (line,) = self.ax.plot(
            [segment.start.longitude, segment.end.longitude],
            [segment.start.latitude, segment.end.latitude],
            color=segment.color.to_hex(),
            linewidth=style.weight,
            alpha=style.opacity,
            solid_capstyle="round",
        )
        handle = self.store.add(Overlay("line", segment, style))
        self._artists[handle] = [line]
        return handle

    def draw_marker(self, position: GeoPoint, style: MarkerStyle) -> int:
        if style.kind == ARROW:
            # marker angles are counter-clockwise, bearings clockwise
            (artist,) = self.ax.plot(
                position.longitude, position.latitude,
                marker=(3, 0, -style.rotation_degrees),
                markersize=8, color="#222222", linestyle="none",
            )
        else:
            (artist,) = self.ax.plot(
                position.longitude, position.latitude,
                marker="v", markersize=9, color="#d62728", linestyle="none",
            )
        handle = self.store.add(Overlay("marker", position, style))
        self._artists[handle] = [artist]
        return handle

    def show_popup(self, handle: Hashable, content: PopupContent) -> None:
        overlay = self.store.get(handle)
        overlay.popup = content
        pos: GeoPoint = overlay.geometry
        label = self.ax.annotate(
            content.to_text(),
            xy=(pos.longitude, pos.latitude),
            xytext=(6, 6),
            textcoords="offset points",
            fontsize=7,
            bbox={"boxstyle": "round", "fc": "white", "alpha": 0.8},
        )
        self._artists[handle].append(label)

    def fit_viewport(self, region: BoundingRegion) -> None:
        self.store.viewport = region
        pad_lat = max((region.north - region.south) * 0.05, _MIN_PAD_DEG)
        pad_lon = max((region.east - region.west) * 0.05, _MIN_PAD_DEG)
        self.ax.set_xlim(region.west - pad_lon, region.east + pad_lon)
        self.ax.set_ylim(region.south - pad_lat, region.north + pad_lat)
        # keep ground distances roughly isotropic at this latitude
        mid_lat = math.radians((region.north + region.south) / 2)
        self.ax.set_aspect(1.0 / max(math.cos(mid_lat), 0.01))

    def remove_overlay(self, handle: Hashable) -> None:
        self.store.remove(handle)
        for artist in self._artists.pop(handle, []):
            artist.remove()

    def save(self, out_path: Path) -> Path:
        """
        Write the figure (format from the file suffix, e.g. .png, .svg).

        Raises:
          MapSinkError if the file cannot be written.
        """
        out_path = Path(out_path)
        try:
            ensure_dir(out_path.parent)
            self.fig.savefig(out_path, dpi=self.dpi, bbox_inches="tight")
        except (OSError, ValueError) as e:
            raise MapSinkError(f"Could not write figure: {out_path} ({e})") from e
        return out_path
