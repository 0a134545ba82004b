# gpxmap/visualize/folium_map.py
"""
Interactive map output via folium (Leaflet).

Overlays are kept in an OverlayStore and only turned into folium objects
when the map is built, so removing an overlay never has to reach into
folium's element tree.
"""

from __future__ import annotations

from pathlib import Path
from typing import Hashable, Optional

import folium

from gpxmap.errors import MapSinkError
from gpxmap.formats.gpx import GeoPoint
from gpxmap.render.segments import ColoredSegment
from gpxmap.render.viewport import BoundingRegion
from gpxmap.render.waypoints import PopupContent
from gpxmap.util.paths import ensure_dir
from gpxmap.visualize.sink import ARROW, LineStyle, MarkerStyle, Overlay, OverlayStore

# Used only when nothing was fitted (empty document)
DEFAULT_CENTER = (37.5665, 126.9780)
DEFAULT_ZOOM = 12

# An upward triangle rotated clockwise by the bearing points along travel.
_ARROW_HTML = (
    '<div style="transform: rotate({rotation:.1f}deg); transform-origin: center;'
    ' width:16px; height:16px; line-height:16px; text-align:center;'
    ' font-size:14px; color:#222;">&#9650;</div>'
)


class FoliumMapSink:
    def __init__(
        self,
        *,
        tiles: str = "OpenStreetMap",
        center: tuple[float, float] = DEFAULT_CENTER,
        zoom: int = DEFAULT_ZOOM,
    ) -> None:
        self.tiles = tiles
        self.center = center
        self.zoom = zoom
        self.store = OverlayStore()

    # ---- MapSink ------------------------------------------------------------
    def draw_line(self, segment: ColoredSegment, style: LineStyle) -> int:
        return self.store.add(Overlay("line", segment, style))

    def draw_marker(self, position: GeoPoint, style: MarkerStyle) -> int:
        return self.store.add(Overlay("marker", position, style))

    def show_popup(self, handle: Hashable, content: PopupContent) -> None:
        self.store.get(handle).popup = content

    def fit_viewport(self, region: BoundingRegion) -> None:
        self.store.viewport = region

    def remove_overlay(self, handle: Hashable) -> None:
        self.store.remove(handle)

    # ---- Output -------------------------------------------------------------
    def _add_line(self, m: folium.Map, overlay: Overlay) -> None:
        seg: ColoredSegment = overlay.geometry
        style: LineStyle = overlay.style
        folium.PolyLine(
            locations=[
                (seg.start.latitude, seg.start.longitude),
                (seg.end.latitude, seg.end.longitude),
            ],
            color=seg.color.to_hex(),
            weight=style.weight,
            opacity=style.opacity,
        ).add_to(m)

    def _add_marker(self, m: folium.Map, overlay: Overlay) -> None:
        pos: GeoPoint = overlay.geometry
        style: MarkerStyle = overlay.style
        location = (pos.latitude, pos.longitude)

        if style.kind == ARROW:
            folium.Marker(
                location=location,
                icon=folium.DivIcon(
                    html=_ARROW_HTML.format(rotation=style.rotation_degrees),
                    icon_size=(16, 16),
                    icon_anchor=(8, 8),
                ),
                tooltip=style.title,
            ).add_to(m)
            return

        popup: Optional[folium.Popup] = None
        if overlay.popup is not None:
            # Leaflet opens marker popups on click
            popup = folium.Popup(overlay.popup.to_html(), max_width=300)
        folium.Marker(location=location, tooltip=style.title, popup=popup).add_to(m)

    def build_map(self) -> folium.Map:
        """A fresh folium.Map holding every overlay currently in the store."""
        m = folium.Map(
            location=list(self.center),
            zoom_start=self.zoom,
            tiles=self.tiles,
            control_scale=True,
        )
        for overlay in self.store.overlays.values():
            if overlay.kind == "line":
                self._add_line(m, overlay)
            else:
                self._add_marker(m, overlay)

        if self.store.viewport is not None:
            m.fit_bounds(self.store.viewport.corners)
        return m

    def save(self, out_path: Path) -> Path:
        """
        Write the map as a standalone HTML page.

        Raises:
          MapSinkError if the file cannot be written.
        """
        out_path = Path(out_path)
        try:
            ensure_dir(out_path.parent)
            self.build_map().save(str(out_path))
        except OSError as e:
            raise MapSinkError(f"Could not write map: {out_path} ({e})") from e
        return out_path
