# gpxmap/render/waypoints.py
"""
Waypoint markers and their info popups.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Iterable, Optional

from gpxmap.formats.gpx import GeoPoint, Waypoint


def _format_elevation(ele: float) -> str:
    # 812.0 -> "812", 812.5 -> "812.5"
    return str(int(ele)) if float(ele).is_integer() else str(ele)


@dataclass(frozen=True)
class PopupContent:
    """
    What a waypoint popup shows: name as heading, description as body,
    elevation suffixed "m". Sinks pick to_html() or to_text() depending on
    what they can display.
    """
    heading: Optional[str] = None
    body: Optional[str] = None
    elevation: Optional[float] = None

    def to_html(self) -> str:
        parts = ['<div style="min-width:120px">']
        if self.heading is not None:
            parts.append(f"<h4>{html.escape(self.heading)}</h4>")
        if self.body is not None:
            parts.append(f"<p>{html.escape(self.body)}</p>")
        if self.elevation is not None:
            parts.append(f"<small>Elevation: {_format_elevation(self.elevation)}m</small>")
        parts.append("</div>")
        return "".join(parts)

    def to_text(self) -> str:
        lines = [s for s in (self.heading, self.body) if s is not None]
        if self.elevation is not None:
            lines.append(f"{_format_elevation(self.elevation)}m")
        return "\n".join(lines)


@dataclass(frozen=True)
class WaypointAnnotation:
    position: GeoPoint
    title: Optional[str]
    popup: Optional[PopupContent]


def popup_for(wp: Waypoint) -> Optional[PopupContent]:
    """Popup for a waypoint, or None when it has no name, description or elevation."""
    if wp.name is None and wp.description is None and wp.elevation is None:
        return None
    return PopupContent(heading=wp.name, body=wp.description, elevation=wp.elevation)


def annotate_waypoints(waypoints: Iterable[Waypoint]) -> list[WaypointAnnotation]:
    return [
        WaypointAnnotation(position=wp.position, title=wp.name, popup=popup_for(wp))
        for wp in waypoints
    ]
