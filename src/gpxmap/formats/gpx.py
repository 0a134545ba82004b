# gpxmap/formats/gpx.py
"""
GPX helpers for GPXmap

This module is intentionally format-focused:
- GPX namespace handling (GPX 1.0, GPX 1.1, or no namespace at all)
- safely reading track files into text
- extracting tracks and waypoints into immutable dataclasses

Key design principle:
  Keep orchestration (clearing overlays, drawing, viewport fitting) in
  gpxmap.render, separate from GPX parsing (here). Callers treat
  parse_gpx_text() as a black box that returns a Document or raises
  GpxParseError.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

from gpxmap.errors import GpxParseError, TrackReadError

# Child elements are looked up in whatever namespace the <gpx> root uses
# (GPX 1.1 "http://www.topografix.com/GPX/1/1", GPX 1.0, or none).


def _split_tag(tag: str) -> tuple[str, str]:
    """
    Split an ElementTree tag into (namespace, local name).

    ElementTree represents namespaced tags internally as
      "{namespace-uri}tag"
    """
    if tag.startswith("{"):
        ns, _, local = tag[1:].partition("}")
        return ns, local
    return "", tag


def _qn(ns: str, tag: str) -> str:
    """Build an ElementTree-qualified name for a GPX tag in namespace `ns`."""
    return f"{{{ns}}}{tag}" if ns else tag


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float
    elevation: Optional[float] = None

    @property
    def elevation_or_zero(self) -> float:
        """Missing elevation counts as 0 m everywhere in GPXmap."""
        return self.elevation if self.elevation is not None else 0.0


@dataclass(frozen=True)
class Track:
    """
    One <trk>. Points from all of its <trkseg> children are concatenated
    in document order; that order is the direction of travel.
    """
    points: tuple[GeoPoint, ...]
    name: Optional[str] = None


@dataclass(frozen=True)
class Waypoint:
    latitude: float
    longitude: float
    name: Optional[str] = None
    description: Optional[str] = None
    elevation: Optional[float] = None

    @property
    def position(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude, self.elevation)


@dataclass(frozen=True)
class Document:
    """Parsed GPX content. Never mutated after parsing."""
    tracks: tuple[Track, ...] = ()
    waypoints: tuple[Waypoint, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.waypoints and not any(t.points for t in self.tracks)


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------
def _parse_float(text: str, what: str) -> float:
    try:
        v = float(text)
    except (TypeError, ValueError):
        raise GpxParseError(f"Invalid numeric value for {what}: {text!r}") from None
    if not math.isfinite(v):
        raise GpxParseError(f"Non-finite value for {what}: {text!r}")
    return v


def _coordinate(el: ET.Element, attr: str, limit: float) -> float:
    """
    Read a required lat/lon attribute.

    Raises GpxParseError if the attribute is missing, not numeric,
    or outside [-limit, limit].
    """
    _, local = _split_tag(el.tag)
    raw = el.get(attr)
    if raw is None or not raw.strip():
        raise GpxParseError(f"<{local}> is missing required attribute '{attr}'")
    v = _parse_float(raw.strip(), f"<{local}> {attr}")
    if not -limit <= v <= limit:
        raise GpxParseError(f"<{local}> {attr}={v} is out of range [-{limit}, {limit}]")
    return v


def _optional_text(el: ET.Element, ns: str, tag: str) -> Optional[str]:
    s = (el.findtext(_qn(ns, tag)) or "").strip()
    return s or None


def _elevation(el: ET.Element, ns: str) -> Optional[float]:
    s = _optional_text(el, ns, "ele")
    if s is None:
        return None
    return _parse_float(s, "<ele>")


def _point(el: ET.Element, ns: str) -> GeoPoint:
    return GeoPoint(
        latitude=_coordinate(el, "lat", 90.0),
        longitude=_coordinate(el, "lon", 180.0),
        elevation=_elevation(el, ns),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def read_track_text(path: Path) -> str:
    """
    Read a track file as text.

    A UTF-8 byte-order mark is stripped, since ElementTree refuses it in
    string input.

    Raises:
      TrackReadError
    """
    try:
        return Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise TrackReadError(f"Could not read track file: {path} ({e})") from e


def parse_gpx_text(text: str) -> Document:
    """
    Parse GPX text into a Document.

    Extracted:
      - every <trk> as a Track (all <trkseg>/<trkpt> in order)
      - every top-level <wpt> as a Waypoint (name, desc, ele)

    Raises:
      GpxParseError on malformed XML, a non-<gpx> root, or invalid
      coordinates / elevations.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise GpxParseError(f"Malformed GPX/XML: {e}") from e

    ns, local = _split_tag(root.tag)
    if local != "gpx":
        raise GpxParseError(f"Root element is <{local}>, expected <gpx>")

    tracks: list[Track] = []
    for trk in root.findall(_qn(ns, "trk")):
        pts = tuple(
            _point(trkpt, ns)
            for trkpt in trk.findall(f"{_qn(ns, 'trkseg')}/{_qn(ns, 'trkpt')}")
        )
        tracks.append(Track(points=pts, name=_optional_text(trk, ns, "name")))

    waypoints: list[Waypoint] = []
    for wpt in root.findall(_qn(ns, "wpt")):
        waypoints.append(
            Waypoint(
                latitude=_coordinate(wpt, "lat", 90.0),
                longitude=_coordinate(wpt, "lon", 180.0),
                name=_optional_text(wpt, ns, "name"),
                description=_optional_text(wpt, ns, "desc"),
                elevation=_elevation(wpt, ns),
            )
        )

    return Document(tracks=tuple(tracks), waypoints=tuple(waypoints))


def read_gpx_document(path: Path) -> Document:
    """
    Read and parse a GPX file.

    Raises:
      TrackReadError, GpxParseError
    """
    return parse_gpx_text(read_track_text(path))
