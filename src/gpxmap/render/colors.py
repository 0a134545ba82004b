# gpxmap/render/colors.py
"""
Elevation -> color mapping for GPXmap

Segments are colored on a linear gradient between a "low" and a "high"
color, normalized over the elevation range of the whole document.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple

_HEX6 = re.compile(r"[0-9a-fA-F]{6}")


class RGB(NamedTuple):
    r: int
    g: int
    b: int

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @classmethod
    def from_hex(cls, text: str) -> "RGB":
        """Parse '#rrggbb' (leading '#' optional)."""
        s = text.strip().lstrip("#")
        if not _HEX6.fullmatch(s):
            raise ValueError(f"Expected a 6-digit hex color, got {text!r}")
        return cls(int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))


LOW_COLOR = RGB(0, 0, 255)     # blue
HIGH_COLOR = RGB(255, 0, 0)    # red


@dataclass(frozen=True)
class ElevationRange:
    min: float
    max: float

    @property
    def span(self) -> float:
        """max - min, or 1 for a flat range so ratios never divide by zero."""
        return (self.max - self.min) or 1.0


def elevation_ratio(elevation: float, elevation_range: ElevationRange) -> float:
    """
    Position of `elevation` within the range, clamped to [0, 1].

    A flat range (min == max) divides by 1 instead of 0. Every point of a
    flat track sits at min, so the whole track gets ratio 0 (low color).
    """
    ratio = (elevation - elevation_range.min) / elevation_range.span
    return min(1.0, max(0.0, ratio))


def _lerp_channel(low: int, high: int, ratio: float) -> int:
    return min(255, max(0, round(low + (high - low) * ratio)))


def color_for(
    elevation: float,
    elevation_range: ElevationRange,
    *,
    low: RGB = LOW_COLOR,
    high: RGB = HIGH_COLOR,
    gamma: float = 1.0,
) -> RGB:
    """
    Interpolate each channel between `low` and `high`.

    gamma:
      Exponent applied to the clamped ratio. 1.0 is a linear gradient;
      larger values keep most of the track near the low color and
      reserve the high color for the peaks.
    """
    if gamma <= 0:
        raise ValueError(f"gamma must be > 0, got {gamma}")
    ratio = elevation_ratio(elevation, elevation_range) ** gamma
    return RGB(
        _lerp_channel(low.r, high.r, ratio),
        _lerp_channel(low.g, high.g, ratio),
        _lerp_channel(low.b, high.b, ratio),
    )
