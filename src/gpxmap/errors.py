# gpxmap/errors

"""
gpxmap.errors

Central exception hierarchy for GPXmap.

Rationale:
  - Modules should raise specific, meaningful errors.
  - Callers can catch GPXmapError (broad) or specific subclasses (narrow).

Empty documents and numeric edge cases (missing elevation, flat tracks,
zero-length segments) are NOT errors and never raise.
"""


class GPXmapError(RuntimeError):
    """Base class for all GPXmap runtime errors."""


# ---- Input errors ------------------------------

class TrackReadError(GPXmapError, OSError):
    """The track file could not be read (missing, unreadable, bad encoding)."""

class GpxParseError(GPXmapError):
    """GPX text could not be parsed or did not contain valid coordinates."""


# ---- Map sink errors ---------------------------

class MapSinkError(GPXmapError):
    """A map sink was asked to act on an unknown overlay or failed to write output."""


# ---- Configuration errors ----------------------

class ConfigError(GPXmapError):
    """A config file exists but could not be parsed."""
