from pathlib import Path
import pytest

from gpxmap.formats.gpx import GeoPoint, Track


@pytest.fixture
def sample_gpx_path() -> Path:
    return Path(__file__).parent / "data" / "sample.gpx"


@pytest.fixture
def make_track():
    """Build a Track from (lat, lon) or (lat, lon, ele) tuples."""
    def _make(*coords, name=None) -> Track:
        return Track(points=tuple(GeoPoint(*c) for c in coords), name=name)
    return _make


@pytest.fixture
def meridian_track(make_track):
    """n points due north from (0, 0), `step_deg` latitude apart."""
    def _make(n: int, step_deg: float = 0.01) -> Track:
        return make_track(*[(i * step_deg, 0.0) for i in range(n)])
    return _make
