import math

import pytest

from gpxmap.analyze.geo import EARTH_RADIUS_KM, bearing_degrees, distance_km
from gpxmap.formats.gpx import GeoPoint

POINTS = [
    GeoPoint(0.0, 0.0),
    GeoPoint(46.0, 7.0, 1200.0),
    GeoPoint(-33.8688, 151.2093),
    GeoPoint(51.5074, -0.1278),
    GeoPoint(89.9, 179.9),
    GeoPoint(-89.9, -179.9),
]


@pytest.mark.parametrize("p", POINTS)
def test_distance_to_self_is_zero(p):
    assert distance_km(p, p) == 0.0


@pytest.mark.parametrize("a", POINTS)
@pytest.mark.parametrize("b", POINTS)
def test_distance_is_symmetric(a, b):
    assert distance_km(a, b) == distance_km(b, a)


def test_distance_ignores_elevation():
    assert distance_km(GeoPoint(1, 1, 0), GeoPoint(1, 1, 5000)) == 0.0


def test_one_degree_along_meridian():
    d = distance_km(GeoPoint(0, 0), GeoPoint(1, 0))
    assert d == pytest.approx(EARTH_RADIUS_KM * math.pi / 180)
    assert d == pytest.approx(111.195, abs=1e-3)


def test_london_paris():
    d = distance_km(GeoPoint(51.5074, -0.1278), GeoPoint(48.8566, 2.3522))
    assert d == pytest.approx(343.5, abs=1.0)


@pytest.mark.parametrize(
    "b, expected",
    [
        (GeoPoint(1, 0), 0.0),
        (GeoPoint(0, 1), 90.0),
        (GeoPoint(-1, 0), 180.0),
        (GeoPoint(0, -1), 270.0),
    ],
)
def test_cardinal_bearings(b, expected):
    assert bearing_degrees(GeoPoint(0, 0), b) == pytest.approx(expected)


def test_bearing_identical_points_is_zero():
    p = GeoPoint(46.0, 7.0)
    assert bearing_degrees(p, p) == 0.0


@pytest.mark.parametrize("a", POINTS)
@pytest.mark.parametrize("b", POINTS)
def test_bearing_in_range(a, b):
    deg = bearing_degrees(a, b)
    assert 0.0 <= deg < 360.0


def test_bearing_just_west_of_north_stays_below_360():
    deg = bearing_degrees(GeoPoint(0, 0), GeoPoint(10, -1e-12))
    assert 0.0 <= deg < 360.0
