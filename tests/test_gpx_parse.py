import pytest

from gpxmap.errors import GpxParseError, TrackReadError
from gpxmap.formats.gpx import GeoPoint, parse_gpx_text, read_gpx_document, read_track_text


def _gpx(body: str, ns: str = ' xmlns="http://www.topografix.com/GPX/1/1"') -> str:
    return f'<?xml version="1.0" encoding="UTF-8"?><gpx version="1.1"{ns}>{body}</gpx>'


def test_read_sample_document(sample_gpx_path):
    doc = read_gpx_document(sample_gpx_path)

    assert len(doc.tracks) == 1
    trk = doc.tracks[0]
    assert trk.name == "Meridian walk"
    # both <trkseg> are concatenated in order
    assert len(trk.points) == 10
    assert trk.points[0] == GeoPoint(46.0, 7.0, 100.0)
    assert trk.points[5] == GeoPoint(46.05, 7.0, 200.0)
    assert trk.points[-1].elevation == 130.0

    assert len(doc.waypoints) == 2
    first, bare = doc.waypoints
    assert first.name == "Start & car park"
    assert first.description == "Pay at the machine"
    assert first.elevation == 100.0
    assert (bare.name, bare.description, bare.elevation) == (None, None, None)


def test_missing_elevation_is_none():
    doc = parse_gpx_text(_gpx('<trk><trkseg><trkpt lat="1" lon="2"/></trkseg></trk>'))
    p = doc.tracks[0].points[0]
    assert p.elevation is None
    assert p.elevation_or_zero == 0.0


@pytest.mark.parametrize("ns", ["", ' xmlns="http://www.topografix.com/GPX/1/0"'])
def test_gpx10_and_unnamespaced(ns):
    doc = parse_gpx_text(_gpx('<wpt lat="1.5" lon="-3"><name>X</name></wpt>', ns=ns))
    assert doc.waypoints[0].latitude == 1.5
    assert doc.waypoints[0].longitude == -3.0
    assert doc.waypoints[0].name == "X"


def test_empty_gpx_is_empty_document():
    doc = parse_gpx_text(_gpx(""))
    assert doc.tracks == ()
    assert doc.waypoints == ()
    assert doc.is_empty


def test_track_without_points_is_kept():
    doc = parse_gpx_text(_gpx("<trk><name>empty</name><trkseg/></trk>"))
    assert doc.tracks[0].points == ()
    assert doc.is_empty


@pytest.mark.parametrize(
    "text",
    [
        "not xml at all",
        "<gpx><trk>",
        '<kml xmlns="http://www.opengis.net/kml/2.2"/>',
        _gpx('<wpt lon="2"/>'),
        _gpx('<wpt lat="abc" lon="2"/>'),
        _gpx('<wpt lat="91" lon="2"/>'),
        _gpx('<wpt lat="1" lon="-180.5"/>'),
        _gpx('<wpt lat="nan" lon="2"/>'),
        _gpx('<trk><trkseg><trkpt lat="1" lon="2"><ele>high</ele></trkpt></trkseg></trk>'),
    ],
)
def test_malformed_input_raises_parse_error(text):
    with pytest.raises(GpxParseError):
        parse_gpx_text(text)


def test_read_missing_file_raises_track_read_error(tmp_path):
    with pytest.raises(TrackReadError):
        read_track_text(tmp_path / "nope.gpx")


def test_track_read_error_is_an_oserror(tmp_path):
    with pytest.raises(OSError):
        read_track_text(tmp_path / "nope.gpx")


def test_read_strips_utf8_bom(tmp_path):
    p = tmp_path / "bom.gpx"
    p.write_bytes(b"\xef\xbb\xbf" + _gpx('<wpt lat="1" lon="2"/>').encode("utf-8"))
    doc = read_gpx_document(p)
    assert len(doc.waypoints) == 1
