import pytest

from gpxmap.formats.gpx import GeoPoint, Waypoint
from gpxmap.render.waypoints import PopupContent, annotate_waypoints, popup_for


def test_bare_waypoint_has_no_popup():
    (ann,) = annotate_waypoints([Waypoint(1.0, 2.0)])
    assert ann.position == GeoPoint(1.0, 2.0)
    assert ann.title is None
    assert ann.popup is None


@pytest.mark.parametrize(
    "wp",
    [
        Waypoint(0, 0, name="Hut"),
        Waypoint(0, 0, description="Water here"),
        Waypoint(0, 0, elevation=0.0),
    ],
)
def test_any_field_gives_a_popup(wp):
    assert popup_for(wp) is not None


def test_popup_html_layout():
    html = popup_for(Waypoint(0, 0, name="Hut", description="Water here", elevation=2104.0)).to_html()
    assert "<h4>Hut</h4>" in html
    assert "<p>Water here</p>" in html
    assert "<small>Elevation: 2104m</small>" in html
    assert html.index("<h4>") < html.index("<p>") < html.index("<small>")


def test_popup_html_skips_missing_parts():
    html = PopupContent(elevation=812.5).to_html()
    assert "<h4>" not in html
    assert "<p>" not in html
    assert "Elevation: 812.5m" in html


def test_popup_html_escapes_text():
    html = PopupContent(heading="<b>A & B</b>").to_html()
    assert "&lt;b&gt;A &amp; B&lt;/b&gt;" in html


def test_popup_text():
    assert PopupContent("Hut", "Water", 100.0).to_text() == "Hut\nWater\n100m"
    assert PopupContent(body="Water").to_text() == "Water"


def test_annotations_keep_waypoint_order_and_elevation():
    wps = [Waypoint(1, 1, name="a"), Waypoint(2, 2), Waypoint(3, 3, elevation=5.0)]
    anns = annotate_waypoints(wps)
    assert [a.position.latitude for a in anns] == [1, 2, 3]
    assert [a.title for a in anns] == ["a", None, None]
    assert anns[2].position.elevation == 5.0
