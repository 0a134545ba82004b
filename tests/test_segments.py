from gpxmap.render.colors import HIGH_COLOR, LOW_COLOR, RGB, ElevationRange
from gpxmap.render.segments import iter_colored_segments


def test_one_segment_per_adjacent_pair(make_track):
    t1 = make_track((0, 0, 0.0), (0, 1, 10.0), (0, 2, 20.0))
    t2 = make_track((5, 5, 0.0), (5, 6, 0.0))
    segs = list(iter_colored_segments([t1, t2], ElevationRange(0.0, 20.0)))

    assert len(segs) == 3
    # track order, then position order
    assert [(s.start, s.end) for s in segs] == [
        (t1.points[0], t1.points[1]),
        (t1.points[1], t1.points[2]),
        (t2.points[0], t2.points[1]),
    ]


def test_scenario_colors_follow_average_elevation(make_track):
    track = make_track((0, 0, 0.0), (0, 0.01, 50.0), (0, 0.02, 100.0))
    first, second = iter_colored_segments([track], ElevationRange(0.0, 100.0))

    # avg 25 -> ratio 0.25, avg 75 -> ratio 0.75
    assert first.color == RGB(64, 0, 191)
    assert second.color == RGB(191, 0, 64)
    for c in (first.color, second.color):
        assert c not in (LOW_COLOR, HIGH_COLOR)
    assert first.color.b > first.color.r
    assert second.color.r > second.color.b


def test_missing_elevation_averages_as_zero(make_track):
    track = make_track((0, 0), (0, 1, 100.0))
    (seg,) = iter_colored_segments([track], ElevationRange(0.0, 100.0))
    assert seg.color == RGB(128, 0, 128)


def test_single_point_and_empty_tracks_emit_nothing(make_track):
    assert list(iter_colored_segments([make_track((0, 0, 1.0)), make_track()], ElevationRange(0, 1))) == []


def test_flat_track_is_all_low_color(make_track):
    track = make_track((0, 0, 7.0), (0, 1, 7.0), (0, 2, 7.0))
    segs = list(iter_colored_segments([track], ElevationRange(7.0, 7.0)))
    assert {s.color for s in segs} == {LOW_COLOR}
