import pytest

import gpxmap.cli as cli
from gpxmap.config import ENV_MAP


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    for var in ENV_MAP:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


def test_render_folium_default_output(tmp_path, sample_gpx_path):
    rc = cli.main(["render", str(sample_gpx_path)])
    assert rc == 0
    out = tmp_path / "home" / "GPS" / "_maps" / "sample.html"
    assert out.is_file()


def test_render_matplotlib_explicit_output(tmp_path, sample_gpx_path):
    out = tmp_path / "out" / "walk.png"
    rc = cli.main([
        "render", str(sample_gpx_path), "-o", str(out),
        "--backend", "matplotlib", "--arrow-km", "1", "--gamma", "2",
    ])
    assert rc == 0
    assert out.is_file()


def test_render_parse_error_exits_nonzero(tmp_path, capsys):
    bad = tmp_path / "bad.gpx"
    bad.write_text("<gpx>", encoding="utf-8")
    assert cli.main(["render", str(bad), "-o", str(tmp_path / "x.html")]) == 1
    assert "Malformed" in capsys.readouterr().err
    assert not (tmp_path / "x.html").exists()


def test_render_missing_file_exits_nonzero(tmp_path):
    assert cli.main(["render", str(tmp_path / "nope.gpx")]) == 1


def test_render_bad_color_exits_nonzero(sample_gpx_path):
    assert cli.main(["render", str(sample_gpx_path), "--low-color", "blue"]) == 1


def test_render_rejects_non_positive_arrow_spacing(sample_gpx_path):
    with pytest.raises(SystemExit) as exc:
        cli.main(["render", str(sample_gpx_path), "--arrow-km", "0"])
    assert exc.value.code == 2


def test_summary_tsv(sample_gpx_path, capsys):
    assert cli.main(["summary", "--tsv", str(sample_gpx_path)]) == 0
    header, row = capsys.readouterr().out.strip().splitlines()
    assert header.startswith("file\ttrack\tpoints")
    cols = row.split("\t")
    assert cols[1] == "Meridian walk"
    assert cols[2:4] == ["10", "9"]
    assert cols[-1] == "3"


def test_summary_skips_bad_files(tmp_path, sample_gpx_path, capsys):
    rc = cli.main(["summary", str(tmp_path / "nope.gpx"), str(sample_gpx_path)])
    assert rc == 1
    captured = capsys.readouterr()
    assert "Skipping" in captured.err
    assert "distance (km)" in captured.out
