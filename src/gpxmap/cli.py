#!/usr/bin/env python3
"""
gpxmap: render GPX tracks as elevation-colored maps

Usage:
    gpxmap render track.gpx                      # HTML map (folium) in the output dir
    gpxmap render track.gpx -o out/track.png --backend matplotlib
    gpxmap render track.gpx --arrow-km 1 --gamma 2
    gpxmap summary a.gpx b.gpx --tsv             # per-track statistics
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from gpxmap.analyze.track import TrackSummary, summarize_document
from gpxmap.config import BACKENDS, GPXmapConfig, load_config
from gpxmap.errors import GPXmapError
from gpxmap.formats.gpx import read_gpx_document
from gpxmap.render.colors import RGB
from gpxmap.render.pipeline import TrackRenderer
from gpxmap.util.logging import log
from gpxmap.util.paths import default_output_path
from gpxmap.visualize.folium_map import FoliumMapSink
from gpxmap.visualize.plot import MatplotlibMapSink

_SUFFIX = {"folium": ".html", "matplotlib": ".png"}


# ---------------------------
# Reports
# ---------------------------
def print_report(path: Path, summaries: list[TrackSummary], *, tsv: bool) -> None:
    for i, s in enumerate(summaries):
        name = s.name or f"track {i + 1}"
        lo = s.elevation_range.min if s.elevation_range else 0.0
        hi = s.elevation_range.max if s.elevation_range else 0.0
        if tsv:
            print(
                f"{path}\t{name}\t"
                f"{s.points}\t"
                f"{s.segments}\t"
                f"{s.distance_km:.3f}\t"
                f"{s.ascent_m:.1f}\t"
                f"{s.descent_m:.1f}\t"
                f"{lo:.1f}\t"
                f"{hi:.1f}\t"
                f"{s.direction_markers}"
            )
        else:
            print(f"\n{path} [{name}]")
            print(f"  points        : {s.points}")
            print(f"  segments      : {s.segments}")
            print(f"  distance (km) : {s.distance_km:.3f}")
            print(f"  ascent (m)    : {s.ascent_m:.1f}")
            print(f"  descent (m)   : {s.descent_m:.1f}")
            print(f"  elevation (m) : {lo:.1f} .. {hi:.1f}")
            print(f"  arrows        : {s.direction_markers}")


# ---------------------------
# Subcommands
# ---------------------------
def cmd_render(args: argparse.Namespace, cfg: GPXmapConfig) -> int:
    settings = cfg.render
    if args.arrow_km is not None:
        settings = replace(settings, arrow_threshold_km=args.arrow_km)
    if args.gamma is not None:
        settings = replace(settings, gamma=args.gamma)
    if args.low_color is not None:
        settings = replace(settings, low_color=RGB.from_hex(args.low_color))
    if args.high_color is not None:
        settings = replace(settings, high_color=RGB.from_hex(args.high_color))

    backend = args.backend or cfg.output.backend
    if backend == "matplotlib":
        sink = MatplotlibMapSink()
    else:
        sink = FoliumMapSink(tiles=cfg.output.tiles)

    out_path = (
        Path(args.output).expanduser()
        if args.output
        else default_output_path(args.gpx, cfg.output.out_dir, _SUFFIX[backend])
    )

    renderer = TrackRenderer(sink, settings)
    renderer.load_file(args.gpx)
    sink.save(out_path)
    log(f"Wrote map: {out_path}")
    return 0


def cmd_summary(args: argparse.Namespace, cfg: GPXmapConfig) -> int:
    threshold = args.arrow_km or cfg.render.arrow_threshold_km
    if args.tsv:
        print("file\ttrack\tpoints\tsegments\tdistance_km\tascent_m\tdescent_m\tmin_ele_m\tmax_ele_m\tarrows")

    rc = 0
    for path in args.gpx:
        try:
            doc = read_gpx_document(path)
        except GPXmapError as e:
            log(f"Skipping {path}: {e}")
            rc = 1
            continue
        print_report(path, summarize_document(doc, threshold), tsv=args.tsv)
    return rc


def _positive_float(text: str) -> float:
    try:
        v = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from None
    if v <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0: {text!r}")
    return v


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="gpxmap", description="GPXmap: render GPX tracks on a map.")
    sub = ap.add_subparsers(dest="command", required=True)

    r = sub.add_parser("render", help="Render one GPX file to a map.")
    r.add_argument("gpx", type=Path, help="GPX file to render.")
    r.add_argument("-o", "--output", default=None,
                   help="Output file (default: <out_dir>/<track>.html or .png).")
    r.add_argument("--backend", choices=BACKENDS, default=None,
                   help="folium (interactive HTML) or matplotlib (static image).")
    r.add_argument("--arrow-km", type=_positive_float, default=None,
                   help="Distance between direction arrows in km (default: 3).")
    r.add_argument("--gamma", type=_positive_float, default=None,
                   help="Exponent applied to the elevation ratio (default: 1, linear).")
    r.add_argument("--low-color", default=None, help="Hex color for the lowest elevation.")
    r.add_argument("--high-color", default=None, help="Hex color for the highest elevation.")
    r.set_defaults(func=cmd_render)

    s = sub.add_parser("summary", help="Print per-track statistics.")
    s.add_argument("gpx", nargs="+", type=Path, help="One or more GPX files.")
    s.add_argument("--tsv", action="store_true",
                   help="Print tab-separated output (good for piping).")
    s.add_argument("--arrow-km", type=_positive_float, default=None,
                   help="Arrow spacing used for the arrow count.")
    s.set_defaults(func=cmd_summary)

    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config()
        return args.func(args, cfg)
    except (GPXmapError, ValueError) as e:
        log(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
