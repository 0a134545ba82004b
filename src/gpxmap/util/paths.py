# gpxmap/util/paths.py
from __future__ import annotations

import re
from pathlib import Path

_slug_bad = re.compile(r"[^a-z0-9]+")

def ensure_dir(path: Path) -> None:
    """Ensure a directory exists."""
    path.mkdir(parents=True, exist_ok=True)

def slugify(text: str, *, default: str = "untitled") -> str:
    """Create a path-safe slug (lowercase, a-z0-9 and single underscores)."""
    s = (text or "").strip().lower()
    s = _slug_bad.sub("_", s).strip("_")
    return s or default

def default_output_path(track_path: Path, out_dir: Path, suffix: str) -> Path:
    """Output path inside `out_dir`, named after the slugged track file stem."""
    return out_dir / f"{slugify(track_path.stem, default='track')}{suffix}"
