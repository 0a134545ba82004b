"""
GPXmap configuration loader

This module centralizes *all* configuration handling for GPXmap.

Design goals:
- Keep the CLI Unix-friendly: flags override everything.
- Provide sensible defaults if no config exists.
- Allow per-machine config without committing personal preferences:
    ~/.config/gpxmap/config.toml
- Allow repo-local config:
    <repo_root>/config/config.toml
- Allow environment variable overrides for automation.

Precedence (highest to lowest) for any given value:
1) CLI argument (handled by gpxmap.cli)
2) Environment variables (GPXMAP_*)
3) User config: ~/.config/gpxmap/config.toml
4) Repo config: <repo_root>/config/config.toml
5) Hard defaults (blue -> red gradient, arrows every 3 km, folium output)

This module uses Python's built-in tomllib on Python 3.11+, or `tomli` if installed.

Config layout:

    [render]
    low_color = "#0000ff"
    high_color = "#ff0000"
    gamma = 1.0
    line_weight = 4
    line_opacity = 0.9
    arrow_threshold_km = 3.0

    [output]
    backend = "folium"        # or "matplotlib"
    out_dir = "~/GPS/_maps"
    tiles = "OpenStreetMap"
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from gpxmap.errors import ConfigError
from gpxmap.render.arrows import DEFAULT_ARROW_THRESHOLD_KM
from gpxmap.render.colors import HIGH_COLOR, LOW_COLOR, RGB

BACKENDS = ("folium", "matplotlib")


# ---------------------------------------------------------------------------
# TOML loading helpers
# ---------------------------------------------------------------------------
def _load_toml(path: Path) -> dict[str, Any]:
    """
    Parse a TOML file at `path`.

    Behavior:
    - If the file does not exist, return an empty dict (non-fatal).
    - If the file exists but is invalid TOML, raise ConfigError
      with a clear, user-facing message.

    Rationale:
    - Missing config files are normal and expected.
    - Malformed config files indicate user intent and should fail loudly.
    """
    if not path.is_file():
        return {}

    try:
        try:
            # Python 3.11+ standard library
            import tomllib
            return tomllib.loads(path.read_text(encoding="utf-8")) or {}
        except ModuleNotFoundError:
            import tomli
            return tomli.loads(path.read_text(encoding="utf-8")) or {}
    except Exception as e:
        # Wrap parsing errors with file context for usability
        raise ConfigError(f"Failed to parse TOML config: {path} ({e})") from e


# ---------------------------------------------------------------------------
# Generic coercion helpers
# ---------------------------------------------------------------------------
def _deep_get(d: dict[str, Any], dotted_key: str) -> Any:
    """
    Fetch nested dictionary values using dot-separated keys.

    Example:
        _deep_get(cfg, "render.gamma")

    Returns None if any part of the path is missing.
    """
    cur: Any = d
    for part in dotted_key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return None
        cur = cur[part]
    return cur


def _as_path(v: Any) -> Path:
    if isinstance(v, (str, Path)):
        return Path(v).expanduser()
    raise ValueError(f"expected a path, got {v!r}")


def _as_float(v: Any) -> float:
    if isinstance(v, bool):
        raise ValueError(f"expected a number, got {v!r}")
    return float(v)


def _as_positive_float(v: Any) -> float:
    f = _as_float(v)
    if f <= 0:
        raise ValueError(f"expected a positive number, got {v!r}")
    return f


def _as_opacity(v: Any) -> float:
    f = _as_float(v)
    if not 0.0 <= f <= 1.0:
        raise ValueError(f"expected a value in [0, 1], got {v!r}")
    return f


def _as_color(v: Any) -> RGB:
    if isinstance(v, RGB):
        return v
    return RGB.from_hex(str(v))


def _as_backend(v: Any) -> str:
    s = str(v).strip().lower()
    if s not in BACKENDS:
        raise ValueError(f"expected one of {', '.join(BACKENDS)}, got {v!r}")
    return s


def _as_str(v: Any) -> str:
    return str(v)


# ---------------------------------------------------------------------------
# Repo discovery + defaults
# ---------------------------------------------------------------------------
def find_repo_root(start: Path) -> Optional[Path]:
    """
    Walk upward from `start` looking for the GPXmap repo root.

    Heuristic:
    - The presence of a `config/` directory marks the repo root
    """
    start = start.resolve()
    for p in [start] + list(start.parents):
        if (p / "config").is_dir():
            return p
    return None


def default_out_dir() -> Path:
    """Default directory for rendered maps if nothing is configured."""
    return Path.home() / "GPS" / "_maps"


# ---------------------------------------------------------------------------
# Typed config dataclasses
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RenderSettings:
    """
    Everything the render pipeline needs besides the document itself.
    """

    low_color: RGB = LOW_COLOR
    high_color: RGB = HIGH_COLOR
    gamma: float = 1.0
    line_weight: float = 4.0
    line_opacity: float = 0.9
    arrow_threshold_km: float = DEFAULT_ARROW_THRESHOLD_KM


@dataclass(frozen=True)
class OutputConfig:
    backend: str = "folium"
    out_dir: Optional[Path] = None
    tiles: str = "OpenStreetMap"


@dataclass(frozen=True)
class GPXmapConfig:
    """
    Fully merged GPXmap configuration.

    Attributes:
    - render: colors, line style and arrow spacing
    - output: backend and output location
    - source: provenance map showing where each value came from
    """

    render: RenderSettings
    output: OutputConfig
    source: dict[str, str]


# key -> (coercer, default)
_FIELDS: dict[str, tuple[Callable[[Any], Any], Any]] = {
    "render.low_color": (_as_color, LOW_COLOR),
    "render.high_color": (_as_color, HIGH_COLOR),
    "render.gamma": (_as_positive_float, 1.0),
    "render.line_weight": (_as_positive_float, 4.0),
    "render.line_opacity": (_as_opacity, 0.9),
    "render.arrow_threshold_km": (_as_positive_float, DEFAULT_ARROW_THRESHOLD_KM),
    "output.backend": (_as_backend, "folium"),
    "output.out_dir": (_as_path, None),
    "output.tiles": (_as_str, "OpenStreetMap"),
}

ENV_MAP = {
    "GPXMAP_LOW_COLOR": "render.low_color",
    "GPXMAP_HIGH_COLOR": "render.high_color",
    "GPXMAP_GAMMA": "render.gamma",
    "GPXMAP_ARROW_KM": "render.arrow_threshold_km",
    "GPXMAP_BACKEND": "output.backend",
    "GPXMAP_OUT_DIR": "output.out_dir",
    "GPXMAP_TILES": "output.tiles",
}


def _coerce(key: str, raw: Any, origin: str) -> Any:
    coerce, _ = _FIELDS[key]
    try:
        return coerce(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {key} ({origin}): {e}") from e


# ---------------------------------------------------------------------------
# Main config loader
# ---------------------------------------------------------------------------
def load_config(
    repo_root: Optional[Path] = None,
    repo_config_path: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
) -> GPXmapConfig:
    """
    Load, merge, and normalize all GPXmap configuration.

    This function is the single authoritative entry point
    for configuration access.
    """

    # Locate repo and config files
    if repo_root is None:
        repo_root = find_repo_root(Path.cwd())
    if repo_config_path is None and repo_root is not None:
        repo_config_path = repo_root / "config" / "config.toml"
    if user_config_path is None:
        user_config_path = Path.home() / ".config" / "gpxmap" / "config.toml"

    # Load raw TOML dicts
    repo_cfg = _load_toml(repo_config_path) if repo_config_path else {}
    user_cfg = _load_toml(user_config_path) if user_config_path else {}

    values = {k: default for k, (_, default) in _FIELDS.items()}
    src = {k: "default" for k in _FIELDS}

    # Repo, then user (user wins)
    for cfg, label, path in (
        (repo_cfg, "repo", repo_config_path),
        (user_cfg, "user", user_config_path),
    ):
        for k in _FIELDS:
            raw = _deep_get(cfg, k)
            if raw is None:
                continue
            origin = f"{label}:{path}"
            values[k] = _coerce(k, raw, origin)
            src[k] = origin

    # Environment variable overrides (highest non-CLI precedence)
    for env, key in ENV_MAP.items():
        raw = os.environ.get(env)
        if not raw:
            continue
        values[key] = _coerce(key, raw, f"env:{env}")
        src[key] = f"env:{env}"

    if values["output.out_dir"] is None:
        values["output.out_dir"] = default_out_dir()

    render = RenderSettings(
        low_color=values["render.low_color"],
        high_color=values["render.high_color"],
        gamma=values["render.gamma"],
        line_weight=values["render.line_weight"],
        line_opacity=values["render.line_opacity"],
        arrow_threshold_km=values["render.arrow_threshold_km"],
    )
    output = OutputConfig(
        backend=values["output.backend"],
        out_dir=values["output.out_dir"].expanduser(),
        tiles=values["output.tiles"],
    )

    return GPXmapConfig(render=render, output=output, source=src)
