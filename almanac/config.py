"""Load and validate .almanac/config.yaml."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


# Default config values
DEFAULTS: dict[str, Any] = {
    "timeline": "docs/timeline.md",
    "render": {
        "title": "Timeline",
        "format": "markdown",
        "output": None,
        "reverse": False,
    },
}

RENDER_FORMATS = ("markdown", "html")


class ConfigError(Exception):
    """Raised when config is invalid or missing."""


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base recursively. Override wins on conflicts."""
    result = base.copy()
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _validate(config: dict) -> None:
    """Validate required fields in config."""
    timeline = config.get("timeline")
    if not isinstance(timeline, str) or not timeline.strip():
        raise ConfigError("'timeline' must be a non-empty path string")

    render = config.get("render")
    if not isinstance(render, dict):
        raise ConfigError("'render' must be a mapping")

    fmt = render.get("format", "markdown")
    if fmt not in RENDER_FORMATS:
        raise ConfigError(
            f"Unsupported render format '{fmt}'. Built-in: {', '.join(RENDER_FORMATS)}."
        )

    if not isinstance(render.get("reverse", False), bool):
        raise ConfigError("'render.reverse' must be true or false")

    output = render.get("output")
    if output is not None and not isinstance(output, str):
        raise ConfigError("'render.output' must be a path string or null")


def load_config(project_root: Path | None = None) -> dict:
    """Load config from .almanac/config.yaml under project_root.

    Falls back to cwd if project_root is None. Merges with DEFAULTS
    so callers always get a full config dict.
    """
    root = Path(project_root) if project_root else Path.cwd()
    config_path = root / ".almanac" / "config.yaml"

    if not config_path.exists():
        raise ConfigError(f"Config not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ConfigError(f"Config must be a YAML mapping, got {type(raw).__name__}")

    config = _deep_merge(DEFAULTS, raw)
    _validate(config)
    return config


def resolve_timeline_path(config: dict, project_root: Path) -> Path:
    """Resolve the timeline document path relative to project_root."""
    return project_root / config["timeline"]


def resolve_output_path(config: dict, project_root: Path) -> Path | None:
    """Resolve the rendered page path, or None to write to stdout."""
    output = config["render"].get("output")
    if output is None:
        return None
    return project_root / output
