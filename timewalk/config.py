"""Load and validate .timewalk/config.yaml."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from timewalk.metadata import DEFAULT_PROPERTIES
from timewalk.weeks import WEEKDAYS


# Default config values
DEFAULTS: dict[str, Any] = {
    "vault": {
        "root": ".",
        "folder": "",
    },
    "calendar": {
        "first_day_of_week": "Monday",
    },
    "timeline": {
        "viewport_size": 10,
    },
    "metadata": {
        "enabled": False,
        "namespace": "dn-",
        "properties": DEFAULT_PROPERTIES,
    },
}


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
    for section in ("vault", "calendar", "timeline", "metadata"):
        if not isinstance(config.get(section), dict):
            raise ConfigError(f"'{section}' must be a mapping")

    vault = config["vault"]
    for key in ("root", "folder"):
        if not isinstance(vault.get(key), str):
            raise ConfigError(f"'vault.{key}' must be a string")

    first_day = config["calendar"].get("first_day_of_week")
    if first_day not in WEEKDAYS:
        raise ConfigError(
            f"Unsupported first_day_of_week '{first_day}'. "
            f"Expected one of: {', '.join(WEEKDAYS)}."
        )

    size = config["timeline"].get("viewport_size")
    if not isinstance(size, int) or isinstance(size, bool) or size < 1:
        raise ConfigError("'timeline.viewport_size' must be a positive integer")

    metadata = config["metadata"]
    if not isinstance(metadata.get("enabled"), bool):
        raise ConfigError("'metadata.enabled' must be true or false")
    for key in ("namespace", "properties"):
        if not isinstance(metadata.get(key), str):
            raise ConfigError(f"'metadata.{key}' must be a string")


def load_config(project_root: Path | None = None) -> dict:
    """Load config from .timewalk/config.yaml under project_root.

    Falls back to cwd if project_root is None. Merges with DEFAULTS
    so callers always get a full config dict.
    """
    root = Path(project_root) if project_root else Path.cwd()
    config_path = root / ".timewalk" / "config.yaml"

    if not config_path.exists():
        raise ConfigError(f"Config not found: {config_path}")

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config must be a YAML mapping, got {type(raw).__name__}")

    config = _deep_merge(DEFAULTS, raw)
    _validate(config)
    return config


def resolve_vault_root(config: dict, project_root: Path) -> Path:
    """Resolve the vault directory relative to project_root."""
    return (project_root / config["vault"]["root"]).resolve()
