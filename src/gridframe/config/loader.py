"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance from a
sibling base.yaml. Every key is optional; an empty file yields defaults.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from gridframe.config.settings import IngestionConfig


# ${VAR} or ${VAR:default}; an unset variable without default becomes ""
_ENV_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<default>[^}]*))?\}")


def _expand_env(value: Any) -> Any:
    """Substitute environment references in every string of a YAML tree."""
    if isinstance(value, str):
        return _ENV_REFERENCE.sub(
            lambda m: os.environ.get(m["name"], m["default"] or ""), value
        )
    if isinstance(value, dict):
        return {key: _expand_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env(item) for item in value]
    return value


def _merge_sections(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Overlay override on base; nested sections merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _merge_sections(current, value)
        merged[key] = value
    return merged


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        msg = f"{path}: top level must be a mapping"
        raise ValueError(msg)
    return _expand_env(data) if data else {}


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> IngestionConfig:
    """
    Load ingestion configuration from YAML file(s).

    Example:
        columns:
          time_column: t
          coordinate_columns: [x, y, z]
        source:
          delimiter: ";"
        decoding:
          value_type: float

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional base configuration; defaults to base.yaml next
            to config_path when that file exists.

    Returns:
        Validated IngestionConfig.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        potential_base = config_path.parent / "base.yaml"
        is_self = potential_base.resolve() == config_path.resolve()
        base_data = (
            load_yaml(potential_base)
            if potential_base.exists() and not is_self
            else {}
        )

    merged = _merge_sections(base_data, load_yaml(config_path))

    return IngestionConfig(
        columns=merged.get("columns") or {},
        source=merged.get("source") or {},
        decoding=merged.get("decoding") or {},
    )
