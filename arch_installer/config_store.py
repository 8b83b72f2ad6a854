from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError
from .install_config import InstallConfig, config_field_names, parse_size_mib

logger = logging.getLogger(__name__)

_SIZE_KEYS = {
    "boot_size": "boot_size_mib",
    "swap_size": "swap_size_mib",
    "root_size": "root_size_mib",
}


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def load_overrides(path: str) -> Dict[str, Any]:
    """Read config overrides from a JSON or YAML file."""

    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {path}")

    text = p.read_text(encoding="utf-8")
    fmt = _detect_format(p)

    try:
        if fmt in {"yaml", "yml"}:
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Unable to parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping, got {type(data).__name__}")

    logger.info("Loaded %d config override(s) from %s", len(data), path)
    return data


def normalize_overrides(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Map user-facing keys onto InstallConfig fields.

    `boot_size: "512M"` style keys are converted to `boot_size_mib`; every
    other key must name an InstallConfig field.
    """

    known = set(config_field_names())
    out: Dict[str, Any] = {}

    for key, value in raw.items():
        if value is None:
            continue
        if key in _SIZE_KEYS:
            out[_SIZE_KEYS[key]] = parse_size_mib(value)
        elif key.endswith("_size_mib") and key in known:
            out[key] = parse_size_mib(value)
        elif key == "base_packages":
            if isinstance(value, str):
                value = value.split()
            elif not isinstance(value, (list, tuple)):
                raise ConfigError(f"base_packages must be a list or a string, got {value!r}")
            out[key] = tuple(value)
        elif key in known:
            out[key] = value
        else:
            raise ConfigError(f"Unknown config key: {key}")

    return out


def build_config(
    overrides: Optional[Dict[str, Any]] = None,
    **cli: Any,
) -> InstallConfig:
    """Merge embedded defaults, file overrides and CLI values (later wins)."""

    merged: Dict[str, Any] = {}
    merged.update(normalize_overrides(overrides or {}))
    merged.update(normalize_overrides({k: v for k, v in cli.items() if v is not None}))

    try:
        cfg = replace(InstallConfig(), **merged)
    except TypeError as e:
        raise ConfigError(str(e)) from e

    return cfg.validate()
