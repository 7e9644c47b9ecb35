"""YAML config loader with runtime get/set."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from roadwx.config.schema import RoadwxConfig

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> RoadwxConfig:
    """Load and validate config from a YAML file.

    A missing file or an empty document yields the default config.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("Config %s not found, using defaults", path)
        return RoadwxConfig()
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return RoadwxConfig(**raw)


def get_config_value(config: RoadwxConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'cache.ttl_minutes'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: RoadwxConfig, dotted_key: str, value: Any) -> RoadwxConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new RoadwxConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        if part not in target:
            raise KeyError(f"Config key not found: {dotted_key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    old_value = target[parts[-1]]
    if isinstance(value, str):
        if isinstance(old_value, bool):
            value = value.strip().lower() in ("1", "true", "yes", "on")
        elif isinstance(old_value, int):
            value = int(value)
        elif isinstance(old_value, float):
            value = float(value)
    target[parts[-1]] = value
    return RoadwxConfig(**data)
