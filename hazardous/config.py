"""Runtime configuration for hazardous - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from hazardous.definitions import RM_FLAGS, RM_RF, UNSAFE_PATHS
from hazardous.utils.logging import logger

CONFIG_FILE_NAME = ".hazardous.json"

DEFAULTS = {
    "scan": {
        "allow_extensions": [".sh", "Makefile"],
        "exclude_dirs": ["node_modules", "linters"],
        "resolve_paths": False,
        "max_file_size": 2 * 1024 * 1024,
    },
    "rules": {
        "command": RM_RF.name,
        "label": RM_RF.label,
        "flags": sorted(RM_FLAGS),
        "unsafe_paths": sorted(UNSAFE_PATHS),
    },
}

_TRUE_VALUES = ("1", "true", "yes", "on")


def _coerce_env(value: str, default_value: Any) -> Any:
    """Convert an environment string to the type of the default it overrides."""
    if isinstance(default_value, bool):
        return value.strip().lower() in _TRUE_VALUES
    if isinstance(default_value, int):
        return int(value)
    if isinstance(default_value, list):
        return [v.strip() for v in value.split(",") if v.strip()]
    return value


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .hazardous.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (HAZARDOUS_<SECTION>_<KEY>)
    2. .hazardous.json file in ``root``
    3. Built-in defaults

    Args:
        root: Root directory to look for config file

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / CONFIG_FILE_NAME
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                cfg[section][key] = value
                            else:
                                logger.warning(
                                    "Ignoring config key {section}.{key} in {path}",
                                    section=section,
                                    key=key,
                                    path=path,
                                )
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Could not load config file from {path}: {err}", path=path, err=e)
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"HAZARDOUS_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                try:
                    cfg[section][key] = _coerce_env(os.environ[env_var], cfg[section][key])
                except ValueError:
                    logger.warning("Invalid value for {var}, keeping {value!r}", var=env_var, value=cfg[section][key])

    return cfg


def split_csv(value: str | None) -> list[str] | None:
    """Split a comma-separated CLI value, None when the option was not given."""
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]
