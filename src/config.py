"""Runtime settings: defaults, YAML config file, environment and CLI overrides.

Precedence, highest first: CLI flags, environment variables, config file,
built-in defaults. Config files are validated against ``CONFIG_SCHEMA``
(JSON Schema Draft 7) before use.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml
from jsonschema import Draft7Validator

from constants import Constants
from errors import ConfigError

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "root": {"type": "string", "minLength": 1},
        "db_path": {"type": "string", "minLength": 1},
        "cache_path": {"type": "string", "minLength": 1},
        "log_level": {"type": "string", "enum": LOG_LEVELS},
    },
    "additionalProperties": False,
}


@dataclass
class Settings:
    """Resolved settings."""

    root: str = "."
    db_path: str = Constants.DB_PATH
    cache_path: str = Constants.CACHE_PATH
    log_level: str = "INFO"
    config_file: Optional[str] = None


def validate_config(data: Dict[str, Any]) -> None:
    """Validate config data strictly and raise on the first error.

    Raises:
        ConfigError: if ``data`` does not match ``CONFIG_SCHEMA``.
    """
    validator = Draft7Validator(CONFIG_SCHEMA)
    errs = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errs:
        first = errs[0]
        path = "/".join(str(p) for p in first.path)
        raise ConfigError(f"Invalid config at '{path}': {first.message}")


def find_config_file(explicit: Optional[str] = None) -> Optional[str]:
    """Locate the config file.

    An explicit path or ``$PACSTATE_CONFIG`` must exist; the default
    locations are only used when present.
    """
    chosen = explicit or os.environ.get(Constants.ENV_CONFIG)
    if chosen:
        if not os.path.isfile(chosen):
            raise ConfigError(f"Config file not found: {chosen}")
        return chosen
    for location in Constants.DEFAULT_CONFIG_LOCATIONS:
        candidate = os.path.expanduser(location)
        if os.path.isfile(candidate):
            return candidate
    return None


def load_config_file(path: str) -> Dict[str, Any]:
    """Read and validate a YAML config file.

    A top-level ``pacstate`` mapping is used when present, otherwise the
    whole document.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as e:
        raise ConfigError(f"Unable to read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    section = data.get("pacstate", data)
    if not isinstance(section, dict):
        raise ConfigError(f"'pacstate' section of {path} must be a mapping")
    validate_config(section)
    return section


def load_settings(
    config_path: Optional[str] = None,
    root: Optional[str] = None,
    log_level: Optional[str] = None,
) -> Settings:
    """Resolve settings from every source.

    Args:
        config_path: Explicit config file (``-c``).
        root: Root directory from the CLI.
        log_level: Log level from the CLI.
    """
    settings = Settings()
    path = find_config_file(config_path)
    if path:
        for key, value in load_config_file(path).items():
            setattr(settings, key, value)
        settings.config_file = path
        logger.debug("Loaded config from %s", path)

    env_root = os.environ.get(Constants.ENV_ROOT)
    if env_root:
        settings.root = env_root
    env_level = os.environ.get(Constants.ENV_LOG_LEVEL, "").strip().upper()
    if env_level:
        if env_level not in LOG_LEVELS:
            raise ConfigError(f"Invalid {Constants.ENV_LOG_LEVEL}: {env_level}")
        settings.log_level = env_level

    if root:
        settings.root = root
    if log_level:
        settings.log_level = log_level.upper()
    return settings
