"""Launch settings, optionally read from a YAML file."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .errors import ConfigError
from .ports import DEFAULT_HOST, DEFAULT_MAX_ATTEMPTS, DEFAULT_PORT

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "debugpy-inspect.yaml"


@dataclass(frozen=True)
class LaunchConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    # Searched before PATH when the target is a bare name.
    search_path: tuple[str, ...] = ()
    wait_for_client: bool = False
    python: str = field(default_factory=lambda: sys.executable)

    def search_dirs(self, environ=None):
        """Return the search path string handed to ``shutil.which``."""
        env_path = (os.environ if environ is None else environ).get("PATH", os.defpath)
        return os.pathsep.join([*self.search_path, env_path])


_FIELD_TYPES = {
    "host": str,
    "port": int,
    "max_attempts": int,
    "wait_for_client": bool,
    "python": str,
}


def _coerce(data):
    values = {}
    for key, value in data.items():
        if key == "search_path":
            if isinstance(value, str):
                value = [value]
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError("search_path must be a string or a list of strings")
            values[key] = tuple(value)
        elif key in _FIELD_TYPES:
            expected = _FIELD_TYPES[key]
            # bool is an int subclass; reject it for numeric fields
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                raise ConfigError(f"{key} must be of type {expected.__name__}, got {value!r}")
            values[key] = value
        else:
            logger.warning("Ignoring unknown config key: %s", key)
    return values


def load_config(path=None):
    """Read a :class:`LaunchConfig` from ``path``.

    Without a path, ``debugpy-inspect.yaml`` in the working directory is
    used when present. A missing default file yields the defaults; a missing
    explicit file is an error.
    """
    explicit = path is not None
    config_path = Path(path) if explicit else Path(DEFAULT_CONFIG_FILE)

    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}")
        logger.debug("No %s found, using defaults", config_path)
        return LaunchConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {config_path}: {e}") from e

    if data is None:
        return LaunchConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must be a mapping")

    logger.debug("Loaded config from %s", config_path)
    return dataclasses.replace(LaunchConfig(), **_coerce(data))
