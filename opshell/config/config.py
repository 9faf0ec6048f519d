"""
Configuration management for the shell.

Config layers three sources, later ones winning:

1. Built-in defaults (constants.DEFAULTS)
2. A YAML file
3. Environment overrides using the OPSHELL_CONF_ prefix

Environment Variable Override Format:
    OPSHELL_CONF_<SECTION>_<SUBSECTION>_<KEY>=value

Examples:
    OPSHELL_CONF_LOGGING_LEVEL=debug
    OPSHELL_CONF_DB_FORMAT=json
    OPSHELL_CONF_STS_TIMEOUT=2.5
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml

from ..exceptions import ConfigurationError
from .constants import (
    DEFAULT_CONFIG_PATH,
    DEFAULTS,
    ENV_CONFIG_FILE,
    ENV_OVERRIDE_PREFIX,
    MAX_CONFIG_SIZE_BYTES,
)

_MISSING = object()


def _check_file_size(path: Path) -> None:
    """Reject oversized configuration files before parsing them."""
    file_size = os.path.getsize(path)
    if file_size > MAX_CONFIG_SIZE_BYTES:
        raise ConfigurationError(
            f"configuration file is {file_size} bytes, exceeding maximum size "
            f"of {MAX_CONFIG_SIZE_BYTES} bytes",
            file=str(path),
        )


def _load_yaml(path: Path) -> dict[str, Any]:
    _check_file_size(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"invalid YAML: {e}", file=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "configuration root must be a mapping", file=str(path)
        )
    return data


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into base, returning base."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def _convert_env_value(value: str) -> bool | int | float | str | list[Any] | None:
    """
    Convert environment variable string to appropriate type.

    Args:
        value: Environment variable value as string

    Returns:
        Converted value with appropriate type
    """
    if value.lower() in ("null", "none", ""):
        return None

    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    if "," in value:
        return [_convert_env_value(v.strip()) for v in value.split(",")]

    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        pass

    return value


def default_config_file() -> str | None:
    """
    Locate the configuration file when none is given explicitly.

    Returns:
        $OPSHELL_CONFIG if set, else the per-user file if it exists, else None
    """
    from_env = os.environ.get(ENV_CONFIG_FILE)
    if from_env:
        return from_env

    path = Path(DEFAULT_CONFIG_PATH).expanduser()
    return str(path) if path.is_file() else None


class Config:
    """
    Layered shell configuration with dotted-path access.

    Example:
        config = Config("etc/opshell.yaml")
        config.get("logging.level")        # "warning"
        config.get("db.env.url")           # "OPSHELL_DB_URL"
        config.get("missing.key", 42)      # 42
    """

    def __init__(
        self,
        fname: str | None = None,
        enable_env_overrides: bool = True,
        env_prefix: str = ENV_OVERRIDE_PREFIX,
    ):
        """
        Initialize configuration.

        Args:
            fname: Path to a YAML file; None uses the defaults only
            enable_env_overrides: Whether to apply environment variable overrides
            env_prefix: Prefix for environment variables

        Raises:
            ConfigurationError: If the file is missing, too large or malformed
        """
        self._env_prefix = env_prefix
        self._path: Path | None = None
        data = copy.deepcopy(DEFAULTS)

        if fname is not None:
            path = Path(fname).expanduser().resolve()
            if not path.is_file():
                raise ConfigurationError("configuration file not found", file=str(path))
            self._path = path
            _merge(data, _load_yaml(path))

        if enable_env_overrides:
            self._apply_env_overrides(data)

        self._data = data

    @property
    def path(self) -> Path | None:
        """The file the configuration was loaded from, if any."""
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        """
        Read a value by dotted path.

        Args:
            key: Dotted path such as "db.env.url"
            default: Returned when any path component is missing

        Returns:
            The configured value or default
        """
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict):
                return default
            current = current.get(part, _MISSING)
            if current is _MISSING:
                return default
        return current

    def _apply_env_overrides(self, data: dict[str, Any]) -> None:
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(self._env_prefix):
                continue
            path = env_key[len(self._env_prefix) :].lower().split("_")
            if not all(path):
                continue
            self._set_nested_value(data, path, _convert_env_value(env_value))

    @staticmethod
    def _set_nested_value(data: dict[str, Any], path: list[str], value: Any) -> None:
        current = data
        for part in path[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[path[-1]] = value
