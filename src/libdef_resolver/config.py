"""Configuration loader for the command line entrypoints.

Reads settings from a JSON file (default: libdef-resolver.json in the current
directory) and validates the structure. Every key is optional:

- ``directoryPrefix``: prefix of definition directory names (default
  ``"flow_"``; an empty string means range texts carry no prefix)
- ``warnOnly``: report problems without failing (default ``false``)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .parsers.version import DEFAULT_DIRECTORY_PREFIX

DEFAULT_CONFIG_PATH = Path("libdef-resolver.json")
CONFIG_PATH_ENV_VAR = "LIBDEF_RESOLVER_CONFIG"

_KNOWN_KEYS = {"directoryPrefix", "warnOnly"}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    directory_prefix: str = DEFAULT_DIRECTORY_PREFIX
    warn_only: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a dictionary, validating each field."""
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

        prefix = data.get("directoryPrefix", DEFAULT_DIRECTORY_PREFIX)
        if not isinstance(prefix, str):
            raise ConfigError("'directoryPrefix' must be a string")

        warn_only = data.get("warnOnly", False)
        if not isinstance(warn_only, bool):
            raise ConfigError("'warnOnly' must be a boolean")

        return cls(directory_prefix=prefix, warn_only=warn_only)


def _resolve_config_path(path: Path | str | None = None) -> tuple[Path, bool]:
    """Resolve the configuration file path and whether it was asked for.

    Priority:
    1. Explicit path argument
    2. LIBDEF_RESOLVER_CONFIG environment variable
    3. Default path (libdef-resolver.json in the current directory)
    """
    if path is not None:
        return Path(path), True

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path), True

    return DEFAULT_CONFIG_PATH, False


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings from a JSON file.

    A missing default file yields default settings; a missing file that was
    asked for explicitly is an error.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path, explicit = _resolve_config_path(path)

    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return Settings()

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    return Settings.from_dict(data)
