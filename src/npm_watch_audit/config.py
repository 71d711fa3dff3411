"""Configuration loader for report layout and project file names.

Settings come from an optional JSON file. Every field is optional and falls
back to the built-in default:

    {
      "manifestName": "package.json",
      "lockfileName": "package-lock.json",
      "defaultOutput": "result.csv",
      "headers": ["name", "version", "warning"],
      "warningMarker": "×"
    }
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

CONFIG_PATH_ENV_VAR = "NPM_WATCH_AUDIT_CONFIG"

DEFAULT_HEADERS = ("name", "version", "warning")
DEFAULT_WARNING_MARKER = "×"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    manifest_name: str = "package.json"
    lockfile_name: str = "package-lock.json"
    default_output: str = "result.csv"
    headers: tuple[str, str, str] = DEFAULT_HEADERS
    warning_marker: str = DEFAULT_WARNING_MARKER

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a dictionary, validating each field present."""
        defaults = cls()

        def _string(key: str, default: str) -> str:
            value = data.get(key, default)
            if not isinstance(value, str) or not value:
                raise ConfigError(f"'{key}' must be a non-empty string")
            return value

        headers = data.get("headers", list(defaults.headers))
        if (
            not isinstance(headers, list)
            or len(headers) != 3
            or not all(isinstance(h, str) and h for h in headers)
        ):
            raise ConfigError("'headers' must be an array of three non-empty strings")

        marker = _string("warningMarker", defaults.warning_marker)
        if len(marker) != 1:
            raise ConfigError("'warningMarker' must be a single character")

        return cls(
            manifest_name=_string("manifestName", defaults.manifest_name),
            lockfile_name=_string("lockfileName", defaults.lockfile_name),
            default_output=_string("defaultOutput", defaults.default_output),
            headers=(headers[0], headers[1], headers[2]),
            warning_marker=marker,
        )


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. NPM_WATCH_AUDIT_CONFIG environment variable
    3. None (built-in defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings from a JSON file.

    Args:
        path: Optional path to the config file. If not provided, uses the
            NPM_WATCH_AUDIT_CONFIG env var or falls back to the defaults.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return Settings()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

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
