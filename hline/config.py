"""Configuration management for hline.

This module handles loading and accessing configuration from:
1. hline.toml file (``$HLINE_CONFIG``, or the per-user config directory)
2. Environment variables (HLINE_* prefix)
3. Default values

Environment variables override config file values, which override defaults.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import toml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "hline.toml"


@dataclass
class ColorConfig:
    """Output color configuration."""

    match: str = "bright_red"


@dataclass
class InputConfig:
    """Input handling configuration."""

    ok_if_binary: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = "WARNING"


@dataclass
class Config:
    """Main configuration container."""

    colors: ColorConfig = field(default_factory=ColorConfig)
    input: InputConfig = field(default_factory=InputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _get_env_bool(key: str, default: bool) -> bool:
    """Get boolean from environment variable."""
    value = os.environ.get(key)
    if value is not None:
        return value.lower() in ("1", "true", "yes", "on")
    return default


def _get_env_str(key: str, default: str) -> str:
    """Get string from environment variable, ignoring empty values."""
    return os.environ.get(key) or default


def get_config_path() -> Path:
    """Resolve the config file location."""
    explicit = os.environ.get("HLINE_CONFIG")
    if explicit:
        return Path(explicit).expanduser()

    if sys.platform == "win32":
        config_dir = Path(os.environ.get("APPDATA", "")) / "hline"
    else:
        xdg_home = os.environ.get("XDG_CONFIG_HOME")
        base = Path(xdg_home) if xdg_home else Path.home() / ".config"
        config_dir = base / "hline"
    return config_dir / CONFIG_FILENAME


def _load_config_file() -> dict[str, Any]:
    """Load configuration from hline.toml, or nothing if it is unusable."""
    config_path = get_config_path()
    if not config_path.exists():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as err:
        logger.debug(f"Ignoring config file {config_path}: {err}")
        return {}


def _get_section(file_config: dict[str, Any], name: str) -> dict[str, Any]:
    """Get a table from the config file, ignoring it if it is not a table."""
    section = file_config.get(name, {})
    if not isinstance(section, dict):
        logger.debug(f"Ignoring config section [{name}]: not a table")
        return {}
    return section


def _get_file_value(
    section: dict[str, Any], key: str, expected: type, default: Any
) -> Any:
    """Get a value from a config table, ignoring it if it has the wrong type."""
    value = section.get(key, default)
    if not isinstance(value, expected):
        logger.debug(
            f"Ignoring config value {key}={value!r}: expected {expected.__name__}"
        )
        return default
    return value


def _apply_file_config(config: Config, file_config: dict[str, Any]) -> Config:
    """Apply configuration from file to config object."""
    colors = _get_section(file_config, "colors")
    config.colors.match = _get_file_value(colors, "match", str, config.colors.match)

    input_section = _get_section(file_config, "input")
    config.input.ok_if_binary = _get_file_value(
        input_section, "ok_if_binary", bool, config.input.ok_if_binary
    )

    logging_section = _get_section(file_config, "logging")
    config.logging.log_level = _get_file_value(
        logging_section, "log_level", str, config.logging.log_level
    )

    return config


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to config."""
    config.colors.match = _get_env_str("HLINE_MATCH_COLOR", config.colors.match)
    config.input.ok_if_binary = _get_env_bool(
        "HLINE_OK_IF_BINARY", config.input.ok_if_binary
    )
    config.logging.log_level = _get_env_str(
        "HLINE_LOG_LEVEL", config.logging.log_level
    )
    return config


def load_config() -> Config:
    """Load configuration from defaults, file, and environment.

    Priority (highest to lowest):
    1. Environment variables (HLINE_*)
    2. hline.toml file
    3. Default values

    Returns:
        Config: The loaded configuration object
    """
    config = Config()

    file_config = _load_config_file()
    if file_config:
        config = _apply_file_config(config, file_config)

    return _apply_env_overrides(config)


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> Config:
    """Reload configuration from file and environment."""
    global _config
    _config = load_config()
    return _config


__all__ = [
    "Config",
    "ColorConfig",
    "InputConfig",
    "LoggingConfig",
    "get_config_path",
    "load_config",
    "get_config",
    "reload_config",
]
