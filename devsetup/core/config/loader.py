"""
Configuration loader — reads config.yml into the Settings model.

A missing file is not an error: devsetup runs on defaults. A file that
exists but cannot be read or validated is.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from devsetup.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config location, relative to the XDG config dir
CONFIG_DIR_NAME = "devsetup"
CONFIG_FILE_NAME = "config.yml"


class ConfigError(Exception):
    """Raised when the configuration file is unreadable or invalid."""


def default_config_path() -> Path:
    """``$XDG_CONFIG_HOME/devsetup/config.yml``, falling back to ``~/.config``."""
    base = os.environ.get("XDG_CONFIG_HOME")
    config_home = Path(base) if base else Path.home() / ".config"
    return config_home / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate the configuration.

    Args:
        path: Explicit config path. If None, uses ``default_config_path()``.

    Returns:
        Validated Settings. Defaults when the file does not exist.

    Raises:
        ConfigError: If the file exists but is invalid.
    """
    if path is None:
        path = default_config_path()

    if not path.exists():
        logger.debug("No config at %s, using defaults", path)
        return Settings()

    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Failed to parse config file: {path}: {e}") from e

    logger.info("Loaded config from %s", path)
    return settings


def save_settings(settings: Settings, path: Path) -> None:
    """Write settings as YAML, creating parent directories.

    Raises:
        ConfigError: If the file cannot be written.
    """
    content = yaml.safe_dump(
        settings.model_dump(mode="json"),
        sort_keys=False,
        default_flow_style=False,
    )
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to write config file: {path}: {e}") from e
    logger.info("Wrote config to %s", path)
