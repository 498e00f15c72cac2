"""
Configuration loader — reads .tfguard.yml into a LintConfig.

The file is optional. When none is found every rule runs with its
default settings.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from tfguard.core.models.config import LintConfig

logger = logging.getLogger(__name__)

# Default config filenames, first match wins
CONFIG_FILES = (".tfguard.yml", ".tfguard.yaml")


class ConfigError(Exception):
    """Raised when the lint configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for a config file starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the config file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent

    for _ in range(20):  # safety limit
        for name in CONFIG_FILES:
            candidate = current / name
            if candidate.is_file():
                return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None, start_dir: Path | None = None) -> LintConfig:
    """Load and validate lint configuration.

    Args:
        path: Explicit config path. If None, searches upward from start_dir.
        start_dir: Where the upward search begins (default: cwd).

    Returns:
        Validated LintConfig (defaults when no file exists).

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file(start_dir)
        if path is None:
            logger.debug("No config file found, using defaults")
            return LintConfig()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading lint config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return LintConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = LintConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config %s (%d rule overrides)", path, len(config.rules))
    return config
