"""
Configuration loader — reads the app config file into domain models.

``.json`` files are parsed with ``json``, everything else (``.yml``,
``.yaml``, or an unsuffixed path from LAUNCHDECK_CONFIG) with
``yaml.safe_load``. The result is validated against the Pydantic
AppConfig schema. Every failure surfaces as ConfigError.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import yaml

from launchdeck.core.models.config import AppConfig

logger = logging.getLogger(__name__)

# Environment variable overriding the default config location
CONFIG_ENV_VAR = "LAUNCHDECK_CONFIG"

# Default config filenames, looked up in the home directory
DEFAULT_CONFIG_FILES = (".launchdeck.json", ".launchdeck.yml", ".launchdeck.yaml")

# Check timeout in seconds (unset = wait forever)
CHECK_TIMEOUT_ENV_VAR = "LAUNCHDECK_CHECK_TIMEOUT"


class ConfigError(Exception):
    """Raised when the configuration is invalid or missing."""


def find_config_file(home: Path | None = None) -> Path | None:
    """Locate the config file when none was given explicitly.

    Precedence: ``LAUNCHDECK_CONFIG`` env var, then the first existing
    default file in the home directory.

    Returns:
        Path to the config file, or None if nothing was found.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    try:
        base = home or Path.home()
    except RuntimeError:
        return None

    for filename in DEFAULT_CONFIG_FILES:
        candidate = base / filename
        if candidate.is_file():
            return candidate

    return None


def load_config(path: Path | None = None) -> AppConfig:
    """Load and validate the app configuration.

    Args:
        path: Explicit config path. If None, uses find_config_file().

    Returns:
        Validated AppConfig.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(
            f"No config file found. Create ~/{DEFAULT_CONFIG_FILES[0]}, "
            f"set {CONFIG_ENV_VAR}, or specify --config."
        )

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    data = _decode(path, raw)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")

    try:
        config = AppConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.info("Loaded %d app(s) from %s", len(config.apps), path)
    return config


def _decode(path: Path, raw: str) -> object:
    """Parse ``.json`` files as JSON, anything else as YAML."""
    if path.suffix.lower() == ".json":
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Failed to decode config file {path}: {e}") from e

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to decode config file {path}: {e}") from e


def check_timeout_from_env() -> float | None:
    """Read the optional check timeout from the environment.

    Raises:
        ConfigError: If the value is not a positive number.
    """
    raw = os.environ.get(CHECK_TIMEOUT_ENV_VAR, "").strip()
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ConfigError(f"{CHECK_TIMEOUT_ENV_VAR} must be a number, got {raw!r}") from e
    if timeout <= 0:
        raise ConfigError(f"{CHECK_TIMEOUT_ENV_VAR} must be positive, got {raw!r}")
    return timeout
