"""
Config check use case — validate the config file and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from launchdeck.core.config.loader import ConfigError, find_config_file, load_config
from launchdeck.core.engine.checks import lookup_check
from launchdeck.core.errors import DependencyError
from launchdeck.core.models.config import AppConfig


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: AppConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "app_count": len(self.config.apps) if self.config else 0,
            "check_count": len(self.config.checks) if self.config else 0,
            "executable_count": len(self.config.executables) if self.config else 0,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate the configuration and report issues.

    Load-time errors make the config invalid. Dependencies on apps that
    are not checks are reported as errors too, since the engine would
    refuse them at launch.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        result.errors.append("No config file found.")
        return result
    result.config_path = config_path

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    for app in config.apps:
        for dep in app.dependencies:
            try:
                lookup_check(config, dep.check)
            except DependencyError as e:
                result.errors.append(f"app '{app.name}': {e}")
        if app.is_check and app.dependencies:
            result.warnings.append(
                f"check app '{app.name}' declares dependencies; they are ignored"
            )

    if not config.apps:
        result.warnings.append("No apps defined. There is nothing to launch.")
    elif not config.executables:
        result.warnings.append("No executable apps defined.")

    result.valid = not result.errors
    return result
