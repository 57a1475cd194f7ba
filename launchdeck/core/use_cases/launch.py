"""
Launch use case — select apps from the config and launch them.

Loads the config, wires an engine for this run, picks the apps the
user asked for (one app, one tag group, any-of tags, or everything)
and hands them to the batch launcher.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from launchdeck.adapters.base import ProcessLauncher
from launchdeck.core.config.loader import ConfigError, check_timeout_from_env, load_config
from launchdeck.core.engine.executor import BatchReport, Engine, build_engine
from launchdeck.core.errors import AppNotFoundError
from launchdeck.core.models.app import App
from launchdeck.core.models.config import AppConfig

logger = logging.getLogger(__name__)


@dataclass
class Selection:
    """Apps picked for an operation, with a human label for the mode."""

    apps: list[App] = field(default_factory=list)
    mode: str = "all apps"
    warnings: list[str] = field(default_factory=list)


def parse_tags(raw: str | None) -> list[str]:
    """Split a comma-separated tag list, dropping blanks."""
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]


def select_apps(
    config: AppConfig,
    app_name: str | None = None,
    group_tag: str | None = None,
    tags: list[str] | None = None,
) -> Selection:
    """Pick apps in config order.

    Precedence: ``app_name`` > ``group_tag`` > ``tags`` > every app.

    Raises:
        AppNotFoundError: If ``app_name`` is unknown.
    """
    if app_name:
        app = config.get_app(app_name)
        if app is None:
            raise AppNotFoundError(app_name)
        return Selection(apps=[app], mode=f"app '{app_name}'")

    if group_tag:
        selection = Selection(
            apps=config.get_apps_by_tag(group_tag),
            mode=f"apps with tag '{group_tag}'",
        )
        if not selection.apps:
            selection.warnings.append(f"no apps found with tag '{group_tag}'")
        return selection

    if tags:
        return Selection(
            apps=config.get_apps_by_tags(tags),
            mode=f"apps with tags [{', '.join(tags)}]",
        )

    return Selection(apps=list(config.apps))


def prepare_engine(
    config_path: Path | None,
    dry_run: bool = False,
    launcher: ProcessLauncher | None = None,
) -> Engine:
    """Load the config and wire an engine for one run.

    Raises:
        ConfigError: If the config (or the check timeout) is invalid.
    """
    config = load_config(config_path)
    return build_engine(
        config,
        dry_run=dry_run,
        check_timeout=check_timeout_from_env(),
        launcher=launcher,
    )


@dataclass
class LaunchResult:
    """Result of a launch request."""

    report: BatchReport | None = None
    mode: str = ""
    warnings: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.report is not None and self.report.all_ok

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result["mode"] = self.mode
        result["warnings"] = self.warnings
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def launch_apps(
    config_path: Path | None = None,
    app_name: str | None = None,
    group_tag: str | None = None,
    tags: list[str] | None = None,
    dry_run: bool = False,
    launcher: ProcessLauncher | None = None,
) -> LaunchResult:
    """Launch the selected apps.

    Args:
        config_path: Optional explicit config path.
        app_name: Launch only this app.
        group_tag: Launch every app carrying this tag.
        tags: Launch every app carrying any of these tags.
        dry_run: Simulate checks and launches.
        launcher: Optional launcher replacing the default one.

    Returns:
        LaunchResult with the batch report.
    """
    result = LaunchResult()

    try:
        engine = prepare_engine(config_path, dry_run=dry_run, launcher=launcher)
    except ConfigError as e:
        result.error = f"Error loading configuration: {e}"
        return result

    try:
        selection = select_apps(engine.config, app_name, group_tag, tags)
    except AppNotFoundError as e:
        result.error = str(e)
        return result

    result.mode = selection.mode
    result.warnings = selection.warnings
    logger.info("Execution mode: %s", selection.mode)

    result.report = engine.launch_batch(selection.apps)
    return result
