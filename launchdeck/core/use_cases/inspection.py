"""
Inspection use cases — resolve, gate and list executables.

These run checks (memoized for the run) but never launch anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from launchdeck.adapters.base import ProcessLauncher
from launchdeck.core.config.loader import ConfigError
from launchdeck.core.engine.executor import Engine
from launchdeck.core.engine.gate import GateDecision
from launchdeck.core.engine.resolver import ResolvedCommand
from launchdeck.core.errors import LaunchdeckError
from launchdeck.core.models.app import App
from launchdeck.core.use_cases.launch import prepare_engine, select_apps


@dataclass
class ResolveResult:
    """Effective command of one executable."""

    name: str = ""
    default: str = ""
    resolved: ResolvedCommand | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"name": self.name, "error": self.error}
        assert self.resolved is not None
        return {
            "name": self.name,
            "default": self.default,
            "command": self.resolved.command,
            "arguments": self.resolved.arguments,
            "source": self.resolved.source,
        }


@dataclass
class GateResult:
    """Launchability of one executable."""

    name: str = ""
    decision: GateDecision | None = None
    error: str | None = None

    @property
    def allowed(self) -> bool:
        return self.decision is not None and self.decision.allowed

    def to_dict(self) -> dict:
        if self.error:
            return {"name": self.name, "error": self.error}
        assert self.decision is not None
        return self.decision.to_dict()


def resolve_app(
    name: str,
    config_path: Path | None = None,
    dry_run: bool = False,
    launcher: ProcessLauncher | None = None,
) -> ResolveResult:
    """Resolve the effective command of the executable ``name``."""
    result = ResolveResult(name=name)
    try:
        engine = prepare_engine(config_path, dry_run=dry_run, launcher=launcher)
        app = engine.get_app(name)
        result.default = app.command_line
        result.resolved = engine.resolver.resolve(app)
    except (ConfigError, LaunchdeckError) as e:
        result.error = str(e)
    return result


def gate_app(
    name: str,
    config_path: Path | None = None,
    dry_run: bool = False,
    launcher: ProcessLauncher | None = None,
) -> GateResult:
    """Decide whether the executable ``name`` may be launched."""
    result = GateResult(name=name)
    try:
        engine = prepare_engine(config_path, dry_run=dry_run, launcher=launcher)
        result.decision = engine.decide(name)
    except (ConfigError, LaunchdeckError) as e:
        result.error = str(e)
    return result


@dataclass
class AppListing:
    """One executable in a listing."""

    name: str
    tags: list[str] = field(default_factory=list)
    default: str = ""
    resolved: str | None = None
    resolve_error: str | None = None
    dependencies: list[dict] = field(default_factory=list)

    @property
    def overridden(self) -> bool:
        return self.resolved is not None and self.resolved != self.default

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "tags": self.tags,
            "default": self.default,
            "resolved": self.resolved,
            "resolve_error": self.resolve_error,
            "dependencies": self.dependencies,
        }


@dataclass
class ListResult:
    """Executables matching a selection."""

    apps: list[AppListing] = field(default_factory=list)
    error: str | None = None

    @property
    def total(self) -> int:
        return len(self.apps)

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {"total": self.total, "apps": [a.to_dict() for a in self.apps]}


def _describe(engine: Engine, app: App, detailed: bool) -> AppListing:
    listing = AppListing(name=app.name, tags=list(app.tags), default=app.command_line)
    if not detailed:
        return listing

    try:
        listing.resolved = engine.resolver.resolve(app).command_line
    except LaunchdeckError as e:
        listing.resolve_error = str(e)

    listing.dependencies = [
        {
            "check": dep.check,
            "on_success": dep.action.on_success,
            "on_failure": dep.action.on_failure,
        }
        for dep in app.dependencies
    ]
    return listing


def list_apps(
    config_path: Path | None = None,
    app_name: str | None = None,
    group_tag: str | None = None,
    tags: list[str] | None = None,
    detailed: bool = False,
    dry_run: bool = False,
    launcher: ProcessLauncher | None = None,
) -> ListResult:
    """List executables in the selection.

    The detailed listing resolves each command, which runs checks.
    """
    result = ListResult()
    try:
        engine = prepare_engine(config_path, dry_run=dry_run, launcher=launcher)
        selection = select_apps(engine.config, app_name, group_tag, tags)
    except (ConfigError, LaunchdeckError) as e:
        result.error = str(e)
        return result

    result.apps = [
        _describe(engine, app, detailed)
        for app in selection.apps
        if app.is_executable
    ]
    return result
