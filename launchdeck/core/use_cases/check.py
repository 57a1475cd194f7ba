"""
Check use case — run one check app and report its outcome.

Unlike engine evaluation, the check's own output is shown and the
exit code is reported. The result is not memoized.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from launchdeck.adapters.base import ProcessLauncher
from launchdeck.core.config.loader import ConfigError
from launchdeck.core.errors import AppNotFoundError, TypeMismatchError
from launchdeck.core.use_cases.launch import prepare_engine


@dataclass
class CheckReport:
    """Outcome of running a check for display."""

    name: str = ""
    command_line: str = ""
    success: bool = False
    return_code: int | None = None
    simulated: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "command": self.command_line,
            "success": self.success,
            "return_code": self.return_code,
            "simulated": self.simulated,
            "error": self.error,
        }


def run_check(
    name: str,
    config_path: Path | None = None,
    dry_run: bool = False,
    launcher: ProcessLauncher | None = None,
    quiet: bool = False,
) -> CheckReport:
    """Run the check app ``name`` and report the result.

    Args:
        name: Name of a check app.
        config_path: Optional explicit config path.
        dry_run: Simulate the run.
        launcher: Optional launcher replacing the default one.
        quiet: Suppress the check's own output.
    """
    report = CheckReport(name=name)

    try:
        engine = prepare_engine(config_path, dry_run=dry_run, launcher=launcher)
        app = engine.get_app(name)
        if not app.is_check:
            raise TypeMismatchError(name, "check")
    except (ConfigError, AppNotFoundError, TypeMismatchError) as e:
        report.error = str(e)
        return report

    report.command_line = app.command_line

    result = engine.launcher.run_sync(app.command, app.args, quiet=quiet)
    report.success = result.ok
    report.return_code = result.return_code
    report.simulated = result.simulated
    report.error = result.error
    return report
