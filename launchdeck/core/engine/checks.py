"""
Check evaluation — run check apps once per run and remember the answer.

The CheckResultCache is owned by one evaluator for one run. Once a
check's outcome is recorded it never changes: later consultations
return the cached value without spawning anything, even if the
environment has changed in between.
"""

from __future__ import annotations

import logging

from launchdeck.adapters.base import ProcessLauncher
from launchdeck.core.errors import (
    DependencyNotFoundError,
    DependencyWrongTypeError,
    TypeMismatchError,
)
from launchdeck.core.models.app import App
from launchdeck.core.models.config import AppConfig
from launchdeck.core.models.receipt import CheckResult

logger = logging.getLogger(__name__)


class CheckResultCache:
    """Append-only map of check name to outcome."""

    def __init__(self) -> None:
        self._results: dict[str, bool] = {}

    def get(self, name: str) -> bool | None:
        return self._results.get(name)

    def record(self, name: str, success: bool) -> bool:
        """Record an outcome. An existing entry is kept; the stored value is returned."""
        return self._results.setdefault(name, success)

    def __contains__(self, name: object) -> bool:
        return name in self._results

    def __len__(self) -> int:
        return len(self._results)

    def as_dict(self) -> dict[str, bool]:
        return dict(self._results)


def lookup_check(config: AppConfig, name: str) -> App:
    """Resolve a dependency name to a check app.

    Raises:
        DependencyNotFoundError: No app has this name.
        DependencyWrongTypeError: The app exists but is not a check.
    """
    app = config.get_app(name)
    if app is None:
        raise DependencyNotFoundError(name)
    if not app.is_check:
        raise DependencyWrongTypeError(name)
    return app


class CheckEvaluator:
    """Evaluate check apps through a process launcher, memoized per run."""

    simulated = False

    def __init__(self, launcher: ProcessLauncher, cache: CheckResultCache | None = None):
        self._launcher = launcher
        self._cache = cache if cache is not None else CheckResultCache()

    @property
    def cache(self) -> CheckResultCache:
        return self._cache

    def evaluate(self, app: App) -> CheckResult:
        """Evaluate a check, consulting the cache first.

        A check that fails to start counts as failed; the start error is
        returned as ``CheckResult.error`` and never raised.

        Raises:
            TypeMismatchError: If ``app`` is not a check.
        """
        if not app.is_check:
            raise TypeMismatchError(app.name, "check")

        cached = self._cache.get(app.name)
        if cached is not None:
            logger.debug("Using cached result for check '%s': %s", app.name, cached)
            return CheckResult(name=app.name, success=cached, cached=True)

        logger.info("Executing check: %s", app.name)
        logger.debug("Check command: %s", app.command_line)

        success, error = self._run(app)
        success = self._cache.record(app.name, success)

        if success:
            logger.info("Check '%s' succeeded", app.name)
        else:
            logger.info("Check '%s' failed", app.name)

        return CheckResult(
            name=app.name,
            success=success,
            simulated=self.simulated,
            error=error,
        )

    def _run(self, app: App) -> tuple[bool, str | None]:
        result = self._launcher.run_sync(app.command, app.args, quiet=True)
        if result.error is not None:
            logger.warning("Check '%s' could not run: %s", app.name, result.error)
            return False, result.error
        if result.return_code != 0:
            logger.debug("Check '%s' exited with code %s", app.name, result.return_code)
        return result.ok, None


class SimulatedCheckEvaluator(CheckEvaluator):
    """Dry-run evaluator: every check passes and nothing is spawned.

    Results are cached exactly like real evaluations. Dry-run output
    therefore shows the success branch of every dependency, which may
    differ from what a real run would pick.
    """

    simulated = True

    def __init__(
        self,
        launcher: ProcessLauncher | None = None,
        cache: CheckResultCache | None = None,
    ):
        self._launcher = launcher
        self._cache = cache if cache is not None else CheckResultCache()

    def _run(self, app: App) -> tuple[bool, str | None]:
        logger.info("[dry-run] Would execute check: %s", app.command_line)
        return True, None
