"""
Engine executor — gate, resolve and launch apps.

One Engine instance is one run: it owns the check cache (through its
evaluator), so a check runs at most once no matter how many apps
depend on it. Apps in a batch are processed strictly one after the
other, in the order given.

Flow per app:
    check? → skip │ gate → (denied → skip) → resolve → start detached
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from launchdeck.adapters.base import ProcessLauncher
from launchdeck.core.engine.checks import CheckEvaluator, SimulatedCheckEvaluator
from launchdeck.core.engine.gate import GateDecision, LaunchGate
from launchdeck.core.engine.resolver import CommandResolver, ResolvedCommand
from launchdeck.core.errors import (
    AppNotFoundError,
    LaunchdeckError,
    ProcessStartError,
)
from launchdeck.core.models.app import App
from launchdeck.core.models.config import AppConfig
from launchdeck.core.models.receipt import CheckResult, LaunchReceipt

logger = logging.getLogger(__name__)


@dataclass
class BatchReport:
    """Result of launching a batch of apps."""

    receipts: list[LaunchReceipt] = field(default_factory=list)
    dry_run: bool = False

    @property
    def total(self) -> int:
        return len(self.receipts)

    @property
    def launched(self) -> int:
        return sum(1 for r in self.receipts if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.receipts if r.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.receipts if r.skipped)

    @property
    def all_ok(self) -> bool:
        return self.failed == 0

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.launched > 0:
            return "partial"
        return "failed"

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "dry_run": self.dry_run,
            "total": self.total,
            "launched": self.launched,
            "failed": self.failed,
            "skipped": self.skipped,
            "receipts": [r.model_dump(mode="json") for r in self.receipts],
        }


class Engine:
    """The launch engine for one run."""

    def __init__(
        self,
        config: AppConfig,
        launcher: ProcessLauncher,
        evaluator: CheckEvaluator,
    ):
        self._config = config
        self._launcher = launcher
        self._evaluator = evaluator
        self.resolver = CommandResolver(config, evaluator)
        self.gate = LaunchGate(config, evaluator)

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def launcher(self) -> ProcessLauncher:
        return self._launcher

    @property
    def evaluator(self) -> CheckEvaluator:
        return self._evaluator

    @property
    def dry_run(self) -> bool:
        return self._launcher.simulated or self._evaluator.simulated

    def get_app(self, name: str) -> App:
        """Look up an app by name.

        Raises:
            AppNotFoundError: If no app has this name.
        """
        app = self._config.get_app(name)
        if app is None:
            raise AppNotFoundError(name)
        return app

    # ── Named operations ────────────────────────────────────────────

    def evaluate_check(self, name: str) -> CheckResult:
        """Evaluate the named check (memoized)."""
        return self._evaluator.evaluate(self.get_app(name))

    def resolve(self, name: str) -> ResolvedCommand:
        """Effective command of the named executable."""
        return self.resolver.resolve(self.get_app(name))

    def decide(self, name: str) -> GateDecision:
        """Gate decision for the named executable."""
        return self.gate.decide(self.get_app(name))

    def can_launch(self, name: str) -> bool:
        """Whether the named executable may be launched."""
        return self.gate.can_launch(self.get_app(name))

    # ── Launching ───────────────────────────────────────────────────

    def launch_app(self, app: App) -> LaunchReceipt:
        """Gate, resolve and start one app. Never raises.

        Per-app problems are captured in the receipt, naming the app
        and the underlying cause.
        """
        if not app.is_executable:
            return LaunchReceipt.failure(
                app=app.name,
                error=f"app '{app.name}' is not an executable type",
            )

        logger.info("Preparing to execute app: %s", app.name)

        try:
            allowed = self.gate.can_launch(app)
        except LaunchdeckError as e:
            return LaunchReceipt.failure(
                app=app.name,
                error=f"error checking dependencies for app '{app.name}': {e}",
                dry_run=self.dry_run,
            )

        if not allowed:
            logger.info("Skipping app '%s' - dependencies not satisfied", app.name)
            return LaunchReceipt.skip(
                app=app.name,
                reason="dependencies not satisfied",
                dry_run=self.dry_run,
            )

        try:
            resolved = self.resolver.resolve(app)
        except LaunchdeckError as e:
            return LaunchReceipt.failure(
                app=app.name,
                error=f"failed to resolve command for app '{app.name}': {e}",
                dry_run=self.dry_run,
            )

        logger.debug("Resolved command: %s", resolved.command_line)

        try:
            handle = self._launcher.run_detached(resolved.command, resolved.arguments)
        except ProcessStartError as e:
            return LaunchReceipt.failure(
                app=app.name,
                error=f"failed to start app '{app.name}': {e.reason}",
                command=resolved.command,
                arguments=resolved.arguments,
                dry_run=self.dry_run,
            )

        if handle.simulated:
            logger.info("[dry-run] Would execute app '%s': %s", app.name, resolved.command_line)
        else:
            logger.info("Launched app '%s' with PID %s", app.name, handle.pid)

        return LaunchReceipt.launched(
            app=app.name,
            command=resolved.command,
            arguments=resolved.arguments,
            pid=handle.pid,
            dry_run=handle.simulated,
            metadata={"source": resolved.source} if resolved.source else {},
        )

    def launch_batch(self, apps: list[App]) -> BatchReport:
        """Launch ``apps`` one at a time, in order. Always completes.

        Check apps are skipped. Failures are tallied and the batch moves
        on to the next app.
        """
        report = BatchReport(dry_run=self.dry_run)
        logger.info("Found %d app(s) to process", len(apps))

        for app in apps:
            if app.is_check:
                logger.debug("Skipping check app '%s' in execution", app.name)
                report.receipts.append(LaunchReceipt.skip(app=app.name, reason="check app"))
                continue

            receipt = self.launch_app(app)
            if receipt.failed:
                logger.error("%s", receipt.error)
            report.receipts.append(receipt)

        return report


def build_engine(
    config: AppConfig,
    dry_run: bool = False,
    check_timeout: float | None = None,
    launcher: ProcessLauncher | None = None,
) -> Engine:
    """Wire an engine for one run.

    Dry-run selects the simulated launcher and evaluator; otherwise the
    subprocess launcher and the real evaluator. An explicit ``launcher``
    replaces the default one (used by tests).
    """
    if launcher is None:
        if dry_run:
            from launchdeck.adapters.simulated import SimulatedLauncher

            launcher = SimulatedLauncher()
        else:
            from launchdeck.adapters.shell.process import SubprocessLauncher

            launcher = SubprocessLauncher(check_timeout=check_timeout)

    evaluator: CheckEvaluator
    if dry_run:
        evaluator = SimulatedCheckEvaluator(launcher)
    else:
        evaluator = CheckEvaluator(launcher)

    return Engine(config, launcher, evaluator)
