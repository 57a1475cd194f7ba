"""
Launch gate — decide whether an executable may run at all.

Unlike the resolver, the gate evaluates every dependency. An app is
allowed when at least one dependency has a command for its check's
outcome; several satisfied dependencies are fine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from launchdeck.core.engine.checks import CheckEvaluator, lookup_check
from launchdeck.core.errors import TypeMismatchError
from launchdeck.core.models.app import App
from launchdeck.core.models.config import AppConfig

logger = logging.getLogger(__name__)


@dataclass
class GateDecision:
    """Outcome of gating one app."""

    app: str
    allowed: bool
    satisfied: list[str] = field(default_factory=list)
    outcomes: dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "app": self.app,
            "allowed": self.allowed,
            "satisfied": self.satisfied,
            "outcomes": self.outcomes,
        }


class LaunchGate:
    """Allow/deny executables based on their dependency outcomes."""

    def __init__(self, config: AppConfig, evaluator: CheckEvaluator):
        self._config = config
        self._evaluator = evaluator

    def decide(self, app: App) -> GateDecision:
        """Evaluate all dependencies of ``app`` and return the decision.

        Raises:
            TypeMismatchError: If ``app`` is a check.
            DependencyNotFoundError: A dependency names no app.
            DependencyWrongTypeError: A dependency names a non-check app.
        """
        if app.is_check:
            raise TypeMismatchError(app.name, "executable")

        decision = GateDecision(app=app.name, allowed=not app.dependencies)
        if not app.dependencies:
            return decision

        logger.debug("Checking if app '%s' can be executed", app.name)

        for dep in app.dependencies:
            check = lookup_check(self._config, dep.check)

            result = self._evaluator.evaluate(check)
            if result.error:
                logger.debug(
                    "Error executing dependency check '%s': %s", dep.check, result.error
                )
            decision.outcomes[dep.check] = result.success

            if dep.action.is_satisfied(result.success):
                decision.allowed = True
                decision.satisfied.append(dep.check)
                logger.debug(
                    "Dependency '%s' allows execution (success=%s)", dep.check, result.success
                )

        if not decision.allowed:
            logger.debug("No dependency satisfied for app '%s'", app.name)

        return decision

    def can_launch(self, app: App) -> bool:
        """Whether ``app`` may be launched."""
        return self.decide(app).allowed
