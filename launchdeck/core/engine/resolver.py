"""
Command resolution — pick the concrete command line for an executable.

Dependencies are consulted in declaration order. The first dependency
whose check outcome has a command attached wins; later dependencies
are not evaluated. With no match the app's default command is used.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from launchdeck.core.engine.checks import CheckEvaluator, lookup_check
from launchdeck.core.errors import EmptyCommandError, TypeMismatchError
from launchdeck.core.models.app import App
from launchdeck.core.models.config import AppConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedCommand:
    """A command to execute. ``source`` names the dependency that chose it."""

    command: str
    arguments: list[str] = field(default_factory=list)
    source: str | None = None

    @property
    def is_default(self) -> bool:
        return self.source is None

    @property
    def command_line(self) -> str:
        return " ".join([self.command, *self.arguments])


def parse_command(command_line: str, source: str = "") -> tuple[str, list[str]]:
    """Split a command string on whitespace into program and arguments.

    No quoting or shell expansion is performed.

    Raises:
        EmptyCommandError: If the string holds no tokens.
    """
    parts = command_line.split()
    if not parts:
        raise EmptyCommandError(source)
    return parts[0], parts[1:]


class CommandResolver:
    """Resolve executables to commands using first-match-wins."""

    def __init__(self, config: AppConfig, evaluator: CheckEvaluator):
        self._config = config
        self._evaluator = evaluator

    def resolve(self, app: App) -> ResolvedCommand:
        """Determine the command to run for ``app``.

        Raises:
            TypeMismatchError: If ``app`` is a check.
            DependencyNotFoundError: A dependency names no app.
            DependencyWrongTypeError: A dependency names a non-check app.
            EmptyCommandError: The chosen branch command is blank.
        """
        if app.is_check:
            raise TypeMismatchError(app.name, "executable")

        if not app.dependencies:
            return ResolvedCommand(app.command, list(app.args))

        logger.debug("Resolving command for app '%s' with dependencies", app.name)

        for dep in app.dependencies:
            check = lookup_check(self._config, dep.check)

            result = self._evaluator.evaluate(check)
            if result.error:
                logger.debug(
                    "Error executing dependency check '%s': %s", dep.check, result.error
                )

            branch = dep.action.branch(result.success)
            if branch:
                label = "on_success" if result.success else "on_failure"
                logger.debug(
                    "Dependency '%s' %s, using %s command",
                    dep.check,
                    "succeeded" if result.success else "failed",
                    label,
                )
                command, arguments = parse_command(branch, source=dep.check)
                return ResolvedCommand(command, arguments, source=dep.check)

        logger.debug("No dependency action matched, using default command")
        return ResolvedCommand(app.command, list(app.args))
