"""
Simulated launcher — dry-run stand-in for the subprocess launcher.

Every synchronous run reports exit status 0 and every detached launch
"starts" without a pid. Nothing is spawned.
"""

from __future__ import annotations

import logging

from launchdeck.adapters.base import DetachedProcess, ProcessLauncher, ProcessResult

logger = logging.getLogger(__name__)


class SimulatedLauncher(ProcessLauncher):
    """Launcher used in dry-run mode."""

    @property
    def name(self) -> str:
        return "simulated"

    @property
    def simulated(self) -> bool:
        return True

    def run_sync(
        self,
        command: str,
        arguments: list[str],
        *,
        quiet: bool = True,
    ) -> ProcessResult:
        logger.info("[dry-run] Would run: %s", " ".join([command, *arguments]))
        return ProcessResult(
            command=command,
            arguments=list(arguments),
            return_code=0,
            simulated=True,
        )

    def run_detached(self, command: str, arguments: list[str]) -> DetachedProcess:
        logger.info("[dry-run] Would start: %s", " ".join([command, *arguments]))
        return DetachedProcess(command=command, arguments=list(arguments), simulated=True)
