"""
Mock launcher — scriptable test double for the process launcher.

Returns exit status 0 and a fake pid by default. Exit codes, start
errors and launch failures can be configured per command, and every
call is logged so tests can assert how often a command ran.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from launchdeck.adapters.base import DetachedProcess, ProcessLauncher, ProcessResult
from launchdeck.core.errors import ProcessStartError


@dataclass
class LauncherCall:
    """One recorded launcher call."""

    mode: str   # "sync" or "detached"
    command: str
    arguments: list[str] = field(default_factory=list)
    quiet: bool = True


class MockLauncher(ProcessLauncher):
    """Universal mock launcher for testing."""

    def __init__(self, launcher_name: str = "mock", first_pid: int = 1000):
        self._name = launcher_name
        self._next_pid = first_pid
        self._return_codes: dict[str, int] = {}
        self._sync_errors: dict[str, str] = {}
        self._start_failures: dict[str, str] = {}
        self._call_log: list[LauncherCall] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[LauncherCall]:
        """All calls this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def calls_for(self, command: str, mode: str | None = None) -> list[LauncherCall]:
        """Calls made for ``command``, optionally only of one mode."""
        return [
            c for c in self._call_log
            if c.command == command and (mode is None or c.mode == mode)
        ]

    def set_return_code(self, command: str, code: int) -> None:
        """Make synchronous runs of ``command`` exit with ``code``."""
        self._return_codes[command] = code
        self._sync_errors.pop(command, None)

    def set_sync_error(self, command: str, error: str = "No such file or directory") -> None:
        """Make synchronous runs of ``command`` fail to start."""
        self._sync_errors[command] = error

    def set_start_failure(self, command: str, reason: str = "Mock start failure") -> None:
        """Make detached launches of ``command`` raise ProcessStartError."""
        self._start_failures[command] = reason

    def run_sync(
        self,
        command: str,
        arguments: list[str],
        *,
        quiet: bool = True,
    ) -> ProcessResult:
        self._call_log.append(LauncherCall("sync", command, list(arguments), quiet))

        if command in self._sync_errors:
            return ProcessResult(
                command=command,
                arguments=list(arguments),
                error=self._sync_errors[command],
            )

        return ProcessResult(
            command=command,
            arguments=list(arguments),
            return_code=self._return_codes.get(command, 0),
        )

    def run_detached(self, command: str, arguments: list[str]) -> DetachedProcess:
        self._call_log.append(LauncherCall("detached", command, list(arguments)))

        if command in self._start_failures:
            raise ProcessStartError(command, self._start_failures[command])

        pid = self._next_pid
        self._next_pid += 1
        return DetachedProcess(command=command, arguments=list(arguments), pid=pid)

    def reset(self) -> None:
        """Clear call log and configured behaviour."""
        self._call_log.clear()
        self._return_codes.clear()
        self._sync_errors.clear()
        self._start_failures.clear()
