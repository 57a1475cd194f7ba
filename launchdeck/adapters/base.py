"""
Process launcher base — the contract between the engine and the OS.

The engine never spawns processes itself. It asks a ProcessLauncher
for one of two things:

    run_sync      run to completion, report the exit status (checks)
    run_detached  start in a new session and return at once (executables)

Real, simulated (dry-run) and mock launchers all satisfy this contract,
so the engine carries no dry-run branches of its own.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class ProcessResult(BaseModel):
    """Outcome of a synchronous run.

    ``return_code`` is None when the process never ran to completion
    (failed to start, timed out); ``error`` then says why.
    """

    command: str
    arguments: list[str] = Field(default_factory=list)
    return_code: int | None = None
    error: str | None = None
    duration_ms: int = 0
    simulated: bool = False

    @property
    def ok(self) -> bool:
        """Exit status 0 is success, anything else is failure."""
        return self.error is None and self.return_code == 0


class DetachedProcess(BaseModel):
    """Handle of a detached launch. ``pid`` is None when simulated."""

    command: str
    arguments: list[str] = Field(default_factory=list)
    pid: int | None = None
    simulated: bool = False


class ProcessLauncher(ABC):
    """Abstract base class for process launchers.

    ``run_sync`` never raises: start failures are reported in the
    ProcessResult. ``run_detached`` raises ProcessStartError, because
    a failed launch must reach the caller.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The launcher identifier (e.g., 'subprocess', 'simulated')."""

    @property
    def simulated(self) -> bool:
        """Whether this launcher only pretends to start processes."""
        return False

    @abstractmethod
    def run_sync(
        self,
        command: str,
        arguments: list[str],
        *,
        quiet: bool = True,
    ) -> ProcessResult:
        """Run a command and wait for it to exit.

        Args:
            command: Program to run.
            arguments: Argument list.
            quiet: Suppress the child's stdout/stderr.
        """

    @abstractmethod
    def run_detached(self, command: str, arguments: list[str]) -> DetachedProcess:
        """Start a command in its own session and return without waiting.

        Raises:
            ProcessStartError: If the process could not be started.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
