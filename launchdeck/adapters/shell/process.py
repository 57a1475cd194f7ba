"""
Subprocess launcher — the real process launcher.

Checks run through ``subprocess.run`` with their output discarded.
Executables are started with ``subprocess.Popen`` in a new session with
all three standard streams on the null device, so they keep running
after launchdeck exits and never write to its terminal. Nothing waits
on them.
"""

from __future__ import annotations

import logging
import subprocess
import time

from launchdeck.adapters.base import DetachedProcess, ProcessLauncher, ProcessResult
from launchdeck.core.errors import ProcessStartError

logger = logging.getLogger(__name__)


class SubprocessLauncher(ProcessLauncher):
    """Start real OS processes.

    Args:
        check_timeout: Seconds to wait for a synchronous run. None waits
            forever, so a hanging check blocks the whole batch.
    """

    def __init__(self, check_timeout: float | None = None):
        self._check_timeout = check_timeout

    @property
    def name(self) -> str:
        return "subprocess"

    @property
    def check_timeout(self) -> float | None:
        return self._check_timeout

    def run_sync(
        self,
        command: str,
        arguments: list[str],
        *,
        quiet: bool = True,
    ) -> ProcessResult:
        stream = subprocess.DEVNULL if quiet else None
        argv = [command, *arguments]

        logger.debug("Running: %s (timeout=%s)", " ".join(argv), self._check_timeout)
        start = time.monotonic()

        try:
            completed = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=stream,
                stderr=stream,
                timeout=self._check_timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            return ProcessResult(
                command=command,
                arguments=list(arguments),
                error=f"timed out after {self._check_timeout}s",
                duration_ms=int((time.monotonic() - start) * 1000),
            )
        except (OSError, ValueError) as e:
            return ProcessResult(
                command=command,
                arguments=list(arguments),
                error=f"failed to start: {e}",
                duration_ms=int((time.monotonic() - start) * 1000),
            )

        return ProcessResult(
            command=command,
            arguments=list(arguments),
            return_code=completed.returncode,
            duration_ms=int((time.monotonic() - start) * 1000),
        )

    def run_detached(self, command: str, arguments: list[str]) -> DetachedProcess:
        argv = [command, *arguments]
        logger.debug("Starting detached: %s", " ".join(argv))

        try:
            proc = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except (OSError, ValueError) as e:
            raise ProcessStartError(command, str(e)) from e

        return DetachedProcess(command=command, arguments=list(arguments), pid=proc.pid)
