"""Adapters — process launchers the engine talks to.

Public re-exports for convenient access.
"""

from launchdeck.adapters.base import DetachedProcess, ProcessLauncher, ProcessResult
from launchdeck.adapters.mock import MockLauncher
from launchdeck.adapters.shell.process import SubprocessLauncher
from launchdeck.adapters.simulated import SimulatedLauncher

__all__ = [
    "DetachedProcess",
    "MockLauncher",
    "ProcessLauncher",
    "ProcessResult",
    "SimulatedLauncher",
    "SubprocessLauncher",
]
