"""
Error taxonomy for the launch engine.

Configuration-shape errors (wrong app kind, bad dependency references,
empty override commands) abort only the app being processed. Start
failures of a detached launch are the only process errors that count
against a batch; start failures of a check degrade to "check failed".
"""

from __future__ import annotations


class LaunchdeckError(Exception):
    """Base class for all engine errors."""


class TypeMismatchError(LaunchdeckError):
    """An operation was given an app of the wrong kind."""

    def __init__(self, app_name: str, expected: str):
        self.app_name = app_name
        self.expected = expected
        article = "an" if expected[:1] in "aeiou" else "a"
        super().__init__(f"app '{app_name}' is not {article} {expected} type")


class DependencyError(LaunchdeckError):
    """A dependency reference could not be used."""

    def __init__(self, dependency: str, message: str):
        self.dependency = dependency
        super().__init__(message)


class DependencyNotFoundError(DependencyError):
    def __init__(self, dependency: str):
        super().__init__(dependency, f"dependency '{dependency}' not found")


class DependencyWrongTypeError(DependencyError):
    def __init__(self, dependency: str):
        super().__init__(dependency, f"dependency '{dependency}' is not a check type")


class EmptyCommandError(LaunchdeckError):
    """A success/failure command string contained no tokens."""

    def __init__(self, source: str = ""):
        self.source = source
        detail = f" (from dependency '{source}')" if source else ""
        super().__init__(f"empty command string{detail}")


class ProcessStartError(LaunchdeckError):
    """The OS refused to start a process (binary missing, permissions, ...)."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"failed to start '{command}': {reason}")


class AppNotFoundError(LaunchdeckError):
    """No app with the requested name exists in the configuration."""

    def __init__(self, app_name: str):
        self.app_name = app_name
        super().__init__(f"app '{app_name}' not found")
