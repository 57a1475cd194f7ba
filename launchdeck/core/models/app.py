"""
App model — a named unit of work declared in the configuration.

Apps are either checks (run synchronously, exit status decides) or
executables (started detached and left running). An executable may
depend on checks; each dependency carries the command to use when the
check succeeds and/or fails.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AppKind(str, Enum):
    """The closed set of app kinds."""

    CHECK = "check"
    EXECUTABLE = "executable"


class DependencyAction(BaseModel):
    """What to run depending on one check's outcome.

    Both, either or neither side may be set. Neither means the
    dependency never overrides the command.
    """

    on_success: str = ""
    on_failure: str = ""

    def branch(self, success: bool) -> str:
        """The command string for the given check outcome ('' if unset)."""
        return self.on_success if success else self.on_failure

    def is_satisfied(self, success: bool) -> bool:
        """Whether this action has a command for the given outcome."""
        return self.branch(success) != ""


class Dependency(BaseModel):
    """One (check name, action) pair of an executable."""

    check: str
    action: DependencyAction = Field(default_factory=DependencyAction)


def _coerce_dependencies(value: Any) -> list[Any]:
    """Accept the mapping form and the list form of ``dependencies``.

    Mapping form keeps insertion order from the config file::

        {"net": {"on_success": "app --online"}}

    List form::

        [{"check": "net", "on_success": "app --online"}]
    """
    if value is None:
        return []
    if isinstance(value, dict):
        return [
            {"check": name, "action": action or {}}
            for name, action in value.items()
        ]
    if isinstance(value, list):
        items: list[Any] = []
        for entry in value:
            if isinstance(entry, dict) and "action" not in entry:
                entry = {
                    "check": entry.get("check"),
                    "action": {k: v for k, v in entry.items() if k != "check"},
                }
            items.append(entry)
        return items
    return value


class App(BaseModel):
    """A configured app.

    ``kind`` is read from the ``type`` key of the config file.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    kind: AppKind = Field(alias="type")
    command: str
    args: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    dependencies: list[Dependency] = Field(default_factory=list)

    @field_validator("dependencies", mode="before")
    @classmethod
    def _normalize_dependencies(cls, value: Any) -> Any:
        return _coerce_dependencies(value)

    @field_validator("args", "tags", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_check(self) -> bool:
        return self.kind is AppKind.CHECK

    @property
    def is_executable(self) -> bool:
        return self.kind is AppKind.EXECUTABLE

    @property
    def command_line(self) -> str:
        """Default command and arguments joined for display."""
        return " ".join([self.command, *self.args])

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def dependency_names(self) -> list[str]:
        return [d.check for d in self.dependencies]
