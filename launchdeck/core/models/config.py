"""
App catalog — the full set of apps loaded from one config file.

The catalog enforces the load-time guarantees: unique names, a
non-empty default command for every app, and every dependency name
refers to an existing app. Whether that app is a check is verified
later by the engine.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from launchdeck.core.models.app import App


class AppConfig(BaseModel):
    """Root of a launchdeck configuration file."""

    apps: list[App] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_apps(self) -> AppConfig:
        names: set[str] = set()
        for app in self.apps:
            if app.name in names:
                raise ValueError(f"duplicate app name: {app.name}")
            names.add(app.name)
            if not app.command.strip():
                raise ValueError(f"app '{app.name}' has empty command")

        for app in self.apps:
            for dep in app.dependencies:
                if dep.check not in names:
                    raise ValueError(
                        f"app '{app.name}' has dependency on non-existent app '{dep.check}'"
                    )
        return self

    def get_app(self, name: str) -> App | None:
        """Look up an app by name."""
        for app in self.apps:
            if app.name == name:
                return app
        return None

    def get_apps_by_tag(self, tag: str) -> list[App]:
        """All apps carrying ``tag``, in config order."""
        return [a for a in self.apps if a.has_tag(tag)]

    def get_apps_by_tags(self, tags: list[str]) -> list[App]:
        """All apps carrying at least one of ``tags``. Empty = every app."""
        if not tags:
            return list(self.apps)
        wanted = set(tags)
        return [a for a in self.apps if wanted.intersection(a.tags)]

    @property
    def checks(self) -> list[App]:
        return [a for a in self.apps if a.is_check]

    @property
    def executables(self) -> list[App]:
        return [a for a in self.apps if a.is_executable]
