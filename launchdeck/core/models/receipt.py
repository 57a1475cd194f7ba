"""
Check results and launch receipts — what the engine hands back.

A CheckResult is the outcome of one check consultation (cached or
fresh). A LaunchReceipt is the outcome of processing one app in a
launch: launched, skipped, or failed. Per-app errors are captured in
the receipt so a batch can keep going.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class CheckResult(BaseModel):
    """Outcome of evaluating a check app."""

    name: str
    success: bool
    cached: bool = False
    simulated: bool = False
    error: str | None = None   # non-fatal diagnostic, e.g. failed to start


class LaunchReceipt(BaseModel):
    """Result of processing one app during a launch."""

    app: str
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)

    command: str = ""
    arguments: list[str] = Field(default_factory=list)
    pid: int | None = None
    dry_run: bool = False

    reason: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the app was launched."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether processing the app failed."""
        return self.status == "failed"

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @property
    def command_line(self) -> str:
        return " ".join([self.command, *self.arguments])

    @classmethod
    def launched(
        cls,
        app: str,
        command: str,
        arguments: list[str],
        pid: int | None = None,
        **kwargs: Any,
    ) -> LaunchReceipt:
        """Create a receipt for a started (or simulated) launch."""
        return cls(
            app=app,
            status="ok",
            command=command,
            arguments=list(arguments),
            pid=pid,
            **kwargs,
        )

    @classmethod
    def failure(cls, app: str, error: str, **kwargs: Any) -> LaunchReceipt:
        """Create a failure receipt."""
        return cls(app=app, status="failed", error=error, **kwargs)

    @classmethod
    def skip(cls, app: str, reason: str = "", **kwargs: Any) -> LaunchReceipt:
        """Create a skip receipt."""
        return cls(app=app, status="skipped", reason=reason, **kwargs)
