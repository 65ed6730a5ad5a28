"""
Installer outcome — the per-installer result of an orchestration run.

Phases raise; the orchestrator catches at the installer boundary and
records one of these instead, so a single failing component never
hides what happened to the others.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class InstallerOutcome(BaseModel):
    """Terminal state of one installer in one run: done, skipped or failed."""

    installer: str
    status: Literal["done", "skipped", "failed"] = "done"

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    was_installed: bool | None = None   # None = never checked
    dry_run: bool = False
    phase: str | None = None            # failing phase, if any
    message: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "done"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @classmethod
    def done(cls, installer: str, message: str = "", **kwargs: Any) -> InstallerOutcome:
        """Create a success outcome."""
        return cls(installer=installer, status="done", message=message, **kwargs)

    @classmethod
    def skip(cls, installer: str, reason: str = "", **kwargs: Any) -> InstallerOutcome:
        """Create a skip outcome."""
        return cls(installer=installer, status="skipped", message=reason, **kwargs)

    @classmethod
    def failure(
        cls,
        installer: str,
        error: str,
        phase: str | None = None,
        **kwargs: Any,
    ) -> InstallerOutcome:
        """Create a failure outcome."""
        return cls(installer=installer, status="failed", error=error, phase=phase, **kwargs)
