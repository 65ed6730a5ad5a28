"""
Orchestrator — the install loop.

Takes the registry, resolves the dependency order, and walks every
installer through its lifecycle:

    check installed → confirm → pre_install → install → post_install

Failures are caught at the installer boundary and recorded as outcomes.
The run continues with installers that do not depend on the failed one.
Dependency errors are the exception: they propagate before anything
executes, because the order itself cannot be trusted.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field

from devsetup.core.console import Console
from devsetup.core.errors import PhaseError
from devsetup.core.installers.base import PHASES, Installer
from devsetup.core.installers.registry import InstallerRegistry
from devsetup.core.models.outcome import InstallerOutcome
from devsetup.core.prompt import Prompt

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    """Outcomes of one orchestration run, in execution order."""

    order: list[str] = field(default_factory=list)
    outcomes: list[InstallerOutcome] = field(default_factory=list)
    dry_run: bool = False

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.skipped)

    @property
    def all_ok(self) -> bool:
        return self.failed == 0

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.succeeded > 0:
            return "partial"
        return "failed"

    def outcome(self, installer: str) -> InstallerOutcome | None:
        for o in self.outcomes:
            if o.installer == installer:
                return o
        return None

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "dry_run": self.dry_run,
            "order": self.order,
            "total": self.total,
            "succeeded": self.succeeded,
            "skipped": self.skipped,
            "failed": self.failed,
            "outcomes": [o.model_dump(mode="json") for o in self.outcomes],
        }


class Orchestrator:
    """Drive registered installers through their lifecycle.

    Args:
        registry: Installers to run.
        prompt: Asked to confirm each install / reinstall.
        console: Status lines.
        dry_run: Report what would be installed; run no phase.
        assume_yes: Answer yes to every confirmation without asking.
        skip_installed: Skip installed components instead of offering
            a reinstall.
    """

    def __init__(
        self,
        registry: InstallerRegistry,
        prompt: Prompt,
        console: Console | None = None,
        *,
        dry_run: bool = False,
        assume_yes: bool = False,
        skip_installed: bool = False,
    ):
        self._registry = registry
        self._prompt = prompt
        self._console = console or Console()
        self._dry_run = dry_run
        self._assume_yes = assume_yes
        self._skip_installed = skip_installed

    def run(self, selected: Iterable[str] | None = None) -> RunReport:
        """Run the selected installers (all when None) in dependency order.

        Raises:
            DependencyError: The registry cannot be ordered. Nothing runs.
        """
        order = self._registry.resolve_order()
        wanted = set(selected) if selected is not None else None
        if wanted is not None:
            order = [inst for inst in order if inst.name in wanted]

        report = RunReport(order=[i.name for i in order], dry_run=self._dry_run)
        failed: set[str] = set()

        for installer in order:
            blocker = next((d for d in installer.dependencies() if d in failed), None)
            if blocker is not None:
                outcome = InstallerOutcome.failure(
                    installer.name,
                    error=f"dependency '{blocker}' failed",
                )
                self._console.error(f"Skipping {installer.name}: dependency '{blocker}' failed")
            else:
                outcome = self._run_one(installer)

            if outcome.failed:
                failed.add(installer.name)
            report.outcomes.append(outcome)

            status_marker = "✓" if outcome.ok else "✗" if outcome.failed else "⊘"
            logger.info("%s %s → %s", status_marker, installer.name, outcome.status)

        return report

    # ── Per-installer lifecycle ─────────────────────────────────

    def _run_one(self, installer: Installer) -> InstallerOutcome:
        name = installer.name
        start = time.monotonic()

        try:
            installed = installer.is_installed()
        except Exception as e:
            return self._failed(PhaseError(name, "check", e), start)

        if installed:
            self._console.success(f"{name} is already installed")
            if self._skip_installed:
                return InstallerOutcome.skip(
                    name, reason="already installed", was_installed=True,
                )
            question, default = installer.reinstall_prompt(), False
        else:
            question, default = f"Do you want to install {name}?", True

        if not self._confirm(question, default):
            return InstallerOutcome.skip(
                name, reason="declined", was_installed=installed,
            )

        if self._dry_run:
            self._console.step(f"Would install {name}")
            return InstallerOutcome.done(
                name,
                message="dry run",
                was_installed=installed,
                dry_run=True,
            )

        self._console.step(f"Installing {name}")
        for phase in PHASES:
            logger.debug("%s: %s", name, phase)
            try:
                getattr(installer, phase)()
            except Exception as e:
                return self._failed(PhaseError(name, phase, e), start, was_installed=installed)

        self._console.success(f"{name} installed successfully")
        return InstallerOutcome.done(
            name,
            was_installed=installed,
            duration_ms=int((time.monotonic() - start) * 1000),
        )

    def _confirm(self, question: str, default: bool) -> bool:
        if self._assume_yes:
            return True
        return self._prompt.confirm(question, default)

    def _failed(
        self,
        error: PhaseError,
        start: float,
        was_installed: bool | None = None,
    ) -> InstallerOutcome:
        error.__cause__ = error.cause
        logger.debug("%s", error, exc_info=error.cause)
        self._console.error(str(error))
        return InstallerOutcome.failure(
            error.installer,
            error=str(error.cause) or error.cause.__class__.__name__,
            phase=error.phase,
            was_installed=was_installed,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
