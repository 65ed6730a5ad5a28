"""
Install use case — the full run from config file to report.

Loads settings, builds the shared runner/session and the registry of
built-in installers, asks which components to set up, and hands the
selection to the orchestrator. The CLI only renders what comes back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from devsetup.core.config.loader import ConfigError, load_settings
from devsetup.core.console import Console
from devsetup.core.engine.orchestrator import Orchestrator, RunReport
from devsetup.core.errors import DependencyError
from devsetup.core.execution.command_runner import CommandRunner
from devsetup.core.execution.privileged import PrivilegedSession
from devsetup.core.installers.registry import InstallerRegistry
from devsetup.core.models.settings import Settings
from devsetup.core.prompt import AutoConfirmPrompt, Prompt

logger = logging.getLogger(__name__)

SELECT_PROMPT = "Select components to install"


@dataclass
class InstallResult:
    """Result of an install run."""

    report: RunReport | None = None
    selected: list[str] = field(default_factory=list)
    settings: Settings | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and (self.report is None or self.report.all_ok)

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result
        result["selected"] = self.selected
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def build_registry(
    settings: Settings,
    prompt: Prompt,
    console: Console,
) -> InstallerRegistry:
    """One runner, one privileged session, all built-in installers."""
    from devsetup.installers import register_builtin_installers

    runner = CommandRunner(console)
    session = PrivilegedSession(runner, prompt, console)
    return register_builtin_installers(
        InstallerRegistry(), session, runner, console, settings
    )


def run_install(
    prompt: Prompt,
    console: Console | None = None,
    config_path: Path | None = None,
    only: list[str] | None = None,
    dry_run: bool = False,
    assume_yes: bool = False,
    settings: Settings | None = None,
    registry: InstallerRegistry | None = None,
) -> InstallResult:
    """Select and install components.

    Args:
        prompt: Interactive collaborator (confirmations, selection, password).
        console: Status output.
        config_path: Optional explicit config file.
        only: Install exactly these installers; skips the selection menu.
        dry_run: Report what would be installed without changing anything.
        assume_yes: Bypass confirmations (also enabled by ``auto_yes``).
        settings: Pre-loaded settings; loaded from ``config_path`` if None.
        registry: Optional pre-built registry.

    Returns:
        InstallResult with the orchestration report.
    """
    console = console or Console()
    result = InstallResult()

    # ── Load config ──────────────────────────────────────────────
    if settings is None:
        try:
            settings = load_settings(config_path)
        except ConfigError as e:
            result.error = str(e)
            return result
    result.settings = settings

    assume_yes = assume_yes or settings.auto_yes
    if assume_yes:
        prompt = AutoConfirmPrompt(inner=prompt)

    if registry is None:
        registry = build_registry(settings, prompt, console)

    # ── Validate the graph before asking anything ────────────────
    try:
        registry.resolve_order()
    except DependencyError as e:
        result.error = str(e)
        return result

    # ── Selection ────────────────────────────────────────────────
    names = registry.names()
    if only:
        unknown = [n for n in only if n not in registry]
        if unknown:
            result.error = f"Unknown installer(s): {', '.join(unknown)}"
            return result
        selected = [n for n in names if n in set(only)]
    else:
        indices = prompt.choose_many(SELECT_PROMPT, names, [True] * len(names))
        selected = [names[i] for i in sorted(indices) if 0 <= i < len(names)]
    result.selected = selected
    logger.info("Selected installers: %s", ", ".join(selected) or "(none)")

    # ── Orchestrate ──────────────────────────────────────────────
    orchestrator = Orchestrator(
        registry,
        prompt,
        console,
        dry_run=dry_run,
        assume_yes=assume_yes,
        skip_installed=settings.skip_installed,
    )
    try:
        result.report = orchestrator.run(selected)
    except DependencyError as e:
        result.error = str(e)

    return result
