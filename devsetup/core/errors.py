"""
Error taxonomy — every failure the install engine can surface.

The runner and the privileged session raise these; the orchestrator
catches them at the installer boundary and turns them into outcomes.
Only dependency errors are allowed to abort a whole run, because the
execution order cannot be trusted once the graph is broken.
"""

from __future__ import annotations

from collections.abc import Sequence


class DevSetupError(Exception):
    """Base class for all devsetup errors."""


# ── Elevation ───────────────────────────────────────────────────


class AuthError(DevSetupError):
    """Administrator access was denied or could not be validated."""


# ── Subprocess ──────────────────────────────────────────────────


class CommandError(DevSetupError):
    """An external command could not be run to a successful exit."""

    def __init__(self, program: str, args: Sequence[str], message: str):
        self.program = program
        self.args_list = list(args)
        super().__init__(message)

    @property
    def command_line(self) -> str:
        return " ".join([self.program, *self.args_list])


class SpawnFailedError(CommandError):
    """The program could not be launched at all (not found, not executable)."""

    def __init__(self, program: str, args: Sequence[str], reason: str):
        self.reason = reason
        super().__init__(
            program,
            args,
            f"Failed to execute command: {' '.join([program, *args])} ({reason})",
        )


class NonZeroExitError(CommandError):
    """The program ran but exited with a failure status."""

    def __init__(self, program: str, args: Sequence[str], exit_code: int):
        self.exit_code = exit_code
        super().__init__(
            program,
            args,
            f"Command failed with exit code {exit_code}: {' '.join([program, *args])}",
        )


# ── Registry ────────────────────────────────────────────────────


class DuplicateNameError(DevSetupError):
    """Two installers were registered under the same name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Installer already registered: {name}")


class DependencyError(DevSetupError):
    """The dependency graph cannot produce a trustworthy execution order."""


class UnknownDependencyError(DependencyError):
    """An installer depends on a name that nobody registered."""

    def __init__(self, installer: str, dependency: str):
        self.installer = installer
        self.dependency = dependency
        super().__init__(
            f"Installer '{installer}' depends on unknown installer '{dependency}'"
        )


class CycleError(DependencyError):
    """The dependency relation contains at least one cycle."""

    def __init__(self, participants: Sequence[str]):
        self.participants = list(participants)
        super().__init__(
            "Dependency cycle detected between installers: "
            + ", ".join(self.participants)
        )


# ── Orchestration ───────────────────────────────────────────────


class PhaseError(DevSetupError):
    """A lifecycle phase of one installer failed.

    Carries which installer and which phase, with the original
    exception chained as ``__cause__`` and kept on ``cause``.
    """

    def __init__(self, installer: str, phase: str, cause: BaseException):
        self.installer = installer
        self.phase = phase
        self.cause = cause
        super().__init__(f"{_PHASE_LABELS.get(phase, phase)} failed for {installer}: {cause}")


_PHASE_LABELS = {
    "check": "Installation check",
    "pre_install": "Pre-installation check",
    "install": "Installation",
    "post_install": "Post-installation setup",
}
