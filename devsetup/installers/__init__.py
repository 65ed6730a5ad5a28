"""
Built-in installers.

Concrete components implemented against the Installer contract.
``register_builtin_installers`` wires them into a registry; the
registry, not this list, decides the order they run in.
"""

from __future__ import annotations

from devsetup.core.console import Console
from devsetup.core.execution.command_runner import CommandRunner
from devsetup.core.execution.privileged import PrivilegedSession
from devsetup.core.installers.registry import InstallerRegistry
from devsetup.core.models.settings import Settings
from devsetup.installers.alacritty import AlacrittyInstaller
from devsetup.installers.apt import AptInstaller
from devsetup.installers.rust import RustInstaller

__all__ = [
    "AlacrittyInstaller",
    "AptInstaller",
    "RustInstaller",
    "register_builtin_installers",
]


def register_builtin_installers(
    registry: InstallerRegistry,
    session: PrivilegedSession,
    runner: CommandRunner,
    console: Console,
    settings: Settings | None = None,
) -> InstallerRegistry:
    """Register every built-in installer and return the registry."""
    settings = settings or Settings()
    registry.register(AptInstaller(session))
    registry.register(RustInstaller(session, runner, console))
    registry.register(
        AlacrittyInstaller(session, runner, console, settings=settings.installers.alacritty)
    )
    return registry
