"""
Installer base — the contract between the engine and components.

Every installable component (a toolchain, a terminal, an editor)
implements this interface. The orchestrator only talks to installers
through it and never knows what a concrete installer does.

To add a component:
    1. Subclass Installer
    2. Implement name, description, is_installed and the three phases
    3. Declare dependencies by installer name
    4. Register it with the InstallerRegistry
"""

from __future__ import annotations

from abc import ABC, abstractmethod

PHASES: tuple[str, ...] = ("pre_install", "install", "post_install")


class Installer(ABC):
    """Abstract base class for all installers.

    Phases raise on failure. The orchestrator wraps whatever they raise
    with the installer name and phase, so implementations should let
    errors propagate rather than print and return.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique installer identifier, also used in dependency lists."""

    @property
    @abstractmethod
    def description(self) -> str:
        """One-line human description."""

    @abstractmethod
    def is_installed(self) -> bool:
        """Probe whether the component is present.

        Must not change system state.
        """

    @abstractmethod
    def pre_install(self) -> None:
        """Prerequisites, e.g. build dependencies."""

    @abstractmethod
    def install(self) -> None:
        """The primary install action."""

    @abstractmethod
    def post_install(self) -> None:
        """Finalization: generated config, follow-up instructions.

        A failure here is reported but does not undo ``install``.
        """

    def dependencies(self) -> list[str]:
        """Names of installers that must run before this one."""
        return []

    def reinstall_prompt(self) -> str:
        """Question asked when the component is already installed."""
        return f"Are you sure reinstalling {self.name}?"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
