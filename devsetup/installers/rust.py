"""Rust toolchain via rustup."""

from __future__ import annotations

import os
from pathlib import Path

from devsetup.core.console import Console
from devsetup.core.execution.command_runner import CommandRunner
from devsetup.core.execution.privileged import PrivilegedSession
from devsetup.core.installers.base import Installer
from devsetup.installers.apt import AptInstaller

RUSTUP_SCRIPT = "curl --proto '=https' --tlsv1.2 -sSf https://sh.rustup.rs | sh -s -- -y"
BUILD_PACKAGES = ["build-essential", "curl"]


def cargo_home() -> Path:
    """``$CARGO_HOME``, or ``~/.cargo``."""
    env = os.environ.get("CARGO_HOME")
    return Path(env) if env else Path.home() / ".cargo"


class RustInstaller(Installer):
    """Install rustup and the stable toolchain into the user's cargo home."""

    NAME = "Rust"

    def __init__(self, session: PrivilegedSession, runner: CommandRunner, console: Console):
        self._session = session
        self._runner = runner
        self._console = console

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def description(self) -> str:
        return "Installs Rust programming language"

    def is_installed(self) -> bool:
        return (cargo_home() / "bin" / "cargo").exists()

    def pre_install(self) -> None:
        self._session.run_elevated("apt-get", ["install", "-y", *BUILD_PACKAGES])

    def install(self) -> None:
        self._runner.run("sh", ["-c", RUSTUP_SCRIPT])

    def post_install(self) -> None:
        self._console.info("Rust installed successfully. Restart your shell or run:")
        self._console.info('source "$HOME/.cargo/env"')

    def dependencies(self) -> list[str]:
        return [AptInstaller.NAME]
