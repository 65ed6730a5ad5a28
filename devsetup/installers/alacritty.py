"""Alacritty terminal, built with cargo."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from devsetup.core.console import Console
from devsetup.core.execution.command_runner import CommandRunner
from devsetup.core.execution.privileged import PrivilegedSession
from devsetup.core.installers.base import Installer
from devsetup.core.models.settings import AlacrittySettings
from devsetup.installers.apt import AptInstaller
from devsetup.installers.rust import RustInstaller, cargo_home

logger = logging.getLogger(__name__)

BUILD_PACKAGES = [
    "cmake",
    "pkg-config",
    "libfreetype6-dev",
    "libfontconfig1-dev",
    "libxcb-xfixes0-dev",
    "libxkbcommon-dev",
    "python3",
]

THEMES: dict[str, dict[str, Any]] = {
    "one_dark": {
        "primary": {"background": "#282c34", "foreground": "#abb2bf"},
        "normal": {
            "black": "#282c34",
            "red": "#e06c75",
            "green": "#98c379",
            "yellow": "#e5c07b",
            "blue": "#61afef",
            "magenta": "#c678dd",
            "cyan": "#56b6c2",
            "white": "#abb2bf",
        },
    },
}


def render_config(settings: AlacrittySettings) -> str:
    """Build alacritty.yml text from the user's settings.

    Unknown themes fall back to one_dark.
    """
    family = settings.font_family
    data = {
        "window": {
            "padding": {"x": 10, "y": 10},
            "dynamic_padding": True,
            "decorations": "full",
            "opacity": settings.opacity,
        },
        "font": {
            "normal": {"family": family, "style": "Regular"},
            "bold": {"family": family, "style": "Bold"},
            "italic": {"family": family, "style": "Italic"},
            "size": settings.font_size,
        },
        "colors": THEMES.get(settings.theme, THEMES["one_dark"]),
    }
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)


class AlacrittyInstaller(Installer):
    """Install Alacritty with ``cargo install`` and write a default config."""

    NAME = "Alacritty"

    def __init__(
        self,
        session: PrivilegedSession,
        runner: CommandRunner,
        console: Console,
        settings: AlacrittySettings | None = None,
        config_dir: Path | None = None,
    ):
        self._session = session
        self._runner = runner
        self._console = console
        self._settings = settings or AlacrittySettings()
        self._config_dir = config_dir

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def description(self) -> str:
        return "Fast GPU-accelerated terminal emulator"

    @property
    def config_dir(self) -> Path:
        return self._config_dir or Path.home() / ".config" / "alacritty"

    def is_installed(self) -> bool:
        return (cargo_home() / "bin" / "alacritty").exists()

    def pre_install(self) -> None:
        if self.theme_missing():
            logger.warning(
                "Unknown Alacritty theme '%s', using one_dark", self._settings.theme
            )
        self._session.run_elevated("apt-get", ["install", "-y", *BUILD_PACKAGES])

    def install(self) -> None:
        cargo = cargo_home() / "bin" / "cargo"
        self._runner.run(str(cargo), ["install", "alacritty"])

    def post_install(self) -> None:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        config_path = self.config_dir / "alacritty.yml"
        config_path.write_text(render_config(self._settings), encoding="utf-8")
        self._console.info(f"Alacritty configuration written to {config_path}")

    def dependencies(self) -> list[str]:
        return [RustInstaller.NAME, AptInstaller.NAME]

    def theme_missing(self) -> bool:
        return self._settings.theme not in THEMES
