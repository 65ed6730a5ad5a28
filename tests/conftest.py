"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from devsetup.core.console import RecordingConsole
from devsetup.core.installers.registry import InstallerRegistry


@pytest.fixture
def console() -> RecordingConsole:
    """A console that keeps every line in memory."""
    return RecordingConsole()


@pytest.fixture
def registry() -> InstallerRegistry:
    return InstallerRegistry()


@pytest.fixture
def events() -> list:
    """Shared lifecycle log for FakeInstaller instances."""
    return []


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temp dir so no test reads the real config."""
    xdg = tmp_path / "xdg"
    xdg.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    return xdg / "devsetup"
