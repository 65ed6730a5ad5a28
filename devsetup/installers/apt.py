"""APT update & upgrade."""

from __future__ import annotations

from devsetup.core.execution.command_runner import command_succeeds
from devsetup.core.execution.privileged import PrivilegedSession
from devsetup.core.installers.base import Installer


class AptInstaller(Installer):
    """Refresh package lists, upgrade, and autoremove.

    "Installed" here means there is nothing left to upgrade.
    """

    NAME = "APT Update & Upgrade"

    def __init__(self, session: PrivilegedSession):
        self._session = session

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def description(self) -> str:
        return "Updates and upgrades Ubuntu packages"

    def is_installed(self) -> bool:
        return command_succeeds("bash", ["-c", "apt-get -s upgrade | grep -q '^0 upgraded'"])

    def pre_install(self) -> None:
        self._session.ensure_access()

    def install(self) -> None:
        self._session.run_elevated("apt-get", ["update", "-y"])
        self._session.run_elevated("apt-get", ["upgrade", "-y"])

    def post_install(self) -> None:
        self._session.run_elevated("apt-get", ["autoremove", "-y"])

    def reinstall_prompt(self) -> str:
        return "Packages are up to date. Run update & upgrade anyway?"
