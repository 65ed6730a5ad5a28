"""
Installer contract and registry.

    from devsetup.core.installers import Installer, InstallerRegistry
"""

from devsetup.core.installers.base import PHASES, Installer
from devsetup.core.installers.registry import InstallerRegistry

__all__ = [
    "PHASES",
    "Installer",
    "InstallerRegistry",
]
