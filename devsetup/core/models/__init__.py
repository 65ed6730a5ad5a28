"""
Domain models — Pydantic types for devsetup.

    from devsetup.core.models import InstallerOutcome, Settings
"""

from devsetup.core.models.outcome import InstallerOutcome
from devsetup.core.models.settings import (
    AlacrittySettings,
    InstallerSettings,
    Settings,
    TmuxSettings,
    ZedSettings,
    ZshSettings,
)

__all__ = [
    "AlacrittySettings",
    # outcome.py
    "InstallerOutcome",
    "InstallerSettings",
    # settings.py
    "Settings",
    "TmuxSettings",
    "ZedSettings",
    "ZshSettings",
]
