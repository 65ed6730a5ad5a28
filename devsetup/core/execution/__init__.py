"""
Execution layer — subprocesses and privilege elevation.

    from devsetup.core.execution import CommandRunner, PrivilegedSession
"""

from devsetup.core.execution.command_runner import (
    CommandRunner,
    command_succeeds,
    is_command_available,
)
from devsetup.core.execution.privileged import PrivilegedSession

__all__ = [
    "CommandRunner",
    "PrivilegedSession",
    "command_succeeds",
    "is_command_available",
]
