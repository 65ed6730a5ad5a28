"""
Privileged session — one sudo grant shared by every installer.

Created once at startup and handed to each installer that needs
administrator rights. The first caller pays the authentication cost;
everyone after that reuses the cached grant for the rest of the process.

Security invariants:
- The password is piped via stdin only (``sudo -S``)
- The password never appears in argv or the environment
- The password is never logged, never stored on the session
- A failed attempt does not poison the cache; a later call may retry
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Sequence

import click

from devsetup.core.console import Console
from devsetup.core.errors import AuthError, CommandError
from devsetup.core.execution.command_runner import CommandRunner
from devsetup.core.prompt import Prompt

logger = logging.getLogger(__name__)

PASSWORD_PROMPT = "🔒 Enter your password"


class PrivilegedSession:
    """Process-wide cache of "sudo access validated".

    The flag and the whole probe/prompt/authenticate flow sit behind one
    lock, so concurrent callers produce at most one password prompt.
    Callers that were already waiting while an attempt failed get that
    attempt's AuthError instead of being prompted again.

    Args:
        runner: Runs the probe, the authentication and elevated commands.
        prompt: Asked for the password when the probe fails.
        console: Status lines ("requires administrator privileges").
        as_root: Override root detection. None means ``os.geteuid() == 0``.
        sudo_program: The elevation program (default ``sudo``).
    """

    def __init__(
        self,
        runner: CommandRunner,
        prompt: Prompt,
        console: Console | None = None,
        *,
        as_root: bool | None = None,
        sudo_program: str = "sudo",
    ):
        self._runner = runner
        self._prompt = prompt
        self._console = console or runner.console
        self._as_root = _is_root() if as_root is None else as_root
        self._sudo = sudo_program

        self._lock = threading.Lock()
        self._granted = False
        self._attempts = 0
        self._last_error: AuthError | None = None

    @property
    def granted(self) -> bool:
        with self._lock:
            return self._granted

    @property
    def as_root(self) -> bool:
        return self._as_root

    def ensure_access(self) -> None:
        """Make sure elevated commands can run, prompting at most once.

        Raises:
            AuthError: Authentication failed or could not be attempted.
        """
        seen_attempts = self._attempts

        with self._lock:
            if self._granted:
                return

            # Someone else finished an attempt while we were waiting on
            # the lock and it failed: share that outcome.
            if self._attempts != seen_attempts and self._last_error is not None:
                raise self._last_error

            if self._as_root:
                logger.debug("Running as root, no sudo needed")
                self._granted = True
                return

            if self._runner.succeeds(self._sudo, ["-n", "true"]):
                logger.debug("sudo credentials already cached")
                self._granted = True
                return

            try:
                self._authenticate()
            except AuthError as e:
                self._attempts += 1
                self._last_error = e
                raise

            self._attempts += 1
            self._last_error = None
            self._granted = True

    def _authenticate(self) -> None:
        """Ask for the password and validate it with ``sudo -S -v``."""
        self._console.warning("This operation requires administrator privileges.")

        try:
            password = self._prompt.secret(PASSWORD_PROMPT)
        except (EOFError, click.Abort) as e:
            raise AuthError("Failed to read password") from e

        try:
            self._runner.run(
                self._sudo,
                ["-S", "-v"],
                stdin_data=password + "\n",
                quiet=True,
            )
        except CommandError as e:
            logger.info("sudo authentication failed: %s", e)
            raise AuthError(
                "Authentication failed. Please check your password and try again."
            ) from e
        finally:
            del password

        self._console.write_line("Authentication successful.", fg="green")

    def run_elevated(self, program: str, args: Sequence[str] = ()) -> None:
        """Run a command with administrator rights.

        Raises:
            AuthError: Access could not be obtained.
            CommandError: The command itself failed.
        """
        self.ensure_access()
        if self._as_root:
            self._runner.run(program, args)
        else:
            self._runner.run(self._sudo, [program, *args])


def _is_root() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0
