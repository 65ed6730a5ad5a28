"""
Command runner — the single place installers launch external programs.

Each invocation gets its own process handle and two independent pipes.
stdout is drained on a dedicated thread while the caller drains stderr,
so a child that fills one pipe while we block on the other can never
deadlock us. Lines are forwarded to the console as they arrive; order
is preserved within each stream, not across them. Output is decoded as
UTF-8, with invalid bytes replaced rather than raised.

Failures are raised, never retried here:
    - SpawnFailedError  — the program could not be launched
    - NonZeroExitError  — the program exited with a failure status
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import threading
import time
from collections.abc import Callable, Mapping, Sequence
from typing import IO

from devsetup.core.console import Console
from devsetup.core.errors import NonZeroExitError, SpawnFailedError

logger = logging.getLogger(__name__)


def _drain(
    stream: IO[str],
    sink: Callable[[str], None],
    failures: list[BaseException],
) -> None:
    """Forward every line of ``stream`` to ``sink`` until EOF.

    A sink that raises stops receiving lines, but the stream is still
    read to EOF so the child never blocks on a full pipe. The first
    sink error is appended to ``failures`` for the caller to re-raise.
    """
    with stream:
        for line in stream:
            if failures:
                continue
            try:
                sink(line.rstrip("\r\n"))
            except Exception as e:
                failures.append(e)


def _discard(line: str) -> None:
    pass


class CommandRunner:
    """Run external programs with live, line-by-line output.

    Args:
        console: Where streamed lines and the ``$ command`` echo go.
    """

    def __init__(self, console: Console | None = None):
        self._console = console or Console()

    @property
    def console(self) -> Console:
        return self._console

    def run(
        self,
        program: str,
        args: Sequence[str] = (),
        *,
        stdin_data: str | None = None,
        quiet: bool = False,
        env_overrides: Mapping[str, str] | None = None,
        cwd: str | None = None,
    ) -> None:
        """Run ``program`` with ``args`` and wait for it to finish.

        Args:
            program: Executable name or path.
            args: Argument list (never passed through a shell).
            stdin_data: Text written to the child's stdin, which is then
                closed. Used to hand secrets over without argv exposure.
            quiet: Drain both streams but do not print them, and do not
                echo the command line.
            env_overrides: Extra environment variables for the child.
            cwd: Working directory for the child.

        Raises:
            SpawnFailedError: The program could not be started.
            NonZeroExitError: The program exited with a non-zero status.
        """
        args = list(args)
        command_line = " ".join([program, *args])

        if not quiet:
            self._console.command(command_line)

        env = None
        if env_overrides:
            env = os.environ.copy()
            for key, value in env_overrides.items():
                env[key] = os.path.expandvars(value)

        start = time.monotonic()
        try:
            proc = subprocess.Popen(
                [program, *args],
                stdin=subprocess.PIPE if stdin_data is not None else subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
                env=env,
                cwd=cwd,
            )
        except OSError as e:
            logger.debug("Spawn failed for %s: %s", command_line, e)
            raise SpawnFailedError(program, args, e.strerror or str(e)) from e

        assert proc.stdout is not None and proc.stderr is not None

        if stdin_data is not None:
            assert proc.stdin is not None
            try:
                proc.stdin.write(stdin_data)
            except BrokenPipeError:
                # Child exited without reading; its exit status tells the story.
                pass
            finally:
                try:
                    proc.stdin.close()
                except BrokenPipeError:
                    pass

        out_sink = _discard if quiet else self._console.stdout_line
        err_sink = _discard if quiet else self._console.stderr_line

        out_failures: list[BaseException] = []
        err_failures: list[BaseException] = []
        stdout_worker = threading.Thread(
            target=_drain,
            args=(proc.stdout, out_sink, out_failures),
            name=f"stdout-drain:{program}",
            daemon=True,
        )
        stdout_worker.start()
        try:
            _drain(proc.stderr, err_sink, err_failures)
        finally:
            stdout_worker.join()
            returncode = proc.wait()

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("%s exited %d after %dms", command_line, returncode, elapsed_ms)

        failures = out_failures + err_failures
        if failures:
            raise failures[0]

        if returncode != 0:
            raise NonZeroExitError(program, args, returncode)

    def succeeds(self, program: str, args: Sequence[str] = ()) -> bool:
        """Quiet probe through this runner; see ``command_succeeds``."""
        return command_succeeds(program, args)


def command_succeeds(program: str, args: Sequence[str] = ()) -> bool:
    """Quiet probe: True if the program runs and exits 0.

    Output is discarded. A program that cannot be launched counts as a
    failure rather than an error, which is what installed-checks want.
    """
    try:
        result = subprocess.run(
            [program, *args],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as e:
        logger.debug("Probe %s could not start: %s", program, e)
        return False
    return result.returncode == 0


def is_command_available(command: str) -> bool:
    """Whether ``command`` resolves on PATH."""
    return shutil.which(command) is not None
