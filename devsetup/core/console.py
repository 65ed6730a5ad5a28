"""
Console writer — the one place user-facing lines are printed.

Status lines from the orchestrator and streamed subprocess output both
go through here. Writes are serialized per line so the stdout drain
thread and the caller's stderr loop never interleave inside a line.
"""

from __future__ import annotations

import threading

import click


class Console:
    """Line-oriented, thread-safe console output."""

    def __init__(self, quiet: bool = False, to_stderr: bool = False):
        self._lock = threading.Lock()
        self._quiet = quiet
        self._to_stderr = to_stderr

    def write_line(self, line: str, *, err: bool = False, fg: str | None = None, bold: bool = False) -> None:
        """Write one complete line."""
        with self._lock:
            click.secho(line, err=err or self._to_stderr, fg=fg, bold=bold)

    # ── Stream forwarding (used by CommandRunner) ───────────────

    def stdout_line(self, line: str) -> None:
        self.write_line(line)

    def stderr_line(self, line: str) -> None:
        self.write_line(line, fg="red")

    def command(self, line: str) -> None:
        """Echo the command about to be run."""
        self.write_line(f"$ {line}")

    # ── Status lines ────────────────────────────────────────────

    def section(self, title: str) -> None:
        if self._quiet:
            return
        self.write_line("")
        self.write_line(title, fg="green", bold=True)
        self.write_line("=" * len(title), fg="green")

    def success(self, message: str) -> None:
        self.write_line(f"{click.style('✓', fg='green')} {message}")

    def error(self, message: str) -> None:
        self.write_line(f"{click.style('✗', fg='red')} {message}", err=True)

    def warning(self, message: str) -> None:
        self.write_line(message, fg="yellow")

    def info(self, message: str) -> None:
        if self._quiet:
            return
        self.write_line(message)

    def step(self, message: str) -> None:
        self.write_line(f"{click.style('→', fg='blue')} {message}")


class RecordingConsole(Console):
    """Console double that keeps every line in memory.

    Lines are recorded as ``(stream, text)`` tuples where stream is
    one of ``out``, ``err``, ``cmd``, ``status``.
    """

    def __init__(self):
        super().__init__(quiet=False)
        self.lines: list[tuple[str, str]] = []

    def write_line(self, line: str, *, err: bool = False, fg: str | None = None, bold: bool = False) -> None:
        with self._lock:
            self.lines.append(("status", click.unstyle(line)))

    def stdout_line(self, line: str) -> None:
        with self._lock:
            self.lines.append(("out", line))

    def stderr_line(self, line: str) -> None:
        with self._lock:
            self.lines.append(("err", line))

    def command(self, line: str) -> None:
        with self._lock:
            self.lines.append(("cmd", line))

    def stream(self, name: str) -> list[str]:
        """All recorded lines of one stream, in arrival order."""
        return [text for stream, text in self.lines if stream == name]

    @property
    def text(self) -> str:
        return "\n".join(text for _, text in self.lines)
