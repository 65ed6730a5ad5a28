"""
Terminal prompt — click-backed implementation of the Prompt collaborator.
"""

from __future__ import annotations

import contextlib
import sys
from collections.abc import Iterator, Sequence

import click

from devsetup.core.prompt import Prompt


def parse_selection(raw: str, count: int) -> set[int] | None:
    """Parse a 1-based selection like ``"1,3-4"``, ``"all"`` or ``"none"``.

    Returns:
        0-based indices, or None if the input is not valid.
    """
    text = raw.strip().lower()
    if text in ("all", "*"):
        return set(range(count))
    if text in ("none", "-"):
        return set()

    chosen: set[int] = set()
    for part in text.replace(" ", ",").split(","):
        if not part:
            continue
        if "-" in part:
            lo, _, hi = part.partition("-")
            if not (lo.isdigit() and hi.isdigit()):
                return None
            start, end = int(lo), int(hi)
            if start > end:
                return None
            numbers = range(start, end + 1)
        elif part.isdigit():
            numbers = range(int(part), int(part) + 1)
        else:
            return None
        for n in numbers:
            if not 1 <= n <= count:
                return None
            chosen.add(n - 1)
    return chosen


class ConsolePrompt(Prompt):
    """Ask on the terminal with click.

    Args:
        err: Keep questions, menus and echoed answers off stdout, which
            then carries only machine-readable output.
    """

    def __init__(self, err: bool = False):
        self._err = err

    @contextlib.contextmanager
    def _asking(self) -> Iterator[None]:
        if not self._err:
            yield
            return
        # click reads answers through input(), which echoes to sys.stdout.
        with contextlib.redirect_stdout(sys.stderr):
            yield

    def confirm(self, prompt: str, default: bool) -> bool:
        with self._asking():
            return click.confirm(prompt, default=default, err=self._err)

    def choose_many(
        self,
        prompt: str,
        options: Sequence[str],
        defaults: Sequence[bool],
    ) -> set[int]:
        with self._asking():
            click.secho(prompt, bold=True, err=self._err)
            for i, option in enumerate(options, start=1):
                mark = click.style("[x]", fg="green") if defaults[i - 1] else "[ ]"
                click.echo(f"  {mark} {i}. {option}", err=self._err)

            default_text = ",".join(
                str(i) for i, selected in enumerate(defaults, start=1) if selected
            ) or "none"

            while True:
                raw = click.prompt(
                    "Numbers to install (e.g. 1,3-4, all, none)",
                    default=default_text,
                    show_default=True,
                    err=self._err,
                )
                chosen = parse_selection(raw, len(options))
                if chosen is not None:
                    return chosen
                click.secho(f"Invalid selection: {raw}", fg="red", err=self._err)

    def secret(self, prompt: str) -> str:
        with self._asking():
            return click.prompt(prompt, hide_input=True, err=True)
