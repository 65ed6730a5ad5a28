"""
Prompt collaborator — how the engine asks the user things.

The orchestrator and the privileged session never read from the
terminal themselves; they are handed a Prompt. The CLI injects a
click-backed implementation, ``--yes`` wraps it in AutoConfirmPrompt,
and tests use ScriptedPrompt.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence


class Prompt(ABC):
    """Abstract interactive capability."""

    @abstractmethod
    def confirm(self, prompt: str, default: bool) -> bool:
        """Ask a yes/no question."""

    @abstractmethod
    def choose_many(
        self,
        prompt: str,
        options: Sequence[str],
        defaults: Sequence[bool],
    ) -> set[int]:
        """Let the user pick any subset of ``options``.

        Returns:
            Indices of the selected options.
        """

    @abstractmethod
    def secret(self, prompt: str) -> str:
        """Read a secret without echoing it."""


class AutoConfirmPrompt(Prompt):
    """Answers yes to every question and keeps every default selection.

    Secrets cannot be invented, so ``secret`` is delegated to an inner
    prompt when one is given.
    """

    def __init__(self, inner: Prompt | None = None):
        self._inner = inner

    def confirm(self, prompt: str, default: bool) -> bool:
        return True

    def choose_many(
        self,
        prompt: str,
        options: Sequence[str],
        defaults: Sequence[bool],
    ) -> set[int]:
        return {i for i, selected in enumerate(defaults) if selected}

    def secret(self, prompt: str) -> str:
        if self._inner is None:
            raise EOFError("No interactive prompt available to read a secret")
        return self._inner.secret(prompt)


class ScriptedPrompt(Prompt):
    """Headless prompt that replays canned answers.

    Confirmations are looked up by exact prompt text, then fall back to
    ``default_answer`` (or the question's own default when that is None).
    Every call is appended to ``call_log`` as ``(kind, prompt)``.
    """

    def __init__(
        self,
        answers: dict[str, bool] | None = None,
        default_answer: bool | None = None,
        selection: set[int] | None = None,
        secrets: Sequence[str] = (),
    ):
        self._answers = dict(answers or {})
        self._default_answer = default_answer
        self._selection = selection
        self._secrets = list(secrets)
        self.call_log: list[tuple[str, str]] = []

    def confirm(self, prompt: str, default: bool) -> bool:
        self.call_log.append(("confirm", prompt))
        if prompt in self._answers:
            return self._answers[prompt]
        if self._default_answer is not None:
            return self._default_answer
        return default

    def choose_many(
        self,
        prompt: str,
        options: Sequence[str],
        defaults: Sequence[bool],
    ) -> set[int]:
        self.call_log.append(("choose_many", prompt))
        if self._selection is not None:
            return set(self._selection)
        return {i for i, selected in enumerate(defaults) if selected}

    def secret(self, prompt: str) -> str:
        self.call_log.append(("secret", prompt))
        if not self._secrets:
            raise EOFError("ScriptedPrompt has no secrets left")
        return self._secrets.pop(0)

    def count(self, kind: str) -> int:
        return sum(1 for k, _ in self.call_log if k == kind)
