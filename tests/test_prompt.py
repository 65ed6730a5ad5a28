"""
Tests for the prompt implementations and selection parsing.
"""

import pytest

from devsetup.core.prompt import AutoConfirmPrompt, ScriptedPrompt
from devsetup.ui.cli.prompt import parse_selection


class TestParseSelection:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1", {0}),
            ("1,3", {0, 2}),
            ("1 3", {0, 2}),
            ("2-3", {1, 2}),
            ("1, 2-3", {0, 1, 2}),
            ("all", {0, 1, 2}),
            ("*", {0, 1, 2}),
            ("none", set()),
            ("-", set()),
            ("", set()),
        ],
    )
    def test_valid(self, raw, expected):
        assert parse_selection(raw, 3) == expected

    @pytest.mark.parametrize("raw", ["0", "4", "x", "3-1", "1-9", "a-b"])
    def test_invalid(self, raw):
        assert parse_selection(raw, 3) is None


class TestAutoConfirmPrompt:
    def test_confirms_everything(self):
        prompt = AutoConfirmPrompt()
        assert prompt.confirm("Reinstall?", default=False) is True

    def test_keeps_defaults(self):
        prompt = AutoConfirmPrompt()
        assert prompt.choose_many("Pick", ["a", "b", "c"], [True, False, True]) == {0, 2}

    def test_secret_delegates(self):
        prompt = AutoConfirmPrompt(inner=ScriptedPrompt(secrets=["pw"]))
        assert prompt.secret("Password") == "pw"

    def test_secret_without_inner(self):
        with pytest.raises(EOFError):
            AutoConfirmPrompt().secret("Password")


class TestScriptedPrompt:
    def test_answer_lookup_then_fallbacks(self):
        prompt = ScriptedPrompt(answers={"A?": False})
        assert prompt.confirm("A?", default=True) is False
        assert prompt.confirm("B?", default=True) is True
        assert prompt.confirm("C?", default=False) is False

    def test_default_answer_overrides_question_default(self):
        prompt = ScriptedPrompt(default_answer=True)
        assert prompt.confirm("C?", default=False) is True

    def test_selection(self):
        prompt = ScriptedPrompt(selection={1})
        assert prompt.choose_many("Pick", ["a", "b"], [True, True]) == {1}

    def test_secrets_run_out(self):
        prompt = ScriptedPrompt(secrets=["one"])
        assert prompt.secret("pw") == "one"
        with pytest.raises(EOFError):
            prompt.secret("pw")
        assert prompt.count("secret") == 2
