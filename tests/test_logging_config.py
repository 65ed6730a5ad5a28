"""
Tests for logging setup and level resolution.
"""

import logging

import pytest

from devsetup.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    ENV_LEVEL,
    resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _restore_root_logger(monkeypatch):
    monkeypatch.delenv(ENV_FILE, raising=False)
    monkeypatch.delenv(ENV_FILE_LEVEL, raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_default_is_warning(self, monkeypatch):
        monkeypatch.delenv(ENV_LEVEL, raising=False)
        assert resolve_level() == "WARNING"

    def test_flags_beat_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_LEVEL, "ERROR")
        assert resolve_level(debug=True) == "DEBUG"
        assert resolve_level(verbose=True) == "INFO"

    def test_environment_beats_config(self, monkeypatch):
        monkeypatch.setenv(ENV_LEVEL, "ERROR")
        assert resolve_level(config_verbose=True) == "ERROR"

    def test_config_verbose(self, monkeypatch):
        monkeypatch.delenv(ENV_LEVEL, raising=False)
        assert resolve_level(config_verbose=True) == "INFO"

    def test_quiet(self, monkeypatch):
        monkeypatch.delenv(ENV_LEVEL, raising=False)
        assert resolve_level(quiet=True) == "ERROR"


class TestSetupLogging:
    def test_single_console_handler(self):
        setup_logging("INFO")
        setup_logging("INFO")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.INFO

    def test_unknown_level_falls_back(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_file_output(self, tmp_path):
        log_file = tmp_path / "devsetup.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

        logging.getLogger("devsetup.test").debug("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello file" in log_file.read_text()

    def test_flags_resolved_inside(self, monkeypatch):
        monkeypatch.setenv(ENV_LEVEL, "ERROR")
        assert setup_logging(verbose=True) == logging.INFO
        assert setup_logging() == logging.ERROR
        assert setup_logging(debug=True, quiet=True) == logging.DEBUG

    def test_file_from_environment(self, monkeypatch, tmp_path):
        log_file = tmp_path / "env.log"
        monkeypatch.delenv(ENV_LEVEL, raising=False)
        monkeypatch.setenv(ENV_FILE, str(log_file))
        monkeypatch.setenv(ENV_FILE_LEVEL, "INFO")
        setup_logging(quiet=True)

        logging.getLogger("devsetup.test").info("hello env")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello env" in log_file.read_text()
        assert logging.getLogger().handlers[0].level == logging.ERROR
