"""
Tests for logging setup — level resolution and handlers.
"""

import logging
from pathlib import Path

import pytest

from scaffoldkit.core.observability.logging_config import ENV_LEVEL, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def _reset_root_logger():
    yield
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    root.setLevel(logging.WARNING)


class TestResolveLevel:
    def test_flags_take_precedence(self, monkeypatch):
        monkeypatch.setenv(ENV_LEVEL, "ERROR")
        assert resolve_level(debug=True) == "DEBUG"
        assert resolve_level(verbose=True) == "INFO"
        assert resolve_level(quiet=True) == "ERROR"

    def test_env_then_default(self, monkeypatch):
        monkeypatch.setenv(ENV_LEVEL, "INFO")
        assert resolve_level() == "INFO"
        monkeypatch.delenv(ENV_LEVEL)
        assert resolve_level() == "WARNING"


class TestSetupLogging:
    def test_console_level(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back_to_warning(self):
        setup_logging("CHATTY")
        assert logging.getLogger().level == logging.WARNING

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "scaffold.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

        logging.getLogger("scaffoldkit.test").debug("wrote something")
        for h in logging.getLogger().handlers:
            h.flush()
        assert "wrote something" in log_file.read_text()

    def test_third_party_quieted(self):
        setup_logging("INFO")
        assert logging.getLogger("yaml").level == logging.WARNING
