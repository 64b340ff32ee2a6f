"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from create_rails_app.core.observability.logging_config import (
    configure_logging,
    level_number,
    resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_flag_precedence(self):
        assert resolve_level(debug=True, verbose=True, quiet=True) == "DEBUG"
        assert resolve_level(verbose=True, quiet=True) == "INFO"
        assert resolve_level(quiet=True, env_level="DEBUG") == "ERROR"

    def test_env_then_default(self):
        assert resolve_level(env_level="INFO") == "INFO"
        assert resolve_level() == "WARNING"


class TestSetupLogging:
    def test_console_level(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_invalid_level_falls_back(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_file_handler(self, tmp_path: Path):
        log_file = tmp_path / "cra.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("create_rails_app.test").debug("written to file")
        for handler in root.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text()

    def test_level_number(self):
        assert level_number("info") == logging.INFO
        assert level_number(None) == logging.WARNING


class TestConfigureLogging:
    def test_env_level(self):
        assert configure_logging(env={"CRA_LOG_LEVEL": "INFO"}) == "INFO"
        assert logging.getLogger().level == logging.INFO

    def test_flag_beats_env(self):
        assert configure_logging(quiet=True, env={"CRA_LOG_LEVEL": "DEBUG"}) == "ERROR"

    def test_env_log_file(self, tmp_path: Path):
        log_file = tmp_path / "cra.log"
        configure_logging(env={"CRA_LOG_FILE": str(log_file), "CRA_LOG_FILE_LEVEL": "INFO"})
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
