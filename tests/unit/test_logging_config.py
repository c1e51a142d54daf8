"""Unit tests for logging setup"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from docsearch.logging_config import LOG_BACKUPS, LOG_MAX_BYTES, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_console_and_file_handlers(tmp_path, restore_root_logger):
    log_file = setup_logging(log_file=str(tmp_path / "logs" / "app.log"), console_level=logging.WARNING)

    handlers = logging.getLogger().handlers
    assert len(handlers) == 2
    assert log_file == tmp_path / "logs" / "app.log"

    logging.getLogger("docsearch.test").debug("detail line")
    for handler in handlers:
        handler.flush()
    assert "detail line" in log_file.read_text(encoding="utf-8")


def test_file_rotation_policy(tmp_path, restore_root_logger):
    setup_logging(log_file=str(tmp_path / "app.log"))

    file_handler = next(h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler))
    assert file_handler.maxBytes == LOG_MAX_BYTES
    assert file_handler.backupCount == LOG_BACKUPS


def test_repeated_setup_does_not_duplicate_handlers(tmp_path, restore_root_logger):
    setup_logging(log_file=str(tmp_path / "app.log"))
    setup_logging(log_file=str(tmp_path / "app.log"))

    assert len(logging.getLogger().handlers) == 2
