"""Tests for logging setup."""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from recon_matcher.utils.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger("recon_matcher")
    saved = (logger.level, list(logger.handlers))
    yield
    logger.setLevel(saved[0])
    logger.handlers = saved[1]


class TestSetupLogging:
    def test_level_by_name(self):
        logger = setup_logging("debug")
        assert logger.name == "recon_matcher"
        assert logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        assert setup_logging("chatty").level == logging.INFO

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "recon.log"
        logger = setup_logging(logging.INFO, log_file=log_file)
        assert len(logger.handlers) == 2
        assert log_file.parent.exists()
        for handler in logger.handlers:
            handler.close()


    def test_rotation_settings(self, tmp_path):
        log_file = tmp_path / "recon.log"
        logger = setup_logging(log_file=log_file, max_bytes=1024, backup_count=2)

        file_handler = next(h for h in logger.handlers if isinstance(h, RotatingFileHandler))
        assert file_handler.maxBytes == 1024
        assert file_handler.backupCount == 2
        assert file_handler.level == logging.DEBUG
        file_handler.close()

    def test_rerun_closes_previous_file_handler(self, tmp_path):
        first = setup_logging(log_file=tmp_path / "first.log")
        old_handler = next(h for h in first.handlers if isinstance(h, RotatingFileHandler))

        setup_logging()

        assert old_handler not in first.handlers
        assert old_handler.stream is None
