from __future__ import annotations

import logging

from logging.handlers import RotatingFileHandler
from pathlib import Path

from langrunner.logging import setup_file_logger


def test_setup_file_logger_is_idempotent(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "runner.log"
    name = "langrunner.test_logging"
    logger = setup_file_logger(log_file, name=name, level=logging.DEBUG)
    setup_file_logger(log_file, name=name, level=logging.DEBUG)
    handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    try:
        assert len(handlers) == 1
        logger.debug("dispatched 'python3 main.py'")
        handlers[0].flush()
        assert "dispatched 'python3 main.py'" in log_file.read_text()
    finally:
        for handler in handlers:
            logger.removeHandler(handler)
            handler.close()
