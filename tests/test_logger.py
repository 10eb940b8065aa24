from __future__ import annotations

import logging
import os

import pytest

from fitness_app.core.config.models import LoggingConfig
from fitness_app.core.logger import LOG_FILE, LOGGER_NAME, setup_logging


@pytest.fixture
def restore_app_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    handlers, level, propagate = saved
    for h in handlers:
        logger.addHandler(h)
    logger.setLevel(level)
    logger.propagate = propagate


def test_setup_logging_writes_rotating_file(tmp_path, restore_app_logger):
    cfg = LoggingConfig(log_dir=str(tmp_path / "logs"), level="debug", console=False)
    logger = setup_logging(cfg)
    logging.getLogger("fitness_app.session").debug("User %s logged in", "42")
    for h in logger.handlers:
        h.flush()

    assert logger.level == logging.DEBUG
    with open(os.path.join(cfg.log_dir, LOG_FILE), "r", encoding="utf-8") as f:
        line = f.read()
    assert "fitness_app.session | User 42 logged in" in line


def test_setup_logging_twice_does_not_duplicate_handlers(tmp_path, restore_app_logger):
    cfg = LoggingConfig(log_dir=str(tmp_path))
    setup_logging(cfg)
    logger = setup_logging(cfg)
    assert len(logger.handlers) == 2
