from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from fitness_app.core.config.models import LoggingConfig

LOGGER_NAME = "fitness_app"
LOG_FILE = "overlay.log"


def setup_logging(cfg: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure the `fitness_app` logger tree: a rotating file under `log_dir` and,
    optionally, short lines on stderr. Calling it again replaces the handlers.
    """
    cfg = cfg or LoggingConfig()
    os.makedirs(cfg.log_dir, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, cfg.level.upper(), logging.INFO))
    logger.propagate = False
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    fh = RotatingFileHandler(os.path.join(cfg.log_dir, LOG_FILE), maxBytes=cfg.max_bytes, backupCount=cfg.backup_count, encoding="utf-8")
    fh.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    logger.addHandler(fh)

    if cfg.console:
        sh = logging.StreamHandler()
        sh.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        logger.addHandler(sh)
    return logger
