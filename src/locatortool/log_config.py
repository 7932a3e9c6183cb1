from __future__ import annotations

import logging
from pathlib import Path

from .config import CONFIG_DIR

LOGGER_NAME = "locatortool"
LOG_DIR = CONFIG_DIR / "logs"
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def build_logger(log_dir: Path | None = LOG_DIR, level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    logger.propagate = False
    handler: logging.Handler
    if log_dir is None:
        handler = logging.StreamHandler()
    else:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_dir / "locatortool.log", encoding="utf-8")
        except OSError:
            # Fallback to stderr logging if file logger cannot be initialized.
            handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
