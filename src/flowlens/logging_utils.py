"""Logging helpers for flowlens."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import get_settings

_CONFIGURED = False


def setup_logging(level: Optional[str] = None, log_path: Optional[Path] = None) -> logging.Logger:
    """Attach handlers to the package logger once; later calls only return it."""
    global _CONFIGURED
    logger = logging.getLogger("flowlens")
    if _CONFIGURED:
        return logger

    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_path is None and settings.log_file:
        log_path = Path(settings.log_file)
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _CONFIGURED = True
    logger.debug("Logging initialized at %s", level_name)
    return logger
