"""Logging for GroupHub.

Everything lives under the ``grouphub`` logger. ``configure_logging`` reads
its level, format and optional rotating log file from ``Settings`` and may be
called again to apply new settings.
"""

import logging
import logging.handlers
import os
from typing import List

from grouphub.core.config import Settings

ROOT_LOGGER = "grouphub"

# Marks handlers installed here so reconfiguring leaves foreign ones alone
_OWNED = "_grouphub_handler"


def _build_handlers(settings: Settings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if settings.log_dir:
        os.makedirs(settings.log_dir, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                os.path.join(settings.log_dir, f"{ROOT_LOGGER}.log"),
                maxBytes=settings.log_max_bytes,
                backupCount=settings.log_backup_count,
                encoding="utf-8",
            )
        )
    return handlers


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach console (and, with ``log_dir``, file) output to the package logger."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(settings.log_level)

    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(settings.log_format, datefmt=settings.log_date_format)
    for handler in _build_handlers(settings):
        handler.setFormatter(formatter)
        setattr(handler, _OWNED, True)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
