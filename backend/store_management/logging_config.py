"""Application logging: one stream handler on the package logger, UTC timestamps."""

from __future__ import annotations

import logging
import time

_PACKAGE_LOGGER = "store_management"
_FORMAT = "%(asctime)sZ %(levelname)s %(name)s: %(message)s"


class _UTCFormatter(logging.Formatter):
    converter = time.gmtime


def configure_logging(app) -> logging.Logger:
    """Configure the package logger from app.config["LOG_LEVEL"]. Safe to call multiple times."""
    level_name = str(app.config.get("LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(level)

    if not getattr(logger, "_configured", False):
        handler = logging.StreamHandler()
        handler.setFormatter(_UTCFormatter(_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
        logger.addHandler(handler)
        logger._configured = True

    app.logger.setLevel(level)
    return logger
