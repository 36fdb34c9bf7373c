"""Logging setup for the Flask application."""

from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler

from flask import Flask

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(app: Flask) -> None:
    """Attach console and daily-rotated file handlers.

    Handlers go on the root logger so module loggers share them with
    ``app.logger``.
    """

    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    app.logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    has_console = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in root.handlers
    )
    if not has_console:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)

    if not app.config.get("LOG_TO_FILE", True):
        return

    log_dir = app.config.get("LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.abspath(os.path.join(log_dir, "application.log"))
    for handler in root.handlers:
        if getattr(handler, "baseFilename", None) == log_path:
            return

    file_handler = TimedRotatingFileHandler(
        log_path,
        when="midnight",
        backupCount=int(app.config.get("LOG_RETENTION_DAYS", 30)),
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
