"""Logging configuration for the Guildhall service."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")


def configure_logging(level_name: str = "INFO") -> None:
    """Configure the root logger once for the application."""

    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("guildhall").setLevel(level)

    for name in QUIET_LOGGERS:
        if level < logging.WARNING:
            logging.getLogger(name).setLevel(logging.WARNING)
