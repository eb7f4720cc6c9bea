"""Logging setup for the Idea Catalog service."""

from __future__ import annotations

import logging
import logging.config

from idea_catalog.core.settings import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure console logging for the application.

    Args:
        level: Override log level (DEBUG, INFO, WARNING, ERROR). Defaults to
            the ``LOG_LEVEL`` setting.
    """
    resolved = (level or settings.log_level).upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": LOG_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stderr",
                },
            },
            "root": {
                "handlers": ["console"],
                "level": "WARNING",
            },
            "loggers": {
                "idea_catalog": {
                    "level": resolved,
                },
                "sqlalchemy.engine": {
                    "level": "INFO" if settings.sql_debug else "WARNING",
                },
            },
        }
    )
