"""Process-wide logging setup."""
import logging.config
from typing import Any

from core.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_logging_config(settings: Settings) -> dict[str, Any]:
    """
    Build a dictConfig mapping for the application.

    Logs always go to stderr. When LOG_FILE is set, the same records are
    also appended to that file.
    """
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    }
    if settings.log_file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "standard",
            "filename": settings.log_file,
            "mode": "a",
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT},
        },
        "handlers": handlers,
        "root": {
            "level": settings.log_level.upper(),
            "handlers": list(handlers),
        },
        "loggers": {
            # SQL echo is noisy at INFO
            "sqlalchemy.engine": {"level": "WARNING"},
        },
    }


def configure_logging(settings: Settings) -> None:
    """Apply the logging configuration for the running process."""
    logging.config.dictConfig(build_logging_config(settings))
