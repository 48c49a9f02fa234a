from __future__ import annotations

import logging.config

from .config import DEFAULT_APP_CONFIG, AppConfig


def setup_logging(config: AppConfig = DEFAULT_APP_CONFIG) -> None:
    """Configure console logging for the ``cafe_explorer`` package."""
    level = config.log_level.upper()
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
            },
        },
        "loggers": {
            "cafe_explorer": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
    })
