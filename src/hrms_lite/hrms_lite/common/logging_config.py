from __future__ import annotations

import logging.config


def setup_logging(level: str = "INFO") -> None:
    """Setup application logging configuration"""

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "werkzeug": {"level": "WARNING"},
        },
        "root": {"level": level.upper(), "handlers": ["console"]},
    }

    logging.config.dictConfig(logging_config)
