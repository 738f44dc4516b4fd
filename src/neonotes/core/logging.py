"""
Logging Configuration

One stdout handler shared by the application, uvicorn and the client
libraries the store backends and the AI collaborator use.
"""

import sys
from logging.config import dictConfig

from neonotes.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Client libraries that log every request or statement at INFO.
QUIET_LOGGERS = ("httpx", "httpcore", "redis", "sqlalchemy.engine")


def setup_logging() -> None:
    """
    Route all logging to stdout at LOG_LEVEL.

    Runs when ``neonotes.main`` is imported, before the app is built, so
    lifespan messages (store backend, seeding, missing Gemini key) are
    already formatted. Gemini calls and store queries stay at WARNING:
    the neonotes loggers report what matters about them.
    """
    level = settings.LOG_LEVEL.upper()
    console = {"handlers": ["console"], "propagate": False}

    loggers = {
        "neonotes": {**console, "level": level},
        "uvicorn": {**console, "level": "INFO"},
        "uvicorn.access": {**console, "level": "INFO"},
    }
    for name in QUIET_LOGGERS:
        loggers[name] = {**console, "level": "WARNING"}

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "stream": sys.stdout,
                    "formatter": "default",
                },
            },
            "root": {"level": level, "handlers": ["console"]},
            "loggers": loggers,
        }
    )
