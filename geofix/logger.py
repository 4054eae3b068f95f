import os
from logging import config, getLevelName, getLogger
from typing import Any

LOGGER_NAME = "geofix"


def build_log_config(level: int | str) -> dict[str, Any]:
    """Logging config shared by the service and the one-shot command.

    The `geofix` logger and uvicorn's server logger write to stderr with the
    uvicorn default formatter; uvicorn access logs go to stdout.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "access": {
                "()": "uvicorn.logging.AccessFormatter",
                "fmt": '%(levelprefix)s %(asctime)s - %(client_addr)s - "%(request_line)s" %(status_code)s',
                "datefmt": "%Y-%m-%d %H:%M:%S",
                "use_colors": True,
            },
            "default": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": "%(levelprefix)s %(asctime)s - %(name)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
                "use_colors": True,
            },
        },
        "handlers": {
            "access": {"class": "logging.StreamHandler", "formatter": "access", "stream": "ext://sys.stdout"},
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn": {"handlers": ["default"], "level": level, "propagate": True},
            "uvicorn.access": {"handlers": ["access"], "level": level, "propagate": False},
        },
    }


LOG_LEVEL = getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())  # DEBUG, WARNING, ERROR

config.dictConfig(build_log_config(LOG_LEVEL))

logger = getLogger(LOGGER_NAME)
