from logging import config, getLogger
from typing import Any

from ip_intel.config import get_settings

LOGGER_NAME = "ip_intel"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_log_config(level: str) -> dict[str, Any]:
    """dictConfig for the service logger plus uvicorn's server and access loggers.

    Application records carry the entrypoint context in the message itself, so
    one plain line format is shared by the app and uvicorn's server logger.
    """
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "service": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": "%(levelprefix)s %(asctime)s [%(name)s] %(message)s",
                "datefmt": DATE_FORMAT,
            },
            "access": {
                "()": "uvicorn.logging.AccessFormatter",
                "fmt": '%(levelprefix)s %(asctime)s [access] %(client_addr)s "%(request_line)s" %(status_code)s',
                "datefmt": DATE_FORMAT,
            },
        },
        "handlers": {
            "service": {"class": "logging.StreamHandler", "formatter": "service", "stream": "ext://sys.stderr"},
            "access": {"class": "logging.StreamHandler", "formatter": "access", "stream": "ext://sys.stdout"},
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["service"], "level": level, "propagate": False},
            "uvicorn": {"handlers": ["service"], "level": level, "propagate": False},
            "uvicorn.access": {"handlers": ["access"], "level": level, "propagate": False},
        },
    }


config.dictConfig(build_log_config(get_settings().log_level))

logger = getLogger(LOGGER_NAME)
