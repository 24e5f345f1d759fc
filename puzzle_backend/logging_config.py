# puzzle_backend/logging_config.py

"""
Logging configuration handed to uvicorn. Access-log lines for the
liveness probe on `/` are dropped.
"""

import logging
from typing import Any, Dict


class LivenessProbeFilter(logging.Filter):
    """Drops uvicorn access-log records for `GET /`."""

    def filter(self, record: logging.LogRecord) -> bool:
        # uvicorn passes (client, method, path, http_version, status) as args
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3:
            return not (args[1] == "GET" and args[2] == "/")
        return True


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "liveness_probe": {"()": LivenessProbeFilter},
        },
        "formatters": {
            "app": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
            "access": {"format": "%(message)s"},
        },
        "handlers": {
            "app": {
                "class": "logging.StreamHandler",
                "formatter": "app",
                "stream": "ext://sys.stdout",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["liveness_probe"],
            },
        },
        "loggers": {
            # uvicorn.error propagates here
            "uvicorn": {"handlers": ["app"], "level": level, "propagate": False},
            "uvicorn.access": {"handlers": ["access"], "level": level, "propagate": False},
            "puzzle_backend": {"handlers": ["app"], "level": level, "propagate": False},
        },
    }
