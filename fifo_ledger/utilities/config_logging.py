# fifo_ledger/utilities/config_logging.py
from __future__ import annotations

import os
from typing import Any, Dict, Union

LOG_DIR = "logs"
LOG_FILE_NAME = "fifo_ledger.log"


def logging_config(
    console_level: str = "INFO", log_dir: Union[str, os.PathLike] = LOG_DIR
) -> Dict[str, Any]:
    """dictConfig mapping: terse console output, full DEBUG trail in a rotating file."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": "%(levelname)s %(name)s: %(message)s"},
            "trail": {
                "format": "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": console_level,
                "formatter": "console",
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "trail",
                "filename": os.path.join(os.fspath(log_dir), LOG_FILE_NAME),
                "maxBytes": 5_000_000,
                "backupCount": 5,
                "encoding": "utf-8",
            },
        },
        "loggers": {
            "": {"level": "WARNING", "handlers": ["console", "file"]},
            # per-row drop reasons are DEBUG; the file handler keeps them
            "fifo_ledger": {"level": "DEBUG", "propagate": True},
            "openpyxl": {"level": "WARNING", "propagate": True},
        },
    }


LOGGING = logging_config()
