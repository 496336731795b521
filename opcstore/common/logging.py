"""Logging setup for the storage client and its command line."""

import json
import logging
from logging.config import dictConfig

# Loggers emitted by this package; anything else keeps the root configuration.
STORAGE_LOGGER = "storage"
CLI_LOGGER = "opcstore.cli"


def build_logging_config(level: str = "INFO") -> dict:
    """Return the ``dictConfig`` payload for ``level``.

    Request and service records go to stderr as JSON lines; CLI messages are
    printed plainly so they read like ordinary command errors.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JsonFormatter},
            "plain": {"format": "opcstore: %(levelname)s: %(message)s"},
        },
        "handlers": {
            "stderr_json": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "json",
            },
            "stderr_plain": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "plain",
            },
        },
        "root": {"level": "WARNING", "handlers": ["stderr_json"]},
        "loggers": {
            STORAGE_LOGGER: {"level": level},
            CLI_LOGGER: {
                "handlers": ["stderr_plain"],
                "level": level,
                "propagate": False,
            },
        },
    }


def setup_logging(level: str = "INFO") -> None:
    dictConfig(build_logging_config(level.upper()))


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with structured ``extra`` fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        structured = getattr(record, "extra", None)
        if isinstance(structured, dict):
            for key, value in structured.items():
                payload.setdefault(key, value)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)
