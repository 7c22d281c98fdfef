"""
Command line logging.

Library modules only call ``logging.getLogger(__name__)``; handlers are set up
here once per run. Fields passed through ``extra=`` (``path``, ``variant``,
``reason``, ``day_count`` ...) are appended to the message as ``key=value``.
"""
from __future__ import annotations

import logging
from logging.config import dictConfig

from peakviz.config import get_settings

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

_configured = False


class ExtraFieldsFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = [
            f"{key}={value}"
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and value is not None
        ]
        return f"{message} | {' '.join(fields)}" if fields else message


def configure_logging(level: str | int | None = None) -> None:
    global _configured
    if _configured:
        return

    log_level = level if level is not None else get_settings().log_level
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "extra_fields": {
                    "()": ExtraFieldsFormatter,
                    "fmt": "%(levelname)-7s %(name)s: %(message)s",
                }
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "extra_fields",
                }
            },
            "loggers": {"peakviz": {"handlers": ["stderr"], "level": log_level, "propagate": True}},
        }
    )
    _configured = True


def reset_logging() -> None:
    """Drop the handlers added by ``configure_logging``."""
    global _configured
    logger = logging.getLogger("peakviz")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    _configured = False
