"""Logging helpers for the xxhauth tooling.

Log lines are JSON objects. Digests and keys passed as ``extra`` are
rendered as hex; raw byte strings (messages, seeds, secret tables) are
reduced to their length so key material never reaches the log.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from logging import Handler
from logging.config import dictConfig
from logging.handlers import SysLogHandler
from pathlib import Path
from typing import Any, Final

import msgspec

from ..structures import FixedWidthHash
from .settings import RuntimeConfig

SYSLOG_SOCKETS = (Path("/dev/log"), Path("/var/run/log"))

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RESERVED_LOG_KEYS: Final[frozenset[str]] = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime"}


def _serialise_value(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, FixedWidthHash):
        return f"0x{value.hex()}"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"<{memoryview(value).nbytes} bytes>"
    return str(value)


class StructuredLogFormatter(logging.Formatter):
    """One JSON object per record; the ``xxhauth.`` prefix is dropped."""

    PREFIX = "xxhauth."

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name.removeprefix(self.PREFIX),
            "message": record.getMessage(),
        }

        extras = {
            key: _serialise_value(value)
            for key, value in vars(record).items()
            if key not in _RESERVED_LOG_KEYS and not key.startswith("_")
        }
        if extras:
            payload["extra"] = extras

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return msgspec.json.encode(payload).decode("utf-8")


def _build_handler(use_syslog: bool = False) -> Handler:
    if use_syslog:
        for candidate in SYSLOG_SOCKETS:
            if candidate.exists():
                syslog_handler = SysLogHandler(
                    address=str(candidate),
                    facility=SysLogHandler.LOG_USER,
                )
                syslog_handler.ident = "xxhauth "
                return syslog_handler
    return logging.StreamHandler()


def configure_logging(config: RuntimeConfig) -> None:
    """Configure root logging based on runtime settings."""

    level_name = "DEBUG" if config.debug_logging else "INFO"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structured": {
                    "()": "xxhauth.config.logging.StructuredLogFormatter",
                }
            },
            "handlers": {
                "xxhauth": {
                    "()": _build_handler,
                    "use_syslog": config.log_to_syslog,
                    "level": level_name,
                    "formatter": "structured",
                }
            },
            "root": {
                "level": level_name,
                "handlers": ["xxhauth"],
            },
        }
    )

    logging.getLogger("xxhauth").debug("Logging configured at level %s", level_name)


__all__ = ["StructuredLogFormatter", "configure_logging"]
