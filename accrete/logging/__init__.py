import json
import logging
import os
from enum import Enum
from inspect import currentframe
from pathlib import Path
from typing import Any

import structlog

from .handlers import SessionLogFile

__all__ = ("setup_logging", "get_logger", "LogLevel", "LoggerType", "ConsoleFormatter", "SessionLogFile")

LoggerType = structlog.stdlib.BoundLogger


class LogLevel(Enum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


_level = LogLevel.INFO


def setup_logging(level: LogLevel | None = None) -> None:
    """
    Route structlog through stdlib logging: JSON event lines, pretty printed on the console.

    Args:
        level: Root logging level. Defaults to INFO.
    """
    global _level
    if level is not None:
        _level = level

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(ConsoleFormatter())
    logging.basicConfig(level=_level.value, format="%(message)s", handlers=[console_handler])

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.format_exc_info,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.filter_by_level,
            structlog.processors.JSONRenderer(default=repr),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, /, *log_files: SessionLogFile, **initial_values: Any) -> LoggerType:
    """
    Get a logger, by default named after the calling module.

    Every entry of `log_files` also receives the logger's events; a file already attached to the
    logger is not attached twice.
    """
    if name is None:
        frame = currentframe()
        name = Path(frame.f_back.f_code.co_filename).stem if frame and frame.f_back else "accrete"

    stdlib_logger = logging.getLogger(name)
    attached = {getattr(handler, "baseFilename", None) for handler in stdlib_logger.handlers}
    for log_file in log_files:
        if os.path.abspath(log_file.path) in attached:
            continue
        stdlib_logger.addHandler(log_file.get_handler())
        if stdlib_logger.level == logging.NOTSET:
            stdlib_logger.setLevel(_level.value)

    return structlog.get_logger(name, **initial_values)


class ConsoleFormatter(logging.Formatter):
    """Renders JSON event lines as `LEVEL | event='name' | key=value | ...`."""

    def format(self, record):
        message = record.getMessage()
        try:
            data = json.loads(message)
        except json.JSONDecodeError:
            data = None
        if not isinstance(data, dict):
            data = {"message": message}

        parts = [data.pop("level", record.levelname).upper(), f"event={data.pop('event', 'unknown')!r}"]
        data.pop("timestamp", None)
        for key, value in data.items():
            if value is None:
                continue
            if key == "message":
                parts.append(str(value))
            elif isinstance(value, float):
                parts.append(f"{key}={value:.2f}")
            elif isinstance(value, str) and "\n" in value:
                parts.append(f"{key}='''\n" + value.strip("\n") + "\n'''")
            else:
                parts.append(f"{key}={value!r}")

        if record.exc_info:
            parts.append(self.formatException(record.exc_info))
        return " | ".join(parts)
