"""
Logging configuration for fmd.

Diagnostics always go to stderr so that stdout carries nothing but matched
paths. The standard format renders through a rich ``RichHandler``; the json
and detailed formats use plain handlers suitable for log collection.
"""

import json
import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from rich.console import Console
from rich.logging import RichHandler


class LogFormat(Enum):
    """Log format types."""
    STANDARD = "standard"
    JSON = "json"
    DETAILED = "detailed"


DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# LogRecord attributes that are never copied into JSON output as extras
_STANDARD_ATTRS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'exc_info', 'exc_text',
    'stack_info', 'message', 'taskName',
})


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for attr_name, attr_value in record.__dict__.items():
            if attr_name.startswith('_') or attr_name in _STANDARD_ATTRS:
                continue
            if not callable(attr_value):
                log_data[attr_name] = attr_value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False, separators=(',', ':'))


def resolve_level(level: Union[str, int, None], verbose: bool = False) -> int:
    """Map a level name to its numeric value; ``verbose`` forces DEBUG."""
    if verbose:
        return logging.DEBUG
    if level is None:
        return logging.WARNING
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(
    verbose: bool = False,
    log_format: Union[LogFormat, str] = LogFormat.STANDARD,
    log_file: Optional[Union[str, Path]] = None,
    level: Union[str, int, None] = None,
    console: Optional[Console] = None
) -> logging.Logger:
    """
    Set up root logging for a command-line run.

    Args:
        verbose: Enable verbose (DEBUG) logging
        log_format: standard (rich), json or detailed
        log_file: Optional file that receives a copy of every record
        level: Level name used when not verbose (default WARNING)
        console: Console for the rich handler (default: a stderr console)

    Returns:
        The package logger
    """
    log_format = LogFormat(log_format)
    log_level = resolve_level(level, verbose)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    if log_format is LogFormat.STANDARD:
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=verbose,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        if log_format is LogFormat.JSON:
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
    handler.setLevel(log_level)
    root_logger.addHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        if log_format is LogFormat.JSON:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)

    return logging.getLogger("fmd")
