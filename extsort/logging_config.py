#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Logging setup for Extension Sorter.

Features:
- Level-specific console formats with optional colors
- Structured JSON output for machine consumption
- Optional size-rotated log file
- Re-entrant setup: calling it again replaces the handlers it installed
"""

import logging
import logging.handlers
import os
import sys
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any, TextIO

# =====================================================================================================
# Constants
# =====================================================================================================

LOGGER_NAMESPACE = "extsort"
DEFAULT_MAX_LOG_SIZE = "10MB"
DEFAULT_BACKUP_COUNT = 3

# Marker attribute for handlers owned by setup_logging()
_HANDLER_TAG = "_extsort_handler"

# =====================================================================================================
# Formatters
# =====================================================================================================

class FastFormatter(logging.Formatter):
    """Formatter with a pre-built format per level."""

    def __init__(self, enable_colors: bool = False):
        super().__init__()
        self.enable_colors = enable_colors

        self._formatters = {
            level: logging.Formatter(fmt, style='{', datefmt='%H:%M:%S')
            for level, fmt in {
                logging.ERROR: "[{asctime}] ERROR   [{name}] {message}",
                logging.WARNING: "[{asctime}] WARNING [{name}] {message}",
                logging.INFO: "[{asctime}] INFO    {message}",
                logging.DEBUG: "[{asctime}] DEBUG   {name}:{lineno} - {message}",
            }.items()
        }

        self.colors = {
            'ERROR': '\033[91m',
            'WARNING': '\033[93m',
            'INFO': '\033[92m',
            'DEBUG': '\033[94m',
            'RESET': '\033[0m'
        } if enable_colors else {}

    def format(self, record):
        level = record.levelno
        if level >= logging.ERROR:
            formatter = self._formatters[logging.ERROR]
        else:
            formatter = self._formatters.get(level, self._formatters[logging.INFO])

        text = formatter.format(record)
        color = self.colors.get(record.levelname)
        if color:
            text = f"{color}{text}{self.colors['RESET']}"
        return text

class JsonFormatter(logging.Formatter):
    """Structured JSON formatter."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "thread": record.threadName,
            "process": record.process,
        }
        error = getattr(record, "error", None)
        if isinstance(error, dict):
            payload["error"] = error
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)

# =====================================================================================================
# Setup
# =====================================================================================================

def setup_logging(
    log_level: str = "WARNING",
    json_format: bool = False,
    log_file: Optional[str] = None,
    enable_colors: Optional[bool] = None,
    stream: Optional[TextIO] = None,
    max_log_size: str = DEFAULT_MAX_LOG_SIZE,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> Dict[str, Any]:
    """Configure the ``extsort`` logger hierarchy.

    Console output always goes to stderr (or ``stream``) so that stdout stays
    reserved for the move listing.
    """

    numeric_level = getattr(logging, str(log_level).upper(), logging.WARNING)

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(numeric_level)

    for handler in package_logger.handlers[:]:
        if getattr(handler, _HANDLER_TAG, False):
            package_logger.removeHandler(handler)
            handler.close()

    handlers: Dict[str, logging.Handler] = {}

    console_stream = stream if stream is not None else sys.stderr
    if enable_colors is None:
        enable_colors = (hasattr(console_stream, 'isatty') and
                         console_stream.isatty() and
                         os.environ.get('TERM') != 'dumb')

    console_handler = logging.StreamHandler(console_stream)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(JsonFormatter() if json_format else FastFormatter(enable_colors=enable_colors))
    setattr(console_handler, _HANDLER_TAG, True)
    package_logger.addHandler(console_handler)
    handlers['console'] = console_handler

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            str(log_path),
            maxBytes=_parse_size_string(max_log_size),
            backupCount=backup_count,
            encoding='utf-8',
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JsonFormatter() if json_format else FastFormatter())
        setattr(file_handler, _HANDLER_TAG, True)
        package_logger.addHandler(file_handler)
        handlers['file'] = file_handler

    package_logger.debug(
        "Logging initialized (level=%s, json=%s, file=%s)",
        logging.getLevelName(numeric_level), json_format, log_file,
    )

    return {
        'logger': package_logger,
        'handlers': handlers,
    }

def _parse_size_string(size_str: str) -> int:
    """Parse size string into bytes."""
    size_str = size_str.upper().strip()

    multipliers = {
        'KB': 1024,
        'MB': 1024 ** 2,
        'GB': 1024 ** 3,
        'B': 1,
    }

    for suffix, multiplier in multipliers.items():
        if size_str.endswith(suffix):
            try:
                return int(float(size_str[:-len(suffix)].strip()) * multiplier)
            except ValueError:
                continue

    try:
        return int(float(size_str))
    except ValueError:
        return 10 * 1024 * 1024

def cleanup_logging() -> None:
    """Close and detach the handlers installed by setup_logging()."""
    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in package_logger.handlers[:]:
        if getattr(handler, _HANDLER_TAG, False):
            package_logger.removeHandler(handler)
            handler.close()
