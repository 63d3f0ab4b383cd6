"""Logging configuration for the link service.

Everything logs under the ``shortlinks`` logger so one call to
setup_logging controls the whole process.
"""

import json
import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER_NAME = "shortlinks"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""
    
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the service logger.
    
    Calling it again replaces the previous handlers, so the CLI and the
    tests can reconfigure freely.
    
    Args:
        level: Logging level name, case-insensitive; unknown names mean INFO
        log_file: Also write to this file when given
        json_format: Emit JSON lines instead of text
        stream: Console stream, stdout by default
        
    Returns:
        The ``shortlinks`` logger
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    
    formatter = JsonFormatter() if json_format else logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)
    
    handlers = [logging.StreamHandler(stream or sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    
    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Logger under ``shortlinks``; module names are prefixed when needed."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
