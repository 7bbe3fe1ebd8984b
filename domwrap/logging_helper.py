#!/usr/bin/env python3
"""
logging_helper.py - Logger setup for domwrap

Every module logs through a child of the "domwrap" logger. The package does
not install handlers on import; init_logger() attaches a single stderr
handler with a Log4perl style layout. DOMWRAP_DEBUG forces DEBUG level.
"""

import logging
import sys
from datetime import datetime
from typing import Dict, Union

from domwrap import config

ROOT_CATEGORY = 'domwrap'
TRACE = 5

# Log level mapping (Log4perl names are accepted as well)
LEVEL_MAP = {
    'TRACE': TRACE,
    'DEBUG': logging.DEBUG,     # 10
    'INFO': logging.INFO,       # 20
    'WARN': logging.WARNING,    # 30
    'WARNING': logging.WARNING, # 30
    'ERROR': logging.ERROR,     # 40
    'FATAL': logging.CRITICAL,  # 50
    'CRITICAL': logging.CRITICAL, # 50
}

DEFAULT_LAYOUT = "%(day_abbrev)s %(asctime)s|%(levelname)s|%(name)s|%(message)s"

# Add TRACE level to Python logging
logging.addLevelName(TRACE, 'TRACE')

# Keep library silent unless the application configures logging
logging.getLogger(ROOT_CATEGORY).addHandler(logging.NullHandler())

# Stream handlers installed by init_logger, keyed by logger category
HANDLERS: Dict[str, logging.Handler] = {}


class DomwrapFormatter(logging.Formatter):
    """Formatter that mimics Log4perl patterns"""

    def __init__(self, pattern: str = DEFAULT_LAYOUT):
        super().__init__()
        self.pattern = pattern

    def format(self, record):
        now = datetime.fromtimestamp(record.created)

        record.day_abbrev = now.strftime('%a')
        record.asctime = now.strftime('%Y/%m/%d %H:%M:%S')
        record.message = record.getMessage()

        text = self.pattern % record.__dict__
        if record.exc_info:
            text += '\n' + self.formatException(record.exc_info)
        return text


def resolve_level(level: Union[str, int, None]) -> int:
    """
    Translate a level name or number to a numeric logging level

    Args:
        level: Level name (TRACE, DEBUG, INFO, WARN, ERROR, FATAL), number or None

    Returns:
        Numeric level; None resolves to the configured default
    """
    if level is None:
        if config.is_debug_mode():
            return logging.DEBUG
        level = config.LOG_LEVEL
    if isinstance(level, int):
        return level
    return LEVEL_MAP.get(str(level).upper(), logging.WARNING)


def init_logger(category: str = ROOT_CATEGORY, level: Union[str, int, None] = None,
                stream=None, pattern: str = DEFAULT_LAYOUT) -> logging.Logger:
    """
    Attach a stream handler to the package logger

    Calling this again for the same category replaces that category's
    handler instead of stacking a second one.

    Args:
        category: Logger name
        level: Initial level, defaults to DOMWRAP_LOG_LEVEL / DOMWRAP_DEBUG
        stream: Target stream, stderr by default
        pattern: Layout pattern for DomwrapFormatter

    Returns:
        The configured logger
    """
    py_logger = logging.getLogger(category)
    cleanup_logger(category)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(DomwrapFormatter(pattern))
    py_logger.addHandler(handler)
    py_logger.setLevel(resolve_level(level))
    HANDLERS[category] = handler

    return py_logger


def cleanup_logger(category: str = ROOT_CATEGORY) -> None:
    """Detach and close the handler init_logger installed for category"""
    handler = HANDLERS.pop(category, None)
    if handler is not None:
        logging.getLogger(category).removeHandler(handler)
        handler.close()


def get_logger(name: str = ROOT_CATEGORY) -> logging.Logger:
    """Return the domwrap logger, or one of its children for a module name"""
    if name == ROOT_CATEGORY or name.startswith(ROOT_CATEGORY + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_CATEGORY}.{name}')


def set_level(level: Union[str, int], category: str = ROOT_CATEGORY) -> int:
    """Change the level of a logger at runtime, returns the numeric level"""
    numeric = resolve_level(level)
    logging.getLogger(category).setLevel(numeric)
    return numeric


def trace(logger: logging.Logger, message: str, *args) -> None:
    """Log at TRACE level"""
    if logger.isEnabledFor(TRACE):
        logger.log(TRACE, message, *args)
