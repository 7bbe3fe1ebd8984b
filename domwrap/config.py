#!/usr/bin/env python3
"""
config.py - Environment driven settings for domwrap

All switches are read from the environment once at import time. Call
reload() after changing the environment (tests do this through monkeypatch).
"""

import os
from typing import Dict, Any

# Global configuration
DEBUG = 0
LOG_LEVEL = 'WARNING'
HUGE_TREE = False


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back on bad input"""
    try:
        return int(os.environ.get(name, str(default)))
    except ValueError:
        return default


def reload() -> Dict[str, Any]:
    """
    Re-read every DOMWRAP_* environment variable

    Returns:
        Dictionary snapshot of the new settings
    """
    global DEBUG, LOG_LEVEL, HUGE_TREE

    DEBUG = _env_int('DOMWRAP_DEBUG', 0)
    LOG_LEVEL = os.environ.get('DOMWRAP_LOG_LEVEL', 'WARNING').upper()
    HUGE_TREE = _env_int('DOMWRAP_HUGE_TREE', 0) != 0

    return get_settings()


def get_settings() -> Dict[str, Any]:
    """Return the current settings as a plain dictionary"""
    return {
        'debug': DEBUG,
        'log_level': LOG_LEVEL,
        'huge_tree': HUGE_TREE,
    }


def is_debug_mode() -> bool:
    """Check if debug mode is enabled"""
    return DEBUG != 0


reload()
