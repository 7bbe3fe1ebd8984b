#!/usr/bin/env python3
"""
text.py - Text extraction flags
"""

import re
from enum import IntFlag


class TextFlag(IntFlag):
    """
    Modes for Node.text(), combined with bitwise OR

    TRIM strips leading and trailing whitespace. NORMALIZE collapses every
    whitespace run into one space and then trims, whether or not TRIM is set.
    """
    DEFAULT = 0
    TRIM = 1
    NORMALIZE = 2


_WHITESPACE_RUN = re.compile(r'[ \t\n\r\f\v]+')
_TRIM_CHARS = ' \t\n\r\0\x0b'


def normalize_text(text: str, flags: int = TextFlag.DEFAULT) -> str:
    """
    Apply TextFlag processing to a string

    Args:
        text: Raw text content
        flags: TextFlag bits

    Returns:
        Processed text
    """
    if flags & TextFlag.NORMALIZE:
        text = _WHITESPACE_RUN.sub(' ', text)

    if flags & (TextFlag.TRIM | TextFlag.NORMALIZE):
        text = text.strip(_TRIM_CHARS)

    return text
