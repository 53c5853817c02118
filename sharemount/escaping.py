#!/usr/bin/env python3
"""
Percent escaping for GVFS entry names and smb:// URIs

GVFS stores each mount component as key=value pairs separated by commas,
so at least '%', ',' and '=' must never appear unescaped inside a value.
Only 7-bit ASCII is supported; anything else fails loudly instead of being
silently mangled.
"""

import string
from urllib.parse import quote

from .errors import EscapeError

# Characters that are passed through unchanged by escape()
SAFE_CHARS = "-._~!$&'()*+"

# A share may name a subdirectory, so its path separators stay as they are
SHARE_PATH_SAFE_CHARS = SAFE_CHARS + "/"

_HEX_DIGITS = frozenset(string.hexdigits)


def escape(value: str, safe: str = SAFE_CHARS) -> str:
    """
    Escape a value so it can be embedded as a single field.

    Args:
        value: Plain ASCII string
        safe: Characters to leave unescaped

    Returns:
        The escaped string
    """
    if not value.isascii():
        raise EscapeError(f"Cannot escape \"{value}\": only ASCII characters are supported")
    return quote(value, safe=safe)


def unescape(value: str) -> str:
    """
    Decode %XX sequences in a value.

    Args:
        value: Escaped string, as found in a GVFS directory entry

    Returns:
        The unescaped string
    """
    result = []
    index = 0
    length = len(value)

    while index < length:
        char = value[index]
        if char != '%':
            result.append(char)
            index += 1
            continue

        hex_digits = value[index + 1:index + 3]
        if len(hex_digits) != 2 or not all(c in _HEX_DIGITS for c in hex_digits):
            raise EscapeError(f"Invalid escape sequence at position {index} in \"{value}\"")

        decoded = int(hex_digits, 16)
        if decoded > 127:
            raise EscapeError(f"Error unescaping \"{value}\": non-ASCII (UTF-8) encoding is not supported")

        result.append(chr(decoded))
        index += 3

    return ''.join(result)
