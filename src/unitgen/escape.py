"""Escaping of command arguments for systemd command lines.

systemd parses ExecStart= itself: it expands ``$VAR`` and ``%`` specifiers,
splits words on whitespace and processes C-style backslash escapes. Every
argument is escaped so that parsing reproduces it byte for byte.
See: https://www.freedesktop.org/software/systemd/man/systemd.service.html#Command%20lines
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING

from .errors import ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence

_WHITESPACE = (" ", "\t")

_SHORT_ESCAPES: dict[str, str] = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}

_SHORT_UNESCAPES: dict[str, str] = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "s": " ",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

# Escape letter -> number of hex digits
_HEX_ESCAPES: dict[str, int] = {"x": 2, "u": 4, "U": 8}


def quote_c_string(value: str) -> str:
    """Return ``value`` as a double-quoted C-style string literal.

    Printable characters are kept as-is except ``\\`` and ``"``.

    Examples:
        >>> quote_c_string("hello world")
        '"hello world"'
        >>> quote_c_string('a "b"\\tc')
        '"a \\\\"b\\\\"\\\\tc"'
    """
    out = ['"']
    for ch in value:
        if ch in _SHORT_ESCAPES:
            out.append(_SHORT_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        elif ord(ch) < 0x80:
            out.append(f"\\x{ord(ch):02x}")
        elif ord(ch) < 0x10000:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(f"\\U{ord(ch):08x}")
    out.append('"')
    return "".join(out)


def escape_systemd_argument(arg: str) -> str:
    """Escape a single argument for a systemd command line."""
    arg = arg.replace("$", "$$").replace("%", "%%")
    if any(ws in arg for ws in _WHITESPACE):
        return quote_c_string(arg)
    if "\\" in arg:
        # quote_c_string already escapes backslashes
        return arg.replace("\\", "\\\\")
    return arg


def escape_systemd_arguments(command: Sequence[str]) -> list[str]:
    """Escape every argument so systemd reads it back as one exact word.

    ``$`` and ``%`` are doubled to suppress variable and specifier
    expansion. Arguments containing whitespace are quoted, otherwise
    backslashes are doubled.

    Args:
        command: Arguments to escape, payload included.

    Returns:
        New list of the same length.
    """
    return [escape_systemd_argument(arg) for arg in command]


def _cunescape(value: str) -> str:
    """Process C-style backslash escapes the way systemd does."""
    out: list[str] = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        if i + 1 >= len(value):
            raise ValidationError(f"Trailing backslash in {value!r}")
        code = value[i + 1]
        if code in _SHORT_UNESCAPES:
            out.append(_SHORT_UNESCAPES[code])
            i += 2
        elif code in _HEX_ESCAPES:
            width = _HEX_ESCAPES[code]
            digits = value[i + 2 : i + 2 + width]
            if len(digits) != width or any(d not in string.hexdigits for d in digits):
                raise ValidationError(f"Invalid \\{code} escape in {value!r}")
            try:
                out.append(chr(int(digits, 16)))
            except ValueError as e:  # beyond U+10FFFF
                raise ValidationError(f"Invalid \\{code} escape in {value!r}") from e
            i += 2 + width
        elif code in "01234567":
            digits = value[i + 1 : i + 4]
            if len(digits) != 3 or any(d not in "01234567" for d in digits):
                raise ValidationError(f"Invalid octal escape in {value!r}")
            out.append(chr(int(digits, 8)))
            i += 4
        else:
            raise ValidationError(f"Unknown escape \\{code} in {value!r}")
    return "".join(out)


def unescape_systemd_argument(arg: str) -> str:
    """Recover the original argument from one escaped systemd word.

    Inverse of escape_systemd_argument(): strips enclosing double quotes,
    resolves backslash escapes, then collapses ``$$`` and ``%%``.

    Raises:
        ValidationError: If the word holds an invalid escape sequence.
    """
    if len(arg) >= 2 and arg[0] == arg[-1] == '"':
        arg = arg[1:-1]
    arg = _cunescape(arg)
    return arg.replace("$$", "$").replace("%%", "%")
