"""Monospace column widths for mixed ASCII / CJK text.

Widths are measured on the text as a terminal would draw it: SGR color
sequences are removed first, code points up to U+00FF take one column and
everything else is classified through the GBK codec, whose double-byte
characters are exactly the double-width ideographs and punctuation used in
the calendar. Code points GBK cannot encode fall back to a simple rule
(anything past ASCII is wide), so every input has a width.
"""
from __future__ import annotations

import re
from typing import Optional

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

DEFAULT_ENCODING = "gbk"


def strip_ansi(s: str) -> str:
    return ANSI_RE.sub("", s)


def fallback_char_width(ch: str) -> int:
    if ch in "\r\n":
        return 0
    return 1 if ord(ch) <= 0x7F else 2


def fallback_width(s: str) -> int:
    """Width of one line using only the ASCII / non-ASCII rule."""
    return sum(fallback_char_width(ch) for ch in s)


def char_width(ch: str, encoding: Optional[str] = DEFAULT_ENCODING) -> int:
    if ch == "\r":
        return 0
    if encoding is None:
        return fallback_char_width(ch)
    if ord(ch) <= 0xFF:
        return 1
    try:
        return len(ch.encode(encoding))
    except UnicodeEncodeError:
        return fallback_char_width(ch)


def line_width(line: str, encoding: Optional[str] = DEFAULT_ENCODING) -> int:
    return sum(char_width(ch, encoding) for ch in strip_ansi(line))


def string_width(s: str, encoding: Optional[str] = DEFAULT_ENCODING) -> int:
    """Maximum visual width over the lines of ``s``.

    ``encoding=None`` skips the codec and applies the fallback rule to every
    character.
    """
    if not s:
        return 0
    return max(line_width(line, encoding) for line in s.split("\n"))


def pad_right(s: str, width: int) -> str:
    """Append spaces until ``string_width(s) == width``; no-op if already wider."""
    diff = width - string_width(s)
    if diff <= 0:
        return s
    return s + " " * diff
