"""Text utility helpers."""

from __future__ import annotations

from bisect import bisect_right
import logging
import os
import re

from ..model import Position

_WHITESPACE_RE = re.compile(r"\s+")
_LINE_BREAK_RE = re.compile(r"\r?\n")

LOGGER = logging.getLogger("baseline_lite")


def normalize_whitespace(value: str) -> str:
    """Collapse repeated whitespace and trim ends."""
    return _WHITESPACE_RE.sub(" ", value).strip()


def split_lines(value: str) -> list[str]:
    """Split on LF or CRLF only, matching editor line numbering."""
    return _LINE_BREAK_RE.split(value)


def blank_out(value: str) -> str:
    """Same-length run of spaces for ``value``, keeping its line breaks."""
    return "".join(ch if ch in "\r\n" else " " for ch in value)


class LineIndex:
    """Convert absolute character offsets into line/character positions."""

    def __init__(self, value: str) -> None:
        self._starts = [0]
        for match in re.finditer(r"\n", value):
            self._starts.append(match.end())
        self._length = len(value)

    def position(self, offset: int) -> Position:
        offset = max(0, min(offset, self._length))
        line = bisect_right(self._starts, offset) - 1
        return Position(line, offset - self._starts[line])


def utf8_to_char_offset(source: bytes, byte_offset: int) -> int:
    """Translate a UTF-8 byte offset into a str index."""
    return len(source[:byte_offset].decode("utf-8", errors="ignore"))


def debug_enabled() -> bool:
    """Check debug mode env flag."""
    return os.environ.get("BASELINE_LITE_DEBUG", "").strip() == "1"


def debug_log(message: str, *args: object) -> None:
    """Emit debug logs to stderr in debug mode only."""
    if debug_enabled():
        LOGGER.debug(message, *args)
