"""UTF-8 decoding with a bytewise fallback, lowercasing and line splitting."""

from __future__ import annotations

import logging

from ._types import DecodeMode, DecodeResult, Text

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


def decode_bytes(data: bytes) -> DecodeResult:
    """Decode *data* as UTF-8 and lowercase it.

    Malformed input is not an error: every raw byte becomes one character
    (U+0000..U+00FF) and the result is tagged ``DecodeMode.BYTEWISE``.
    """
    if data.startswith(_UTF8_BOM):
        data = data[len(_UTF8_BOM):]
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.warning(
            "Input is not valid UTF-8 (%s at byte %d); decoding bytewise",
            exc.reason, exc.start,
        )
        return DecodeResult(data.decode("latin-1").lower(), DecodeMode.BYTEWISE)
    return DecodeResult(text.lower(), DecodeMode.UNICODE)


def split_lines(text: str) -> Text:
    """Split at line feeds, dropping one carriage return before each.

    The segment after the last line feed is always kept, so a trailing
    newline yields a final empty line.
    """
    lines = text.split("\n")
    for i in range(len(lines) - 1):
        if lines[i].endswith("\r"):
            lines[i] = lines[i][:-1]
    return lines


def text_from_string(s: str) -> Text:
    """Lowercase an already-decoded string and split it into lines."""
    return split_lines(s.lower())


def text_from_bytes(data: bytes) -> Text:
    """Decode raw bytes (with bytewise fallback) and split into lines."""
    return split_lines(decode_bytes(data).text)
