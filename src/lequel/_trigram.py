"""Packing of 3-codepoint windows into integer trigram keys."""

from __future__ import annotations

from typing import Iterator

CODEPOINT_BITS: int = 21  # covers U+0000..U+10FFFF
_MASK: int = (1 << CODEPOINT_BITS) - 1
_SHIFT_1: int = CODEPOINT_BITS
_SHIFT_0: int = 2 * CODEPOINT_BITS

# Codepoint 0 never appears in a packed window that gets counted.
SENTINEL: int = 0


def pack_trigram(trigram: str) -> int:
    """Pack exactly three characters into one 63-bit key."""
    if len(trigram) != 3:
        raise ValueError(f"trigram must have 3 characters, got {len(trigram)}")
    return (ord(trigram[0]) << _SHIFT_0) | (ord(trigram[1]) << _SHIFT_1) | ord(trigram[2])


def unpack_trigram(key: int) -> str:
    """Inverse of pack_trigram."""
    if key < 0 or key >> (3 * CODEPOINT_BITS):
        raise ValueError(f"trigram key out of range: {key}")
    return (
        chr((key >> _SHIFT_0) & _MASK)
        + chr((key >> _SHIFT_1) & _MASK)
        + chr(key & _MASK)
    )


def iter_trigram_keys(line: str, *, skip_sentinel: bool = True) -> Iterator[int]:
    """Yield the key of every 3-character window of *line*, left to right.

    With skip_sentinel, windows containing U+0000 are dropped.
    """
    if len(line) < 3:
        return
    codes = [ord(ch) for ch in line]
    c0, c1 = codes[0], codes[1]
    for c2 in codes[2:]:
        if not skip_sentinel or (c0 and c1 and c2):
            yield (c0 << _SHIFT_0) | (c1 << _SHIFT_1) | c2
        c0, c1 = c1, c2
