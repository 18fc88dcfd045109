"""Trigram extraction, profile building, normalization and cosine similarity."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from ._trigram import iter_trigram_keys

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from ._types import TrigramProfile

logger = logging.getLogger(__name__)

# About 10 MB of text; bounds worst-case profiling time.
DEFAULT_MAX_CHARS: int = 10_000_000


def extract_trigrams(
    line: str, profile: dict[int, Any], *, skip_sentinel: bool = True
) -> int:
    """Count every 3-character window of *line* into *profile*.

    *line* must already be stripped of its terminator. Returns the number
    of windows counted.
    """
    n = 0
    for key in iter_trigram_keys(line, skip_sentinel=skip_sentinel):
        profile[key] = profile.get(key, 0) + 1
        n += 1
    return n


def build_trigram_profile(
    text: Iterable[str],
    *,
    max_lines: int | None = None,
    max_chars: int | None = DEFAULT_MAX_CHARS,
    skip_sentinel: bool = True,
) -> TrigramProfile:
    """Build a raw-count trigram profile from a sequence of lines.

    A trailing line feed, and one carriage return right before it, are
    dropped; any other carriage return is line content. Caps keep a prefix
    of the input: processing stops before the first line past *max_lines*,
    and the line that crosses *max_chars* is cut at the cap and is the last
    one profiled. ``None`` disables a cap.
    """
    counts: dict[int, int] = {}
    n_chars = 0

    for i, line in enumerate(text):
        if max_lines is not None and i >= max_lines:
            logger.debug("Line cap reached: profiled first %d lines", i)
            break
        if line.endswith("\n"):
            line = line[:-2] if line.endswith("\r\n") else line[:-1]
        capped = max_chars is not None and n_chars + len(line) > max_chars
        if capped:
            line = line[:max_chars - n_chars]
        n_chars += len(line)
        if len(line) >= 3:
            extract_trigrams(line, counts, skip_sentinel=skip_sentinel)
        if capped:
            logger.debug(
                "Character cap reached: profiled %d chars over %d lines",
                n_chars, i + 1,
            )
            break

    return {key: float(count) for key, count in counts.items()}


def normalize_trigram_profile(profile: Mapping[int, float]) -> TrigramProfile:
    """Return a copy of *profile* scaled to unit Euclidean norm.

    A zero-norm profile is returned unchanged; a single-entry profile is
    pinned to 1.0.
    """
    if len(profile) == 1:
        # w * w underflows for tiny weights; pin instead of dividing
        key, w = next(iter(profile.items()))
        return {key: 1.0} if w else dict(profile)
    norm = math.sqrt(sum(w * w for w in profile.values()))
    if norm == 0.0:
        return dict(profile)
    inv = 1.0 / norm
    return {key: w * inv for key, w in profile.items()}


def cosine_similarity(
    a: Mapping[int, float], b: Mapping[int, float]
) -> float:
    """Dot product of two normalized profiles (their cosine similarity)."""
    if not a or not b:
        return 0.0
    if len(a) > len(b):
        a, b = b, a
    dot = 0.0
    for key, wa in a.items():
        wb = b.get(key)
        if wb is not None:
            dot += wa * wb
    return dot
