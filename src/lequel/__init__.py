"""Lequel: language identification by character-trigram cosine similarity."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ._classifier import DEFAULT_THRESHOLD, LanguageIdentifier, identify_language
from ._decoder import decode_bytes, split_lines, text_from_bytes, text_from_string
from ._errors import (
    LequelChecksumError,
    LequelError,
    LequelFormatError,
    LequelVersionError,
)
from ._profile import (
    DEFAULT_MAX_CHARS,
    build_trigram_profile,
    cosine_similarity,
    extract_trigrams,
    normalize_trigram_profile,
)
from ._trigram import iter_trigram_keys, pack_trigram, unpack_trigram
from ._types import (
    UNKNOWN,
    DecodeMode,
    DecodeResult,
    IdentificationResult,
    LanguageProfile,
    ScoredLanguage,
    Text,
    TrigramProfile,
)

if TYPE_CHECKING:
    from pathlib import Path

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "load",
    "DEFAULT_MAX_CHARS",
    "DEFAULT_THRESHOLD",
    "DecodeMode",
    "DecodeResult",
    "IdentificationResult",
    "LanguageIdentifier",
    "LanguageProfile",
    "LequelChecksumError",
    "LequelError",
    "LequelFormatError",
    "LequelVersionError",
    "ScoredLanguage",
    "Text",
    "TrigramProfile",
    "UNKNOWN",
    "build_trigram_profile",
    "cosine_similarity",
    "decode_bytes",
    "extract_trigrams",
    "identify_language",
    "iter_trigram_keys",
    "normalize_trigram_profile",
    "pack_trigram",
    "profile_from_counts",
    "split_lines",
    "text_from_bytes",
    "text_from_string",
    "unpack_trigram",
]


def load(data_dir: Path | str, **overrides: float | int | None) -> LanguageIdentifier:
    """Load a profile bundle and return a ready-to-use LanguageIdentifier.

    Args:
        data_dir: Directory holding manifest.json and the .bin payloads.
        **overrides: LanguageIdentifier keyword arguments. These win over
            the bundle's constants.bin values.
    """
    from ._loader import load_data

    data = load_data(data_dir)
    options = {**data["constants"], **overrides}
    return LanguageIdentifier(data["languages"], **options)


# Deferred import so the loader (and msgpack) is only pulled in when
# reference profiles are built, not for plain classification.
def __getattr__(name: str):
    if name == "profile_from_counts":
        from ._loader import profile_from_counts
        return profile_from_counts
    raise AttributeError(f"module 'lequel' has no attribute {name!r}")
