"""Data structures for lequel."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

# trigram key -> count (raw) or unit-vector component (normalized)
TrigramProfile = dict[int, float]

# Ordered lines of decoded, lowercased text
Text = list[str]

UNKNOWN: str = "unknown"


class DecodeMode(enum.Enum):
    UNICODE = "unicode"
    BYTEWISE = "bytewise"   # degraded: one character per raw byte


@dataclass(slots=True, frozen=True)
class DecodeResult:
    text: str
    mode: DecodeMode

    @property
    def fallback(self) -> bool:
        return self.mode is DecodeMode.BYTEWISE


@dataclass(slots=True, frozen=True)
class LanguageProfile:
    language_code: str
    trigram_profile: TrigramProfile   # normalized, read-only after load


@dataclass(slots=True, frozen=True)
class ScoredLanguage:
    language_code: str
    similarity: float


@dataclass(slots=True, frozen=True)
class IdentificationResult:
    language_code: str           # best code or UNKNOWN
    similarity: float            # best similarity, 0.0 when nothing was scored
    margin: float                # best minus runner-up
    n_trigrams: int              # distinct keys in the input profile
    ranking: list[ScoredLanguage] = field(default_factory=list)
