"""LanguageIdentifier: cosine-similarity classification over trigram profiles."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Union

from ._decoder import text_from_bytes, text_from_string
from ._profile import (
    DEFAULT_MAX_CHARS,
    build_trigram_profile,
    cosine_similarity,
    normalize_trigram_profile,
)
from ._types import UNKNOWN, IdentificationResult, ScoredLanguage, Text

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ._types import LanguageProfile

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD: float = 0.03

TextInput = Union[Text, str, bytes]


def _as_text(text: TextInput) -> Text:
    if isinstance(text, bytes):
        return text_from_bytes(text)
    if isinstance(text, str):
        return text_from_string(text)
    return text


def _select(
    codes: Sequence[str],
    scores: Sequence[float],
    threshold: float,
    min_margin: float,
) -> tuple[str, float, float]:
    """First-max-wins scan. Returns (code or UNKNOWN, best, margin)."""
    best_idx = -1
    best = 0.0
    second = 0.0
    for i, s in enumerate(scores):
        if best_idx < 0 or s > best:
            if best_idx >= 0:
                second = best
            best_idx = i
            best = s
        elif s > second:
            second = s
    if best_idx < 0:
        return UNKNOWN, 0.0, 0.0
    margin = best - second if len(scores) > 1 else best
    if best <= threshold:
        return UNKNOWN, best, margin
    if min_margin > 0.0 and margin < min_margin:
        return UNKNOWN, best, margin
    return codes[best_idx], best, margin


class LanguageIdentifier:
    """Holds a set of language profiles and the decision policy.

    Language order matters: on an exact similarity tie the language that
    comes first wins.
    """

    __slots__ = (
        "_languages", "_codes", "_threshold", "_min_margin",
        "_max_lines", "_max_chars", "_max_workers",
    )

    def __init__(
        self,
        languages: Sequence[LanguageProfile],
        *,
        threshold: float = DEFAULT_THRESHOLD,
        min_margin: float = 0.0,
        max_lines: int | None = None,
        max_chars: int | None = DEFAULT_MAX_CHARS,
        max_workers: int | None = None,
    ) -> None:
        if threshold < 0.0:
            raise ValueError(f"threshold must be >= 0, got {threshold}")
        if min_margin < 0.0:
            raise ValueError(f"min_margin must be >= 0, got {min_margin}")
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._languages = tuple(languages)
        self._codes = tuple(lang.language_code for lang in self._languages)
        self._threshold = threshold
        self._min_margin = min_margin
        self._max_lines = max_lines
        self._max_chars = max_chars
        self._max_workers = max_workers

    @property
    def language_codes(self) -> tuple[str, ...]:
        return self._codes

    @property
    def threshold(self) -> float:
        return self._threshold

    # -- Public API --

    def identify(self, text: TextInput) -> str:
        """Return the best language code for *text*, or ``"unknown"``."""
        try:
            return self._identify(text, top_k=0).language_code
        except Exception:
            logger.exception("Language identification failed; returning unknown")
            return UNKNOWN

    def identify_batch(self, texts: Sequence[TextInput]) -> list[str]:
        """Identify multiple texts."""
        return [self.identify(t) for t in texts]

    def identify_detailed(
        self, text: TextInput, top_k: int = 5
    ) -> IdentificationResult:
        """Like identify(), but also report scores and the top-k ranking."""
        if top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {top_k}")
        try:
            return self._identify(text, top_k=top_k)
        except Exception:
            logger.exception("Language identification failed; returning unknown")
            return IdentificationResult(UNKNOWN, 0.0, 0.0, 0)

    def rank(
        self, text: TextInput, top_k: int | None = None
    ) -> list[ScoredLanguage]:
        """All languages by similarity, highest first; ties keep input order."""
        if top_k is not None and top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {top_k}")
        lines = _as_text(text)
        if not lines or not self._languages:
            return []
        profile = self.build_profile(lines)
        if not profile:
            return []
        ranking = self._ranking(self.score_profile(profile))
        return ranking if top_k is None else ranking[:top_k]

    def build_profile(self, text: TextInput) -> dict[int, float]:
        """Normalized input profile, built under this identifier's caps."""
        raw = build_trigram_profile(
            _as_text(text), max_lines=self._max_lines, max_chars=self._max_chars,
        )
        return normalize_trigram_profile(raw)

    def score_profile(self, profile: Mapping[int, float]) -> list[float]:
        """Similarity of a normalized *profile* to every language, in order."""
        languages = self._languages
        workers = self._max_workers
        if workers is not None and workers > 1 and len(languages) > 1:
            # Executor.map yields in submission order, so the reduction that
            # follows sees the same sequence as the serial path.
            with ThreadPoolExecutor(max_workers=workers) as pool:
                return list(pool.map(
                    lambda lang: cosine_similarity(profile, lang.trigram_profile),
                    languages,
                ))
        return [cosine_similarity(profile, lang.trigram_profile) for lang in languages]

    # -- Internal methods --

    def _identify(self, text: TextInput, top_k: int) -> IdentificationResult:
        lines = _as_text(text)
        if not lines or not self._languages:
            return IdentificationResult(UNKNOWN, 0.0, 0.0, 0)

        profile = self.build_profile(lines)
        if not profile:
            return IdentificationResult(UNKNOWN, 0.0, 0.0, 0)

        scores = self.score_profile(profile)
        code, best, margin = _select(
            self._codes, scores, self._threshold, self._min_margin,
        )
        ranking = self._ranking(scores)[:top_k] if top_k else []
        return IdentificationResult(
            language_code=code,
            similarity=best,
            margin=margin,
            n_trigrams=len(profile),
            ranking=ranking,
        )

    def _ranking(self, scores: Sequence[float]) -> list[ScoredLanguage]:
        order = sorted(range(len(scores)), key=lambda i: scores[i], reverse=True)
        return [ScoredLanguage(self._codes[i], scores[i]) for i in order]


def identify_language(
    text: TextInput,
    languages: Sequence[LanguageProfile],
    *,
    threshold: float = DEFAULT_THRESHOLD,
    min_margin: float = 0.0,
    max_workers: int | None = None,
) -> str:
    """One-shot identification of *text* against *languages*."""
    if not text or not languages:
        return UNKNOWN
    identifier = LanguageIdentifier(
        languages,
        threshold=threshold,
        min_margin=min_margin,
        max_workers=max_workers,
    )
    return identifier.identify(text)
