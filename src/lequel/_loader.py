"""Reference-profile loading, manifest validation, and SHA-256 checksum verification."""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import msgpack

from ._errors import (
    LequelChecksumError,
    LequelError,
    LequelFormatError,
    LequelVersionError,
)
from ._profile import normalize_trigram_profile
from ._trigram import pack_trigram
from ._types import LanguageProfile

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

_EXPECTED_VERSION = "1.0"

# payload file -> what it carries, used in error messages
_DATA_FILES = {
    "languages.bin": "language trigram tables",
    "constants.bin": "decision-policy constants",
}

_CONSTANT_KEYS = ("threshold", "min_margin")


def profile_from_counts(
    language_code: str, rows: Iterable[tuple[str, int | float]]
) -> LanguageProfile:
    """Build a normalized LanguageProfile from (trigram, count) rows.

    Trigrams are lowercased to match the extractor. Rows that are not exactly
    three characters, or whose count is not positive, are skipped. Repeated
    trigrams accumulate.
    """
    counts: dict[int, float] = {}
    skipped = 0
    for trigram, count in rows:
        trigram = trigram.lower()
        if len(trigram) != 3 or count <= 0:
            skipped += 1
            continue
        key = pack_trigram(trigram)
        counts[key] = counts.get(key, 0.0) + float(count)
    if skipped:
        logger.warning(
            "Skipped %d malformed trigram rows for language %r",
            skipped, language_code,
        )
    return LanguageProfile(language_code, normalize_trigram_profile(counts))


def _sha256(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()


def _read_manifest(data_dir: Path) -> dict[str, Any]:
    manifest_path = data_dir / "manifest.json"
    if not manifest_path.exists():
        raise LequelError(f"manifest.json not found in {data_dir}")
    with open(manifest_path, encoding="utf-8") as f:
        try:
            manifest = json.load(f)
        except json.JSONDecodeError as exc:
            raise LequelFormatError(f"manifest.json is not valid JSON: {exc}") from exc
    if not isinstance(manifest, dict) or not isinstance(manifest.get("files", {}), dict):
        raise LequelFormatError("manifest.json must map \"files\" to checksums")
    return manifest


def _validate_manifest(manifest: dict[str, Any], data_dir: Path) -> None:
    version = manifest.get("version")
    if version != _EXPECTED_VERSION:
        raise LequelVersionError(
            f"Expected data version {_EXPECTED_VERSION!r}, got {version!r}"
        )
    checksums = manifest.get("files", {})
    for filename, kind in _DATA_FILES.items():
        filepath = data_dir / filename
        if not filepath.exists():
            raise LequelError(f"Missing data file for {kind}: {filepath}")
        expected = checksums.get(filename)
        if expected is None:
            raise LequelError(f"No checksum in manifest for {kind} ({filename})")
        actual = _sha256(filepath)
        if actual != expected:
            raise LequelChecksumError(
                f"Checksum mismatch for {kind} ({filename}): "
                f"expected {expected[:16]}..., got {actual[:16]}..."
            )


def _load_msgpack(path: Path, **kwargs: Any) -> Any:
    with open(path, "rb") as f:
        try:
            return msgpack.unpackb(f.read(), raw=False, **kwargs)
        except (ValueError, msgpack.UnpackException) as exc:
            raise LequelFormatError(f"Cannot decode {path.name}: {exc}") from exc


def load_data(data_dir: Path | str) -> dict[str, Any]:
    """Load and validate a profile bundle, returning languages and constants."""
    data_dir = Path(data_dir)

    manifest = _read_manifest(data_dir)
    _validate_manifest(manifest, data_dir)

    # languages: list[[code, [[trigram, count], ...]]], classifier order
    raw_languages = _load_msgpack(data_dir / "languages.bin")
    if not isinstance(raw_languages, list):
        raise LequelFormatError("languages.bin must hold a list of [code, rows] pairs")
    languages: list[LanguageProfile] = []
    seen: set[str] = set()
    for entry in raw_languages:
        try:
            code, rows = entry
        except (TypeError, ValueError) as exc:
            raise LequelFormatError(f"Malformed language entry: {entry!r}") from exc
        if code in seen:
            raise LequelFormatError(f"Duplicate language code {code!r}")
        seen.add(code)
        try:
            languages.append(profile_from_counts(code, rows))
        except (AttributeError, TypeError, ValueError) as exc:
            raise LequelFormatError(f"Malformed trigram rows for {code!r}: {exc}") from exc
        logger.debug("Loaded trigram profile for %r", code)

    # constants: optional decision-policy overrides
    raw_constants = _load_msgpack(data_dir / "constants.bin")
    if not isinstance(raw_constants, dict):
        raise LequelFormatError("constants.bin must hold a map")
    constants: dict[str, float] = {}
    for key in _CONSTANT_KEYS:
        if key not in raw_constants:
            continue
        try:
            constants[key] = float(raw_constants[key])
        except (TypeError, ValueError) as exc:
            raise LequelFormatError(
                f"Constant {key!r} in constants.bin must be a number, "
                f"got {raw_constants[key]!r}"
            ) from exc

    return {
        "languages": languages,
        "constants": constants,
    }
