"""Shared fixtures for lequel tests."""

import pytest

import lequel
from lequel import (
    LanguageProfile,
    build_trigram_profile,
    normalize_trigram_profile,
    text_from_string,
)

ENGLISH_SAMPLE = (
    "The quick brown fox jumps over the lazy dog.\n"
    "She sells sea shells by the sea shore, and the shells she sells are "
    "surely sea shells.\n"
    "It was the best of times, it was the worst of times, it was the age of "
    "wisdom, it was the age of foolishness.\n"
    "Call me Ishmael. Some years ago, never mind how long precisely, having "
    "little or no money in my purse, I thought I would sail about a little "
    "and see the watery part of the world.\n"
    "The brown dog and the quick cat were both known in the town for their "
    "tricks.\n"
)

FRENCH_SAMPLE = (
    "Le renard brun rapide saute par-dessus le chien paresseux.\n"
    "Longtemps, je me suis couché de bonne heure. Parfois, à peine ma bougie "
    "éteinte, mes yeux se fermaient si vite que je n'avais pas le temps de "
    "me dire : je m'endors.\n"
    "Les enfants jouent dans le jardin avec leurs amis pendant que leurs "
    "parents préparent le dîner.\n"
    "Il était une fois une petite fille de village, la plus jolie qu'on eût "
    "su voir ; sa mère en était folle, et sa mère-grand plus folle encore.\n"
)

GERMAN_SAMPLE = (
    "Der schnelle braune Fuchs springt über den faulen Hund.\n"
    "Als Gregor Samsa eines Morgens aus unruhigen Träumen erwachte, fand er "
    "sich in seinem Bett zu einem ungeheueren Ungeziefer verwandelt.\n"
    "Die Kinder spielen mit ihren Freunden im Garten, während die Eltern "
    "das Abendessen vorbereiten.\n"
)


def make_language(code: str, sample: str) -> LanguageProfile:
    raw = build_trigram_profile(text_from_string(sample))
    return LanguageProfile(code, normalize_trigram_profile(raw))


@pytest.fixture(scope="session")
def languages():
    """Toy reference set: en, fr, de (in that order)."""
    return [
        make_language("en", ENGLISH_SAMPLE),
        make_language("fr", FRENCH_SAMPLE),
        make_language("de", GERMAN_SAMPLE),
    ]


@pytest.fixture(scope="session")
def identifier(languages):
    """Identifier over the toy reference set with default policy."""
    return lequel.LanguageIdentifier(languages)
