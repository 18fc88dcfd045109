"""Tests for trigram key packing."""

import pytest

from lequel import iter_trigram_keys, pack_trigram, unpack_trigram
from lequel._trigram import CODEPOINT_BITS


def test_round_trip_ascii():
    assert unpack_trigram(pack_trigram("the")) == "the"


def test_round_trip_unicode_range():
    """Characters across BMP and astral planes survive packing."""
    for window in ("ñçé", "дом", "日本語", " \t!", "\U0010ffff\U0001f600a"):
        assert unpack_trigram(pack_trigram(window)) == window


def test_order_matters():
    assert pack_trigram("abc") != pack_trigram("cba")
    assert pack_trigram("abc") != pack_trigram("acb")


def test_keys_are_ordered_like_windows():
    """Keys compare like the codepoint sequences they encode."""
    assert pack_trigram("aab") < pack_trigram("aba") < pack_trigram("baa")


def test_key_fits_63_bits():
    key = pack_trigram("\U0010ffff" * 3)
    assert 0 <= key < 2 ** (3 * CODEPOINT_BITS)


def test_pack_rejects_wrong_length():
    with pytest.raises(ValueError):
        pack_trigram("ab")
    with pytest.raises(ValueError):
        pack_trigram("abcd")


def test_unpack_rejects_out_of_range():
    with pytest.raises(ValueError):
        unpack_trigram(-1)
    with pytest.raises(ValueError):
        unpack_trigram(1 << 63)


def test_iter_keys_matches_pack():
    keys = list(iter_trigram_keys("hello"))
    assert keys == [pack_trigram("hel"), pack_trigram("ell"), pack_trigram("llo")]


def test_iter_keys_short_line():
    assert list(iter_trigram_keys("")) == []
    assert list(iter_trigram_keys("ab")) == []


def test_iter_keys_skips_sentinel_windows():
    """Windows touching U+0000 are dropped unless skipping is disabled."""
    line = "ab\x00cd"
    assert list(iter_trigram_keys(line)) == []
    assert len(list(iter_trigram_keys(line, skip_sentinel=False))) == 3
    assert list(iter_trigram_keys("xa\x00cde")) == [pack_trigram("cde")]
