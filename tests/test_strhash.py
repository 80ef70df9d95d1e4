from hypothesis import given, strategies as st

from nbodymap.strhash import strhash


def test_empty_is_offset_basis():
    assert strhash("") == 2166136261
    assert strhash(b"") == 2166136261


def test_none_hashes_to_zero():
    assert strhash(None) == 0


def test_known_vectors():
    assert strhash("a") == 0xE40C292C
    assert strhash("foobar") == 0xBF9CF968


def test_str_and_bytes_agree():
    assert strhash("keyword") == strhash(b"keyword")


def test_prefix_of_bytes_matches_slice():
    data = b"gravity,black holes"
    assert strhash(data[:7]) == strhash("gravity")


@given(st.binary())
def test_hash_is_32_bit(data):
    value = strhash(data)
    assert 0 <= value < 2**32


@given(st.text())
def test_text_hashes_as_utf8(text):
    assert strhash(text) == strhash(text.encode("utf-8"))