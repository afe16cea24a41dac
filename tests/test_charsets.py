import pytest

from strscan.charsets import canonical_encoding, char_length


@pytest.mark.parametrize(
    ("character", "expected"),
    [("a", 1), ("ñ", 2), ("あ", 3), ("😀", 4)],
)
def test_utf8_lengths(character: str, expected: int):
    assert char_length(character.encode("utf-8"), 0, "utf-8") == expected


def test_utf8_stray_continuation_byte_counts_as_one():
    assert char_length(b"\x81abc", 0, "utf-8") == 1


def test_length_is_clamped_to_buffer_end():
    assert char_length(b"a\xf0\x9f", 1, "utf-8") == 2


def test_text_buffers_count_code_points():
    assert char_length("😀", 0, "utf-8") == 1


def test_euc_jp_lengths():
    assert char_length("あ".encode("euc-jp"), 0, "euc-jp") == 2
    assert char_length(b"\x8e\xb1", 0, "euc-jp") == 2
    assert char_length(b"\x8f\xb0\xa1", 0, "euc-jp") == 3
    assert char_length(b"a", 0, "euc-jp") == 1


def test_shift_jis_lengths():
    assert char_length("あ".encode("shift_jis"), 0, "shift_jis") == 2
    assert char_length(b"\xb1", 0, "shift_jis") == 1


def test_binary_is_always_one_byte():
    assert char_length("あ".encode("utf-8"), 0, "binary") == 1


def test_canonical_encoding_aliases():
    assert canonical_encoding("UTF8") == "utf-8"
    assert canonical_encoding("sjis") == "shift_jis"
    assert canonical_encoding("EUCJP") == "euc-jp"
    assert canonical_encoding("none") == "binary"
    assert canonical_encoding("latin-1") == "latin-1"
