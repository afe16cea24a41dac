"""Character boundary functions for byte buffers.

Each function returns the length in bytes of the character whose first byte
is given. Text (``str``) buffers do not go through these tables: one code
point is always one character.
"""

from __future__ import annotations

from collections.abc import Callable


def _utf8_length(lead: int) -> int:
    if lead < 0x80:
        return 1
    if 0xC0 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF7:
        return 4
    # Stray continuation byte or invalid lead byte
    return 1


def _euc_jp_length(lead: int) -> int:
    if lead == 0x8E:
        return 2
    if lead == 0x8F:
        return 3
    if 0xA1 <= lead <= 0xFE:
        return 2
    return 1


def _shift_jis_length(lead: int) -> int:
    if 0x81 <= lead <= 0x9F or 0xE0 <= lead <= 0xFC:
        return 2
    return 1


def _single_byte_length(lead: int) -> int:
    return 1


CHAR_LENGTH_FUNCTIONS: dict[str, Callable[[int], int]] = {
    "utf-8": _utf8_length,
    "euc-jp": _euc_jp_length,
    "shift_jis": _shift_jis_length,
    "binary": _single_byte_length,
    "ascii": _single_byte_length,
}

ENCODING_ALIASES = {
    "utf8": "utf-8",
    "eucjp": "euc-jp",
    "euc_jp": "euc-jp",
    "sjis": "shift_jis",
    "shift-jis": "shift_jis",
    "none": "binary",
    "us-ascii": "ascii",
}


def canonical_encoding(name: str) -> str:
    """Fold an encoding name onto its canonical table key.

    Args:
        name: Encoding name, case-insensitive, possibly an alias.

    Returns:
        str: Canonical name. Unknown names are returned lowercased so that
            validation can report them.

    Examples:
        canonical_encoding("UTF8")  # "utf-8"
        canonical_encoding("sjis")  # "shift_jis"
    """
    lowered = name.lower()
    return ENCODING_ALIASES.get(lowered, lowered)


def char_length(buffer: str | bytes, pos: int, encoding: str = "utf-8") -> int:
    """Return the length of the character starting at `pos`.

    The result is clamped so it never runs past the end of `buffer`.

    Args:
        buffer: Text or bytes being scanned.
        pos: Offset of the first unit of the character; must be inside `buffer`.
        encoding: Canonical encoding name used for byte buffers.

    Returns:
        int: Number of units (code points or bytes) that make up the character.

    Raises:
        KeyError: If `encoding` has no registered boundary function.

    Examples:
        char_length("héllo", 1)  # 1
        char_length("héllo".encode(), 1)  # 2
        char_length(b"\\xe3\\x81", 0)  # 2, clamped from 3
    """
    if isinstance(buffer, str):
        return 1

    length = CHAR_LENGTH_FUNCTIONS[encoding](buffer[pos])
    remaining = len(buffer) - pos
    return min(length, remaining)
