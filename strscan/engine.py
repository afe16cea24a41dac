"""Pattern engine interface and the adapter over Python's `re` module."""

from __future__ import annotations

import re
from collections.abc import Callable
from functools import lru_cache
from typing import Protocol, runtime_checkable

from .exceptions import EngineOverflowError
from .logger import get_logger
from .models import MatchResult, Span

logger = get_logger(__name__)


@runtime_checkable
class Pattern(Protocol):
    """Matching capability consumed by `StringScanner`.

    Register offsets in the returned `MatchResult` are relative to `offset`.
    Implementations raise `EngineOverflowError` when they run out of internal
    resources; returning None always means "no match".
    """

    def match_at(self, buffer: str | bytes, offset: int) -> MatchResult | None:
        """Match anchored at `offset`."""

    def search_from(self, buffer: str | bytes, offset: int) -> MatchResult | None:
        """Find the first match starting anywhere at or after `offset`."""


class RegexPattern:
    """Adapt a compiled `re.Pattern` to the `Pattern` interface.

    Args:
        regex: Compiled regular expression.
        fixed_anchor: When False, the engine sees only the text after
            `offset`, so ``\\A`` and ``^`` anchor at the scan pointer. When
            True, the engine sees the whole buffer starting at `offset`.

    Examples:
        RegexPattern(re.compile(r"\\w+")).match_at("test string", 5)
    """

    __slots__ = ("regex", "fixed_anchor")

    def __init__(self, regex: re.Pattern, fixed_anchor: bool = False):
        self.regex = regex
        self.fixed_anchor = fixed_anchor

    def __repr__(self) -> str:
        return f"RegexPattern({self.regex!r}, fixed_anchor={self.fixed_anchor})"

    def match_at(self, buffer: str | bytes, offset: int) -> MatchResult | None:
        return self._run(self.regex.match, buffer, offset)

    def search_from(self, buffer: str | bytes, offset: int) -> MatchResult | None:
        return self._run(self.regex.search, buffer, offset)

    def _run(
        self, method: Callable[..., re.Match | None], buffer: str | bytes, offset: int
    ) -> MatchResult | None:
        try:
            if self.fixed_anchor:
                found = method(buffer, offset)
                base = offset
            else:
                found = method(_tail(buffer, offset))
                base = 0
        except (RecursionError, OverflowError) as error:
            logger.debug("Pattern %r overflowed at offset %d", self.regex.pattern, offset)
            raise EngineOverflowError() from error

        if found is None:
            return None
        return MatchResult(registers=_registers(found, base))


def _tail(buffer: str | bytes, offset: int) -> str | memoryview:
    if isinstance(buffer, str):
        return buffer[offset:]
    # Zero-copy view; `re` accepts any bytes-like object
    return memoryview(buffer)[offset:]


def _registers(found: re.Match, base: int) -> tuple[Span | None, ...]:
    registers: list[Span | None] = []
    for index in range(found.re.groups + 1):
        begin, end = found.span(index)
        if begin == -1:
            registers.append(None)
        else:
            registers.append(Span(begin - base, end - base))
    return tuple(registers)


@lru_cache(maxsize=256)
def _adapter(regex: re.Pattern, fixed_anchor: bool) -> RegexPattern:
    return RegexPattern(regex, fixed_anchor)


def as_pattern(pattern: object, buffer: str | bytes, fixed_anchor: bool = False) -> Pattern:
    """Coerce a caller-supplied pattern argument into a `Pattern`.

    Args:
        pattern: Compiled `re.Pattern` or any object implementing `Pattern`.
        buffer: Buffer the pattern will run against; text patterns need a
            `str` buffer and bytes patterns a bytes buffer.
        fixed_anchor: Anchoring mode for `re.Pattern` adapters.

    Returns:
        Pattern: Object exposing `match_at` and `search_from`.

    Raises:
        TypeError: If `pattern` is neither a compiled regular expression nor a
            `Pattern`, or its text/bytes kind does not match the buffer.

    Examples:
        as_pattern(re.compile(r"\\d+"), "12 apples")
    """
    if isinstance(pattern, re.Pattern):
        if isinstance(pattern.pattern, str) != isinstance(buffer, str):
            expected = "str" if isinstance(buffer, str) else "bytes"
            raise TypeError(f"cannot use a non-{expected} pattern on a {expected} buffer")
        return _adapter(pattern, fixed_anchor)
    if isinstance(pattern, Pattern):
        return pattern
    raise TypeError(f"wrong argument type {type(pattern).__name__} (expected regexp)")
