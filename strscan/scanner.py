"""Lexical scanning over a string with a movable scan pointer."""

from __future__ import annotations

import operator

from .charsets import char_length
from .config import ScannerConfig, normalize_config, validate_config
from .engine import as_pattern
from .exceptions import InvalidStateError, PositionOutOfRangeError, UninitializedError
from .models import UNMATCHED, Matched, MatchState, Span


def _coerce_buffer(value: object) -> str | bytes:
    if isinstance(value, (str, bytes)):
        return value
    if isinstance(value, (bytearray, memoryview)):
        # Snapshot mutable input so returned substrings never alias it
        return bytes(value)
    raise TypeError(f"wrong argument type {type(value).__name__} (expected str or bytes)")


class StringScanner:
    """Scan a string with regular expressions from a movable scan pointer.

    The scan pointer sits between characters. Anchored operations (`scan`,
    `skip`, `check`, `match`) only succeed when the pattern matches right at
    the pointer; the ``_until`` family and `exist` search forward from it.
    After every attempt the match data (`matched`, `group`, `pre_match`,
    `post_match`) describes that attempt, and is None when it failed.

    Buffers may be `str` (positions count code points) or bytes (positions
    count bytes and `getch` follows the configured encoding). Patterns must
    be of the same kind as the buffer.

    A scanner is not thread-safe. Sharing one between threads without
    external locking is undefined behavior.

    Args:
        string: Text to scan. A scanner created without one raises
            `UninitializedError` until `string` is assigned.
        config: Scanner configuration. Defaults to a new `ScannerConfig`.

    Raises:
        ConfigError: If `config` fails validation.
        TypeError: If `string` is not text or bytes.

    Examples:
        s = StringScanner("test string")
        s.scan(re.compile(r"\\w+"))  # "test"
        s.scan(re.compile(r"\\s+"))  # " "
        s.pos  # 5
    """

    def __init__(self, string: str | bytes | None = None, config: ScannerConfig | None = None):
        config = normalize_config(config or ScannerConfig())
        validate_config(config)
        self._config = config
        self._string: str | bytes | None = None if string is None else _coerce_buffer(string)
        self._curr = 0
        self._state: MatchState = UNMATCHED

    # Buffer

    @property
    def config(self) -> ScannerConfig:
        return self._config

    @property
    def string(self) -> str | bytes:
        """The buffer being scanned."""
        return self._require_string()

    @string.setter
    def string(self, value: str | bytes) -> None:
        self._string = _coerce_buffer(value)
        self._curr = 0
        self._state = UNMATCHED

    def concat(self, value: str | bytes) -> StringScanner:
        """Append `value` to the buffer without moving the scan pointer.

        Match data stays valid because appending never shifts existing offsets.

        Raises:
            TypeError: If `value` is not of the buffer's kind (text or bytes).

        Examples:
            s = StringScanner("Fri Dec 12 1975 14:39")
            s.concat(" +1000 GMT").string  # "Fri Dec 12 1975 14:39 +1000 GMT"
        """
        string = self._require_string()
        addition = _coerce_buffer(value)
        if isinstance(addition, str) != isinstance(string, str):
            raise TypeError(f"cannot append {type(addition).__name__} to {type(string).__name__}")
        self._string = string + addition
        return self

    __iadd__ = concat

    # Scan pointer

    @property
    def pos(self) -> int:
        """Scan pointer: 0 after `reset`, ``len(string)`` after `terminate`.

        Assigning accepts negative values counted from the end and does not
        touch the match data.

        Raises:
            PositionOutOfRangeError: If the position lies outside the buffer.
            TypeError: If the position is not an integer.
        """
        self._require_string()
        return self._curr

    @pos.setter
    def pos(self, value: int) -> None:
        string = self._require_string()
        position = operator.index(value)
        if position < 0:
            position += len(string)
        if position < 0 or position > len(string):
            raise PositionOutOfRangeError(position, len(string))
        self._curr = position

    pointer = pos

    def reset(self) -> StringScanner:
        """Move the scan pointer to the start and clear match data."""
        self._require_string()
        self._curr = 0
        self._state = UNMATCHED
        return self

    def terminate(self) -> StringScanner:
        """Move the scan pointer to the end and clear match data."""
        string = self._require_string()
        self._curr = len(string)
        self._state = UNMATCHED
        return self

    clear = terminate

    def unscan(self) -> StringScanner:
        """Move the scan pointer back to where it was before the last match.

        Only one previous position is remembered.

        Raises:
            InvalidStateError: If the last attempt failed or nothing has been
                matched since the pointer was last set.

        Examples:
            s = StringScanner("test string")
            s.scan(re.compile(r"\\w+"))  # "test"
            s.unscan()
            s.scan(re.compile(r".."))  # "te"
        """
        self._require_string()
        state = self._state
        if state is UNMATCHED:
            raise InvalidStateError()
        self._curr = state.prev
        self._state = UNMATCHED
        return self

    # Matching

    def _do_scan(
        self, pattern: object, advance: bool, return_string: bool, anchored: bool
    ) -> str | bytes | int | None:
        string = self._require_string()
        engine = as_pattern(pattern, string, self._config.fixed_anchor)

        self._state = UNMATCHED
        if self._curr >= len(string):
            return None

        if anchored:
            result = engine.match_at(string, self._curr)
        else:
            result = engine.search_from(string, self._curr)
        if result is None:
            return None

        prev = self._curr
        self._state = Matched(prev=prev, registers=result.registers)
        end = result.registers[0].end
        if advance:
            self._curr = prev + end
        if return_string:
            return self._extract_beg_len(prev, end)
        return end

    def scan(self, pattern: object) -> str | bytes | None:
        """Match `pattern` at the scan pointer, advance past it and return the text.

        Examples:
            s = StringScanner("test string")
            s.scan(re.compile(r"\\w+"))  # "test"
            s.scan(re.compile(r"\\w+"))  # None
        """
        return self._do_scan(pattern, advance=True, return_string=True, anchored=True)

    def match(self, pattern: object) -> int | None:
        """Return the length of a match at the scan pointer without advancing."""
        return self._do_scan(pattern, advance=False, return_string=False, anchored=True)

    def skip(self, pattern: object) -> int | None:
        """Like `scan`, but return the match length instead of its text."""
        return self._do_scan(pattern, advance=True, return_string=False, anchored=True)

    def check(self, pattern: object) -> str | bytes | None:
        """Return what `scan` would return without advancing the scan pointer.

        The match data is updated, so a failed check clears `matched`.
        """
        return self._do_scan(pattern, advance=False, return_string=True, anchored=True)

    def scan_full(self, pattern: object, advance: bool, return_string: bool):
        """Anchored match with explicit advance and return-value choices."""
        return self._do_scan(pattern, bool(advance), bool(return_string), anchored=True)

    def scan_until(self, pattern: object) -> str | bytes | None:
        """Search forward for `pattern` and consume everything through the match.

        Returns:
            The text from the old scan pointer to the end of the match, or None.

        Examples:
            s = StringScanner("Fri Dec 12 1975 14:39")
            s.scan_until(re.compile(r"1"))  # "Fri Dec 1"
            s.pre_match  # "Fri Dec "
        """
        return self._do_scan(pattern, advance=True, return_string=True, anchored=False)

    def exist(self, pattern: object) -> int | None:
        """Return the distance to the end of the next match, without advancing."""
        return self._do_scan(pattern, advance=False, return_string=False, anchored=False)

    def skip_until(self, pattern: object) -> int | None:
        """Like `scan_until`, but return the number of characters advanced."""
        return self._do_scan(pattern, advance=True, return_string=False, anchored=False)

    def check_until(self, pattern: object) -> str | bytes | None:
        """Return what `scan_until` would return without advancing."""
        return self._do_scan(pattern, advance=False, return_string=True, anchored=False)

    def search_full(self, pattern: object, advance: bool, return_string: bool):
        """Forward search with explicit advance and return-value choices."""
        return self._do_scan(pattern, bool(advance), bool(return_string), anchored=False)

    # Stepping

    def getch(self) -> str | bytes | None:
        """Consume one character and return it.

        On bytes buffers the character length follows `ScannerConfig.encoding`
        and is cut short at the end of the buffer.

        Examples:
            s = StringScanner("ab")
            s.getch()  # "a"
            s.getch()  # "b"
            s.getch()  # None
        """
        string = self._require_string()
        self._state = UNMATCHED
        if self._curr >= len(string):
            return None
        return self._advance_by(char_length(string, self._curr, self._config.encoding))

    def get_byte(self) -> str | bytes | None:
        """Consume exactly one unit (a byte, or a code point for text)."""
        string = self._require_string()
        self._state = UNMATCHED
        if self._curr >= len(string):
            return None
        return self._advance_by(1)

    getbyte = get_byte

    def _advance_by(self, length: int) -> str | bytes:
        prev = self._curr
        self._curr = prev + length
        self._state = Matched(prev=prev, registers=(Span(0, length),))
        return self._extract_range(prev, self._curr)

    def peek(self, length: int) -> str | bytes:
        """Return up to `length` characters after the scan pointer without moving it.

        Raises:
            ValueError: If `length` is negative.
        """
        string = self._require_string()
        length = operator.index(length)
        if length < 0:
            raise ValueError("negative string size (or size too big)")
        if self._curr >= len(string):
            return string[:0]
        return self._extract_beg_len(self._curr, length)

    peep = peek

    # Position queries

    @property
    def eos(self) -> bool:
        """True when the scan pointer is at the end of the buffer."""
        return self._curr >= len(self._require_string())

    empty = eos

    @property
    def has_rest(self) -> bool:
        return not self.eos

    @property
    def bol(self) -> bool | None:
        """True at the start of the buffer or right after a newline.

        None when the scan pointer lies beyond the buffer. No public operation
        leaves it there, so that branch only guards direct state changes.
        """
        string = self._require_string()
        if self._curr > len(string):
            return None
        if self._curr == 0:
            return True
        newline = "\n" if isinstance(string, str) else b"\n"
        return string[self._curr - 1 : self._curr] == newline

    beginning_of_line = bol

    @property
    def rest(self) -> str | bytes:
        """Everything after the scan pointer; empty at the end."""
        string = self._require_string()
        if self._curr >= len(string):
            return string[:0]
        return self._extract_range(self._curr, len(string))

    @property
    def rest_size(self) -> int:
        string = self._require_string()
        if self._curr >= len(string):
            return 0
        return len(string) - self._curr

    restsize = rest_size

    # Match data

    @property
    def is_matched(self) -> bool:
        """True when the last attempt succeeded."""
        self._require_string()
        return self._state is not UNMATCHED

    @property
    def matched(self) -> str | bytes | None:
        """Text of the last match, or None."""
        self._require_string()
        state = self._state
        if state is UNMATCHED:
            return None
        whole = state.whole
        return self._extract_range(state.prev + whole.begin, state.prev + whole.end)

    @property
    def matched_size(self) -> int | None:
        self._require_string()
        state = self._state
        if state is UNMATCHED:
            return None
        return state.whole.length

    matchedsize = matched_size

    def group(self, index: int) -> str | bytes | None:
        """Return capture group `index` of the last match.

        Negative indices count from the last group. Out-of-range indices and
        groups that did not participate in the match give None.

        Examples:
            s = StringScanner("Fri Dec 12 1975 14:39")
            s.scan(re.compile(r"(\\w+) (\\w+) (\\d+) "))
            s.group(1)  # "Fri"
            s[-1]  # "12"
        """
        self._require_string()
        index = operator.index(index)
        state = self._state
        if state is UNMATCHED:
            return None

        registers = state.registers
        if index < 0:
            index += len(registers)
        if index < 0 or index >= len(registers):
            return None
        span = registers[index]
        if span is None:
            return None
        return self._extract_range(state.prev + span.begin, state.prev + span.end)

    def __getitem__(self, index: int) -> str | bytes | None:
        return self.group(index)

    # Indexing addresses capture groups; it does not make the scanner iterable
    __iter__ = None

    @property
    def pre_match(self) -> str | bytes | None:
        """Buffer text before the last match."""
        self._require_string()
        state = self._state
        if state is UNMATCHED:
            return None
        return self._extract_range(0, state.prev + state.whole.begin)

    @property
    def post_match(self) -> str | bytes | None:
        """Buffer text after the last match."""
        string = self._require_string()
        state = self._state
        if state is UNMATCHED:
            return None
        return self._extract_range(state.prev + state.whole.end, len(string))

    # Extraction

    def _extract_range(self, begin: int, end: int) -> str | bytes | None:
        string = self._string
        if begin > len(string):
            return None
        if end > len(string):
            end = len(string)
        return string[begin:end]

    def _extract_beg_len(self, begin: int, length: int) -> str | bytes | None:
        string = self._string
        if begin > len(string):
            return None
        if begin + length > len(string):
            length = len(string) - begin
        return string[begin : begin + length]

    def _require_string(self) -> str | bytes:
        if self._string is None:
            raise UninitializedError()
        return self._string

    def __repr__(self) -> str:
        name = type(self).__name__
        string = self._string
        if string is None:
            return f"<{name} (uninitialized)>"
        if self._curr >= len(string):
            return f"<{name} fin>"
        window = self._config.inspect_length
        after = self._inspect_after(string, window)
        if self._curr == 0:
            return f"<{name} {self._curr}/{len(string)} @ {after}>"
        before = self._inspect_before(string, window)
        return f"<{name} {self._curr}/{len(string)} {before} @ {after}>"

    def _inspect_before(self, string: str | bytes, window: int) -> str:
        ellipsis = "..." if isinstance(string, str) else b"..."
        if self._curr > window:
            return repr(ellipsis + string[self._curr - window : self._curr])
        return repr(string[: self._curr])

    def _inspect_after(self, string: str | bytes, window: int) -> str:
        ellipsis = "..." if isinstance(string, str) else b"..."
        if len(string) - self._curr > window:
            return repr(string[self._curr : self._curr + window] + ellipsis)
        return repr(string[self._curr :])
