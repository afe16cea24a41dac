"""Data models for strscan."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Span:
    """Half-open offset pair recorded for one capture group.

    Offsets are relative to the position the match was attempted from.

    Attributes:
        begin: Offset of the first character of the group.
        end: Offset just past the last character of the group.
    """

    begin: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.begin


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a successful pattern engine call.

    Attributes:
        registers: One entry per group, group 0 being the whole match. Groups
            that did not take part in the match are None.
    """

    registers: tuple[Span | None, ...]


class _Unmatched(Enum):
    UNMATCHED = "unmatched"

    def __repr__(self) -> str:
        return "UNMATCHED"


UNMATCHED = _Unmatched.UNMATCHED


@dataclass(frozen=True)
class Matched:
    """Scanner match state after a successful attempt.

    Attributes:
        prev: Scan pointer before the attempt; registers are relative to it.
        registers: Capture registers of the attempt, group 0 always present.
    """

    prev: int
    registers: tuple[Span | None, ...]

    @property
    def whole(self) -> Span:
        return self.registers[0]


MatchState = _Unmatched | Matched
