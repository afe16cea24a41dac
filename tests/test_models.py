import dataclasses

import pytest

from strscan.models import UNMATCHED, Matched, MatchResult, Span


def test_span_length():
    assert Span(2, 7).length == 5
    assert Span(3, 3).length == 0


def test_matched_exposes_whole_match():
    state = Matched(prev=4, registers=(Span(0, 3), None))

    assert state.whole == Span(0, 3)
    assert state.registers[1] is None


def test_match_states_are_immutable():
    state = Matched(prev=0, registers=(Span(0, 1),))

    with pytest.raises(dataclasses.FrozenInstanceError):
        state.prev = 1
    with pytest.raises(dataclasses.FrozenInstanceError):
        MatchResult(registers=()).registers = (Span(0, 0),)


def test_unmatched_is_a_singleton():
    assert UNMATCHED is UNMATCHED.__class__.UNMATCHED
    assert repr(UNMATCHED) == "UNMATCHED"
    assert UNMATCHED != Matched(prev=0, registers=(Span(0, 0),))
