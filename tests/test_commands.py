from __future__ import annotations

import pytest

from rover_sim.commands import UnsupportedActionError, decode_action, decode_actions
from rover_sim.rover import Action


def test_decode_each_supported_char() -> None:
    assert decode_action("F") is Action.F
    assert decode_action("L") is Action.L
    assert decode_action("R") is Action.R


def test_decode_unsupported_char_raises() -> None:
    with pytest.raises(UnsupportedActionError) as info:
        decode_action("X")
    assert info.value.char == "X"
    assert info.value.position is None
    assert isinstance(info.value, ValueError)


def test_decode_is_case_sensitive() -> None:
    with pytest.raises(UnsupportedActionError):
        decode_action("f")


def test_decode_actions_in_order() -> None:
    assert decode_actions("LFRFF") == [Action.L, Action.F, Action.R, Action.F, Action.F]
    assert decode_actions("") == []


def test_decode_actions_fails_fast_on_first_bad_char() -> None:
    with pytest.raises(UnsupportedActionError) as info:
        decode_actions("FFxLQ")
    assert info.value.char == "x"
    assert info.value.position == 2
    assert "'x'" in str(info.value)
