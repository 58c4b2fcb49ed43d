from __future__ import annotations

from typing import Dict, List, Optional

from .rover import Action


_ACTIONS_BY_CHAR: Dict[str, Action] = {action.value: action for action in Action}


class UnsupportedActionError(ValueError):
    """Raised when a command character does not map to an Action."""

    def __init__(self, char: str, position: Optional[int] = None) -> None:
        self.char = char
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(
            f"Unsupported rover action {char!r}{where}. "
            f"Available: {sorted(_ACTIONS_BY_CHAR)}"
        )


def decode_action(char: str) -> Action:
    """Map one command character ('F', 'L' or 'R') to an Action."""
    try:
        return _ACTIONS_BY_CHAR[char]
    except KeyError:
        raise UnsupportedActionError(char) from None


def decode_actions(commands: str) -> List[Action]:
    """Decode a whole command string.

    The first unsupported character aborts decoding; nothing is skipped or
    defaulted.
    """
    actions: List[Action] = []
    for pos, char in enumerate(commands):
        action = _ACTIONS_BY_CHAR.get(char)
        if action is None:
            raise UnsupportedActionError(char, position=pos)
        actions.append(action)
    return actions
