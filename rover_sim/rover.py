from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Tuple, Any


class Heading(Enum):
    """Compass direction the rover faces. Values are the report letters."""

    N = "N"
    E = "E"
    S = "S"
    W = "W"


class Action(Enum):
    """Single rover command: move forward one cell or turn 90 degrees in place."""

    F = "F"
    L = "L"
    R = "R"


# Clockwise order; turning right advances one position, left goes back one.
_CLOCKWISE: Tuple[Heading, ...] = (Heading.N, Heading.E, Heading.S, Heading.W)

_FORWARD_DELTAS: Dict[Heading, Tuple[int, int]] = {
    Heading.N: (0, 1),
    Heading.E: (1, 0),
    Heading.S: (0, -1),
    Heading.W: (-1, 0),
}


@dataclass(frozen=True)
class RoverState:
    """State of the rover on the grid.

    Attributes
    ----------
    x : int
        Column, 0 at the left edge.
    y : int
        Row, 0 at the bottom edge.
    heading : Heading
        Direction the rover faces.
    lost : bool
        Set once a forward move would have left the grid. Position and
        heading then hold the last in-bounds values.
    """

    x: int
    y: int
    heading: Heading
    lost: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize state to a dict for logging/telemetry."""
        return {
            "x": self.x,
            "y": self.y,
            "heading": self.heading.value,
            "lost": self.lost,
        }


# ----------------------------------------------------------------------
# Pure transforms (no bounds checks)
# ----------------------------------------------------------------------
def apply_forward(state: RoverState) -> RoverState:
    """Move one cell along the current heading."""
    dx, dy = _FORWARD_DELTAS[state.heading]
    return replace(state, x=state.x + dx, y=state.y + dy)


def _turn(heading: Heading, offset: int) -> Heading:
    idx = _CLOCKWISE.index(heading)
    return _CLOCKWISE[(idx + offset) % len(_CLOCKWISE)]


def apply_rotate_left(state: RoverState) -> RoverState:
    """Turn 90 degrees counter-clockwise."""
    return replace(state, heading=_turn(state.heading, -1))


def apply_rotate_right(state: RoverState) -> RoverState:
    """Turn 90 degrees clockwise."""
    return replace(state, heading=_turn(state.heading, 1))
