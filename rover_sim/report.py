from __future__ import annotations

from .commands import decode_actions
from .engine import run
from .rover import RoverState
from .world import GridBounds


def format_report(state: RoverState) -> str:
    """Render state as ``(x, y, H)``, with a `` LOST`` suffix if lost."""
    text = f"({state.x}, {state.y}, {state.heading.value})"
    if state.lost:
        text += " LOST"
    return text


def run_with_report(edge_x: int, edge_y: int, initial_state: RoverState, commands: str) -> str:
    """Decode ``commands``, run them on a fresh grid and format the result."""
    grid = GridBounds(edge_x=edge_x, edge_y=edge_y)
    final_state = run(grid, initial_state, decode_actions(commands))
    return format_report(final_state)
