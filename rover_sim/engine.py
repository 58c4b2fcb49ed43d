"""
State-transition engine for the grid rover.

All functions are pure: they take a grid, a state and actions, and return
new states without touching their inputs. Once a state is lost it is
terminal, and no further action is applied to it.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Iterator, Tuple

from .rover import (
    Action,
    RoverState,
    apply_forward,
    apply_rotate_left,
    apply_rotate_right,
)
from .world import GridBounds


# ---------------------------------------------------------------------------
# Single transition
# ---------------------------------------------------------------------------


def _forward(grid: GridBounds, state: RoverState) -> RoverState:
    candidate = apply_forward(state)
    if not grid.contains(candidate.x, candidate.y):
        # Keep the last known-good cell; the candidate is never stored.
        return replace(state, lost=True)
    return candidate


def step(grid: GridBounds, state: RoverState, action: Action) -> RoverState:
    """Apply one action and return the next state.

    A forward move that would leave the grid returns the pre-move state
    with ``lost=True``. A state that is already lost comes back unchanged.
    """
    if state.lost:
        return state
    if action is Action.F:
        return _forward(grid, state)
    if action is Action.L:
        return apply_rotate_left(state)
    if action is Action.R:
        return apply_rotate_right(state)
    raise TypeError(f"Unknown action: {action!r}")


# ---------------------------------------------------------------------------
# Action sequences
# ---------------------------------------------------------------------------


def iter_transitions(
    grid: GridBounds,
    initial_state: RoverState,
    actions: Iterable[Action],
) -> Iterator[Tuple[int, Action, RoverState]]:
    """Yield (index, action, next_state) for every action actually applied.

    Stops before pulling the next action once the rover is lost, so the
    remainder of ``actions`` is never evaluated.
    """
    state = initial_state
    if state.lost:
        return
    for idx, action in enumerate(actions):
        state = step(grid, state, action)
        yield idx, action, state
        if state.lost:
            return


def run(grid: GridBounds, initial_state: RoverState, actions: Iterable[Action]) -> RoverState:
    """Fold ``actions`` over ``initial_state`` left to right.

    Iterative, so stack depth does not grow with the number of actions.
    Returns ``initial_state`` itself for an empty sequence or a lost start.
    """
    state = initial_state
    if state.lost:
        return state
    for action in actions:
        state = step(grid, state, action)
        if state.lost:
            break
    return state
