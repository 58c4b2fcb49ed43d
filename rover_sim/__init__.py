"""
Top-level package for the grid rover simulator.

Components:
- rover: headings, actions, immutable rover state and pure moves
- world: rectangular grid bounds
- engine: single-step transition and action-sequence run
- commands: command-string decoding
- report: final state formatting
- mission: YAML mission configuration and validation
- metrics: batch results and reports
"""

from .world import GridBounds, is_out_of_bounds
from .rover import Action, Heading, RoverState
from .engine import step, run, iter_transitions
from .commands import UnsupportedActionError, decode_action, decode_actions
from .report import format_report, run_with_report

__all__ = [
    "GridBounds",
    "is_out_of_bounds",
    "Action",
    "Heading",
    "RoverState",
    "step",
    "run",
    "iter_transitions",
    "UnsupportedActionError",
    "decode_action",
    "decode_actions",
    "format_report",
    "run_with_report",
]
