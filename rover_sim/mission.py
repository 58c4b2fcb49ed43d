"""
Mission configuration for the grid rover.

A mission is a named grid, start state and command string. Missions are
read from YAML files shaped like ``configs/missions.yaml``::

    missions:
      - name: example_1
        grid: {edge_x: 4, edge_y: 8}
        start: {x: 2, y: 3, heading: E}
        commands: LFRFF
        expected: "(4, 4, E)"

The engine itself accepts any grid and start state; rejecting nonsensical
configurations is done here, before a run starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TYPE_CHECKING

import yaml

from .commands import decode_actions
from .engine import iter_transitions
from .metrics import MissionResult
from .report import format_report
from .rover import Heading, RoverState
from .world import GridBounds

if TYPE_CHECKING:
    from telemetry.logger import TelemetryLogger


class ConfigError(ValueError):
    """Raised for malformed or invalid mission configuration."""


def load_yaml(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def parse_int(value: Any, field: str) -> int:
    """Parse a whole number; bools and fractional floats are rejected."""
    if isinstance(value, bool):
        raise ConfigError(f"{field} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ConfigError(f"{field} must be an integer, got {value!r}")


def parse_heading(value: Any) -> Heading:
    """Parse a heading letter (N/E/S/W, any case)."""
    letter = str(value).strip().upper()
    try:
        return Heading(letter)
    except ValueError:
        raise ConfigError(
            f"Unknown heading: {value!r}. Available: {[h.value for h in Heading]}"
        ) from None


@dataclass(frozen=True)
class MissionConfig:
    """One rover run: grid, start state and raw command string."""

    name: str
    grid: GridBounds
    start: RoverState
    commands: str
    expected: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], name: Optional[str] = None) -> "MissionConfig":
        """Create a mission from a dict (one entry of the ``missions`` list)."""
        try:
            grid_data = data["grid"]
            grid = GridBounds(
                edge_x=parse_int(grid_data["edge_x"], "grid.edge_x"),
                edge_y=parse_int(grid_data["edge_y"], "grid.edge_y"),
            )
            start_data = data["start"]
            start = RoverState(
                x=parse_int(start_data["x"], "start.x"),
                y=parse_int(start_data["y"], "start.y"),
                heading=parse_heading(start_data["heading"]),
            )
            commands = str(data.get("commands", "") or "")
        except ConfigError:
            raise
        except KeyError as exc:
            raise ConfigError(f"Mission is missing required key {exc.args[0]!r}") from None
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Malformed mission: {exc}") from None
        expected = data.get("expected")
        return cls(
            name=str(data.get("name") or name or "mission"),
            grid=grid,
            start=start,
            commands=commands,
            expected=str(expected) if expected is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "grid": self.grid.to_dict(),
            "start": {"x": self.start.x, "y": self.start.y, "heading": self.start.heading.value},
            "commands": self.commands,
        }
        if self.expected is not None:
            out["expected"] = self.expected
        return out


def missions_from_config(cfg: Any, source: str = "config") -> List[MissionConfig]:
    """Build missions from an already-loaded config mapping."""
    if not isinstance(cfg, dict):
        raise ConfigError(f"{source}: expected a mapping, got {type(cfg).__name__}")
    entries = cfg.get("missions")
    if not isinstance(entries, list):
        raise ConfigError(f"{source}: expected a 'missions' list")
    return [MissionConfig.from_dict(entry, name=f"mission_{i}") for i, entry in enumerate(entries)]


def load_missions(path: str) -> List[MissionConfig]:
    """Load every mission listed under ``missions`` in a YAML file."""
    return missions_from_config(load_yaml(path), source=path)


def validate_mission(mission: MissionConfig) -> None:
    """Reject grids with negative edges and starts outside the grid."""
    grid = mission.grid
    if grid.edge_x < 0 or grid.edge_y < 0:
        raise ConfigError(
            f"{mission.name}: grid edges must be non-negative, got ({grid.edge_x}, {grid.edge_y})"
        )
    start = mission.start
    if not grid.contains(start.x, start.y):
        raise ConfigError(
            f"{mission.name}: start ({start.x}, {start.y}) is outside grid "
            f"[0, {grid.edge_x}] x [0, {grid.edge_y}]"
        )
    if start.lost:
        raise ConfigError(f"{mission.name}: start state is already lost")


def run_mission(mission: MissionConfig, telemetry: Optional["TelemetryLogger"] = None) -> MissionResult:
    """Validate, decode and run a mission.

    Raises ConfigError for an invalid grid/start and UnsupportedActionError
    for a bad command character, before any transition is applied.
    """
    validate_mission(mission)
    actions = decode_actions(mission.commands)

    state = mission.start
    steps_applied = 0
    for idx, action, state in iter_transitions(mission.grid, mission.start, actions):
        steps_applied = idx + 1
        if telemetry is not None:
            telemetry.log_transition(mission.name, idx, action, state)

    return MissionResult(
        name=mission.name,
        final_state=state,
        report=format_report(state),
        num_commands=len(actions),
        steps_applied=steps_applied,
        expected=mission.expected,
        config=mission.to_dict(),
    )
