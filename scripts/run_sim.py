from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from rover_sim.commands import UnsupportedActionError
from rover_sim.mission import ConfigError, MissionConfig, parse_heading, run_mission
from rover_sim.rover import RoverState
from rover_sim.world import GridBounds
from telemetry.logger import TelemetryLogger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a single rover mission and print its report.")
    parser.add_argument(
        "--grid",
        type=int,
        nargs=2,
        metavar=("EDGE_X", "EDGE_Y"),
        required=True,
        help="Largest valid x and y coordinates (inclusive).",
    )
    parser.add_argument(
        "--start",
        type=str,
        nargs=3,
        metavar=("X", "Y", "HEADING"),
        required=True,
        help="Start position and heading letter (N/E/S/W).",
    )
    parser.add_argument(
        "--commands",
        type=str,
        default="",
        help="Command string made of F, L and R.",
    )
    parser.add_argument(
        "--telemetry-path",
        type=str,
        default=None,
        help="Optional JSONL file to append per-step telemetry to.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        x, y, heading = args.start
        mission = MissionConfig(
            name="cli",
            grid=GridBounds(edge_x=args.grid[0], edge_y=args.grid[1]),
            start=RoverState(x=int(x), y=int(y), heading=parse_heading(heading)),
            commands=args.commands,
        )
        if args.telemetry_path:
            with TelemetryLogger(args.telemetry_path) as telemetry:
                result = run_mission(mission, telemetry=telemetry)
        else:
            result = run_mission(mission)
    except (ConfigError, UnsupportedActionError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except ValueError as exc:
        # int() on a malformed start coordinate
        print(f"Error: invalid start position: {exc}", file=sys.stderr)
        return 2

    print(result.report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
