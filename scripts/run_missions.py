from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path
from typing import List, Optional

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from rover_sim.commands import UnsupportedActionError
from rover_sim.metrics import MissionResult, build_batch_report, format_batch_report_table
from rover_sim.mission import ConfigError, load_yaml, missions_from_config, run_mission
from telemetry.logger import TelemetryLogger


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run every mission in a YAML config and report.")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/missions.yaml",
        help="Path to missions YAML config.",
    )
    parser.add_argument(
        "--telemetry-path",
        type=str,
        default=None,
        help="JSONL telemetry output (defaults to logging.telemetry_path in the config).",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Root directory for metrics.json (defaults to logging.eval_root in the config).",
    )
    parser.add_argument(
        "--no-telemetry",
        action="store_true",
        help="Do not write per-step telemetry.",
    )
    args = parser.parse_args(argv)

    try:
        cfg = load_yaml(args.config)
        missions = missions_from_config(cfg, source=args.config)
        logging_cfg = cfg.get("logging") or {}
        if not isinstance(logging_cfg, dict):
            raise ConfigError(f"{args.config}: 'logging' must be a mapping")
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    telemetry: Optional[TelemetryLogger] = None
    if not args.no_telemetry:
        telemetry_path = args.telemetry_path or logging_cfg.get("telemetry_path")
        if telemetry_path:
            telemetry = TelemetryLogger(telemetry_path)

    results: List[MissionResult] = []
    failed = False
    try:
        for mission in missions:
            try:
                result = run_mission(mission, telemetry=telemetry)
            except (ConfigError, UnsupportedActionError) as exc:
                print(f"  {mission.name}: Error: {exc}", file=sys.stderr)
                failed = True
                continue
            results.append(result)
            if result.matches_expected is False:
                failed = True
                print(f"  {mission.name}: {result.report}  (expected {result.expected})")
            else:
                print(f"  {mission.name}: {result.report}")
    finally:
        if telemetry is not None:
            telemetry.close()

    report = build_batch_report(results, config_path=args.config)

    eval_root = args.output_dir or logging_cfg.get("eval_root", "runs")
    ts = time.strftime("%Y-%m-%d_%H-%M-%S")
    out_dir = os.path.join(eval_root, f"missions_{ts}")
    metrics_path = os.path.join(out_dir, "metrics.json")
    report.save(metrics_path)

    print(f"Saved mission metrics to {metrics_path}")
    print()
    print(format_batch_report_table(report))
    print()

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
