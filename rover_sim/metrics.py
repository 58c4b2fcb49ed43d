"""
Batch metrics for rover missions.

Provides per-mission results, a batch aggregator, and report generation
with JSON and text table outputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import json
import os
import time

import numpy as np

from .rover import RoverState


# ---------------------------------------------------------------------------
# Mission-level result
# ---------------------------------------------------------------------------


@dataclass
class MissionResult:
    """Outcome of a single mission run."""

    name: str
    final_state: RoverState
    report: str
    num_commands: int
    steps_applied: int
    expected: Optional[str] = None
    config: Optional[Dict[str, Any]] = None

    @property
    def lost(self) -> bool:
        return self.final_state.lost

    @property
    def matches_expected(self) -> Optional[bool]:
        """None when the mission declares no expected report."""
        if self.expected is None:
            return None
        return self.report == self.expected

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "final_state": self.final_state.to_dict(),
            "report": self.report,
            "num_commands": int(self.num_commands),
            "steps_applied": int(self.steps_applied),
            "expected": self.expected,
            "matches_expected": self.matches_expected,
            "config": self.config,
        }


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


class BatchAggregator:
    """Collect mission results and summarize them."""

    def __init__(self) -> None:
        self._results: List[MissionResult] = []

    def add(self, result: MissionResult) -> None:
        self._results.append(result)

    @property
    def count(self) -> int:
        return len(self._results)

    @property
    def lost_rate(self) -> float:
        return float(np.mean([r.lost for r in self._results])) if self._results else 0.0

    @property
    def mean_commands(self) -> float:
        return float(np.mean([r.num_commands for r in self._results])) if self._results else 0.0

    @property
    def mean_steps_applied(self) -> float:
        return float(np.mean([r.steps_applied for r in self._results])) if self._results else 0.0

    @property
    def num_mismatches(self) -> int:
        return sum(1 for r in self._results if r.matches_expected is False)

    def summary(self) -> Dict[str, float]:
        return {
            "count": float(self.count),
            "lost_rate": self.lost_rate,
            "mean_commands": self.mean_commands,
            "mean_steps_applied": self.mean_steps_applied,
            "num_mismatches": float(self.num_mismatches),
        }


# ---------------------------------------------------------------------------
# Batch report
# ---------------------------------------------------------------------------


@dataclass
class BatchReport:
    """Batch run report with overall stats and per-mission results."""

    timestamp: str
    config_path: Optional[str] = None
    num_missions: int = 0
    lost_rate: float = 0.0
    mean_commands: float = 0.0
    mean_steps_applied: float = 0.0
    num_mismatches: int = 0
    missions: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "config_path": self.config_path,
            "num_missions": self.num_missions,
            "lost_rate": self.lost_rate,
            "mean_commands": self.mean_commands,
            "mean_steps_applied": self.mean_steps_applied,
            "num_mismatches": self.num_mismatches,
            "missions": self.missions,
        }

    def save(self, path: str) -> None:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> "BatchReport":
        with open(path, "r", encoding="utf-8") as f:
            d = json.load(f)
        return cls(
            timestamp=d.get("timestamp", ""),
            config_path=d.get("config_path"),
            num_missions=int(d.get("num_missions", 0)),
            lost_rate=float(d.get("lost_rate", 0)),
            mean_commands=float(d.get("mean_commands", 0)),
            mean_steps_applied=float(d.get("mean_steps_applied", 0)),
            num_mismatches=int(d.get("num_mismatches", 0)),
            missions=d.get("missions", []),
        )


def build_batch_report(results: List[MissionResult], config_path: Optional[str] = None) -> BatchReport:
    """Build a BatchReport from a list of mission results."""
    agg = BatchAggregator()
    for r in results:
        agg.add(r)
    return BatchReport(
        timestamp=time.strftime("%Y-%m-%d_%H-%M-%S"),
        config_path=config_path,
        num_missions=agg.count,
        lost_rate=agg.lost_rate,
        mean_commands=agg.mean_commands,
        mean_steps_applied=agg.mean_steps_applied,
        num_mismatches=agg.num_mismatches,
        missions=[r.to_dict() for r in results],
    )


# ---------------------------------------------------------------------------
# Text report formatting
# ---------------------------------------------------------------------------


def format_batch_report_table(report: BatchReport) -> str:
    """Produce a human-readable table string for the report."""
    lines = [
        "=" * 72,
        "MISSION REPORT",
        "=" * 72,
        f"  Timestamp:     {report.timestamp}",
        f"  Config:        {report.config_path or 'N/A'}",
        f"  Missions:      {report.num_missions}",
        "",
        "  Overall",
        "  - Lost rate:          {:.1%}".format(report.lost_rate),
        "  - Mean commands:      {:.1f}".format(report.mean_commands),
        "  - Mean steps applied: {:.1f}".format(report.mean_steps_applied),
        "  - Mismatches:         {}".format(report.num_mismatches),
        "",
        "  Per-mission",
        "-" * 72,
        f"  {'Mission':<22} {'Report':<20} {'Steps':>9} {'Check':>8}",
        "-" * 72,
    ]
    for m in report.missions:
        steps = f"{m.get('steps_applied', 0)}/{m.get('num_commands', 0)}"
        match = m.get("matches_expected")
        check = "-" if match is None else ("ok" if match else "FAIL")
        lines.append(f"  {str(m.get('name', ''))[:20]:<22} {m.get('report', ''):<20} {steps:>9} {check:>8}")
    lines.append("-" * 72)
    return "\n".join(lines)
