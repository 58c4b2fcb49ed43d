from __future__ import annotations

import json
import os
import threading
from typing import Any, Dict, Optional, TextIO

from rover_sim.rover import Action, RoverState


class TelemetryLogger:
    """Structured JSONL logger for rover transitions.

    Thread-safe, append-only logging of dict records, one JSON object per line.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._lock = threading.Lock()
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")

    def __enter__(self) -> "TelemetryLogger":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def log_record(self, record: Dict[str, Any]) -> None:
        """Append a single record to the JSONL file. No-op once closed."""
        line = json.dumps(record, separators=(",", ":"))
        with self._lock:
            if self._fp is None:
                return
            self._fp.write(line + "\n")
            self._fp.flush()

    def log_transition(self, mission: str, step: int, action: Action, state: RoverState) -> None:
        """Log the state reached after applying ``action`` as step ``step``."""
        self.log_record(
            {
                "mission": mission,
                "step": step,
                "action": action.value,
                "pose": {"x": state.x, "y": state.y, "heading": state.heading.value},
                "lost": state.lost,
            }
        )

    def close(self) -> None:
        with self._lock:
            if self._fp is not None:
                self._fp.close()
                self._fp = None
