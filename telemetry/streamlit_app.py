from __future__ import annotations

import argparse
import json
import os
from typing import Any, Dict, List

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--log-path",
        type=str,
        default="telemetry_logs/missions.jsonl",
        help="Path to telemetry JSONL log file.",
    )
    return parser.parse_args()


def load_telemetry(path: str, max_rows: int = 20000) -> pd.DataFrame:
    """Read transition records into a flat DataFrame (pose.x, pose.y, ...)."""
    if not os.path.exists(path):
        return pd.DataFrame()
    records: List[Dict[str, Any]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                rec = json.loads(line)
                records.append(rec)
            except json.JSONDecodeError:
                continue
    if not records:
        return pd.DataFrame()
    df = pd.json_normalize(records)
    return df.tail(max_rows)


def mission_path(df: pd.DataFrame, mission: str) -> pd.DataFrame:
    """Transitions of the most recent run of ``mission``, in step order.

    A mission run restarts at step 0, so earlier runs of the same mission in
    an appended log are dropped.
    """
    rows = df[df["mission"] == mission]
    if rows.empty:
        return rows
    starts = rows.index[rows["step"] == 0]
    if len(starts) > 0:
        rows = rows.loc[starts[-1]:]
    return rows.sort_values("step")


def main() -> None:
    args = parse_args()

    st.set_page_config(page_title="Grid Rover Telemetry", layout="wide")
    st.title("Grid Rover Telemetry Dashboard")

    df = load_telemetry(args.log_path)
    if df.empty:
        st.info(f"No telemetry at '{args.log_path}'. Run scripts/run_missions.py first.")
        return
    st.success(f"Loaded '{args.log_path}' ({len(df)} records)")

    missions = list(dict.fromkeys(df["mission"].tolist()))
    mission = st.sidebar.selectbox("Mission", missions)
    path = mission_path(df, mission)
    latest = path.iloc[-1]

    st.sidebar.subheader("Final State")
    st.sidebar.write(
        f"x={int(latest['pose.x'])}, y={int(latest['pose.y'])}, heading={latest['pose.heading']}"
    )
    st.sidebar.write("LOST" if bool(latest["lost"]) else "on grid")

    col1, col2 = st.columns(2)

    with col1:
        fig, ax = plt.subplots()
        ax.plot(path["pose.x"], path["pose.y"], "-o", color="y", label="Path")
        ax.scatter([latest["pose.x"]], [latest["pose.y"]], c="r" if bool(latest["lost"]) else "b", label="Rover")
        ax.set_aspect("equal", adjustable="box")
        ax.set_xlabel("x [cell]")
        ax.set_ylabel("y [cell]")
        ax.set_title(f"Rover Path: {mission}")
        ax.grid(True)
        ax.legend(loc="upper right")
        st.pyplot(fig)
        plt.close(fig)

    with col2:
        st.dataframe(path[["step", "action", "pose.x", "pose.y", "pose.heading", "lost"]])


if __name__ == "__main__":
    main()
