from __future__ import annotations

import json
from pathlib import Path

import pytest

from rover_sim.commands import UnsupportedActionError
from rover_sim.mission import (
    ConfigError,
    MissionConfig,
    load_missions,
    missions_from_config,
    parse_int,
    parse_heading,
    run_mission,
    validate_mission,
)
from rover_sim.rover import Heading, RoverState
from rover_sim.world import GridBounds
from telemetry.logger import TelemetryLogger

CONFIG_PATH = Path(__file__).resolve().parent.parent / "configs" / "missions.yaml"


def test_reference_missions_match_expected() -> None:
    missions = load_missions(str(CONFIG_PATH))
    assert len(missions) == 7
    for mission in missions:
        result = run_mission(mission)
        assert result.matches_expected is True, (mission.name, result.report, mission.expected)


def test_from_dict_parses_heading_letter() -> None:
    mission = MissionConfig.from_dict(
        {"grid": {"edge_x": 4, "edge_y": 8}, "start": {"x": 2, "y": 3, "heading": "e"}, "commands": "LFRFF"},
        name="m",
    )
    assert mission.name == "m"
    assert mission.grid == GridBounds(4, 8)
    assert mission.start == RoverState(2, 3, Heading.E)
    assert mission.expected is None


def test_from_dict_missing_key() -> None:
    with pytest.raises(ConfigError, match="start"):
        MissionConfig.from_dict({"grid": {"edge_x": 1, "edge_y": 1}, "commands": "F"})


def test_from_dict_malformed_value() -> None:
    with pytest.raises(ConfigError):
        MissionConfig.from_dict({"grid": {"edge_x": "wide", "edge_y": 1}, "start": {"x": 0, "y": 0, "heading": "N"}})


def test_parse_heading_unknown() -> None:
    with pytest.raises(ConfigError):
        parse_heading("Q")


def test_load_missions_requires_list(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("missions: nope\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_missions(str(path))


def test_validate_rejects_negative_edges() -> None:
    mission = MissionConfig("neg", GridBounds(-1, 3), RoverState(0, 0, Heading.N), "F")
    with pytest.raises(ConfigError, match="non-negative"):
        validate_mission(mission)


def test_validate_rejects_start_outside_grid() -> None:
    mission = MissionConfig("out", GridBounds(2, 2), RoverState(3, 0, Heading.N), "F")
    with pytest.raises(ConfigError, match="outside"):
        validate_mission(mission)


def test_run_mission_counts_applied_steps() -> None:
    mission = MissionConfig("lost", GridBounds(1, 0), RoverState(0, 0, Heading.E), "FFLLFF")
    result = run_mission(mission)
    assert result.final_state == RoverState(1, 0, Heading.E, lost=True)
    assert result.report == "(1, 0, E) LOST"
    assert result.num_commands == 6
    assert result.steps_applied == 2


def test_run_mission_empty_commands() -> None:
    mission = MissionConfig("idle", GridBounds(0, 0), RoverState(0, 0, Heading.E), "")
    result = run_mission(mission)
    assert result.final_state == mission.start
    assert result.steps_applied == 0


def test_run_mission_bad_command_logs_nothing(tmp_path: Path) -> None:
    log_path = tmp_path / "telemetry.jsonl"
    mission = MissionConfig("bad", GridBounds(4, 4), RoverState(0, 0, Heading.N), "FFX")
    with TelemetryLogger(str(log_path)) as telemetry:
        with pytest.raises(UnsupportedActionError):
            run_mission(mission, telemetry=telemetry)
    assert log_path.read_text(encoding="utf-8") == ""


def test_run_mission_writes_telemetry(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "telemetry.jsonl"
    mission = MissionConfig("example", GridBounds(4, 8), RoverState(2, 3, Heading.E), "LFRFF")
    with TelemetryLogger(str(log_path)) as telemetry:
        run_mission(mission, telemetry=telemetry)
    records = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert [r["step"] for r in records] == [0, 1, 2, 3, 4]
    assert [r["action"] for r in records] == ["L", "F", "R", "F", "F"]
    assert records[-1] == {
        "mission": "example",
        "step": 4,
        "action": "F",
        "pose": {"x": 4, "y": 4, "heading": "E"},
        "lost": False,
    }


def test_from_dict_rejects_fractional_and_bool_coordinates() -> None:
    base = {"grid": {"edge_x": 4, "edge_y": 8}, "start": {"x": 2, "y": 3, "heading": "N"}}
    bad_values = [
        ("grid", "edge_x", 4.9),
        ("start", "x", 2.7),
        ("start", "y", True),
        ("grid", "edge_y", False),
        ("start", "x", "2.5"),
    ]
    for section, key, value in bad_values:
        data = {"grid": dict(base["grid"]), "start": dict(base["start"])}
        data[section][key] = value
        with pytest.raises(ConfigError, match="must be an integer"):
            MissionConfig.from_dict(data)


def test_parse_int_accepts_exact_integers() -> None:
    assert parse_int(3, "x") == 3
    assert parse_int(3.0, "x") == 3
    assert parse_int(" -2 ", "x") == -2


def test_load_missions_rejects_non_mapping_top_level(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- name: a\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="expected a mapping"):
        load_missions(str(path))


def test_missions_from_loaded_config() -> None:
    cfg = {
        "missions": [
            {"grid": {"edge_x": 1, "edge_y": 1}, "start": {"x": 0, "y": 0, "heading": "N"}, "commands": "F"},
        ]
    }
    missions = missions_from_config(cfg)
    assert [m.name for m in missions] == ["mission_0"]
    with pytest.raises(ConfigError):
        missions_from_config(["not", "a", "mapping"])


def test_run_mission_records_config() -> None:
    mission = MissionConfig("cfg", GridBounds(4, 8), RoverState(2, 3, Heading.E), "LFRFF", expected="(4, 4, E)")
    result = run_mission(mission)
    assert result.config == {
        "name": "cfg",
        "grid": {"edge_x": 4, "edge_y": 8},
        "start": {"x": 2, "y": 3, "heading": "E"},
        "commands": "LFRFF",
        "expected": "(4, 4, E)",
    }
    assert result.to_dict()["config"]["commands"] == "LFRFF"
