"""Tests for configuration loading and validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from tourney.config_loader import (
    ConfigurationError,
    TournamentConfig,
    load_config_file,
    validate_config,
)

EXAMPLE_CONFIG = Path(__file__).resolve().parents[1] / "config" / "tournament_example.json"


def _document(tmp_path: Path, **overrides: Any) -> Dict[str, Any]:
    scenario = tmp_path / "map.xml"
    scenario.write_text("<map/>", encoding="utf-8")
    data: Dict[str, Any] = {
        "tournamentFolder": str(tmp_path / "out"),
        "maps": [str(scenario)],
        "ais": ["RandomAgent", "PassiveAgent"],
        "iterations": 3,
        "maxGameLength": 500,
        "timeBudget": 50,
        "iterationsBudget": -1,
        "preAnalysisBudget": 200,
        "fullObservability": True,
        "selfMatches": False,
        "timeoutCheck": True,
        "runGC": False,
        "saveTraces": False,
    }
    data.update(overrides)
    return data


def _write(tmp_path: Path, data: Dict[str, Any], name: str = "tournament.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _config(tmp_path: Path, **overrides: Any) -> TournamentConfig:
    scenario = tmp_path / "map.xml"
    scenario.write_text("<map/>", encoding="utf-8")
    values: Dict[str, Any] = {
        "tournament_folder": tmp_path / "out",
        "scenarios": (str(scenario),),
        "agent_names": ("RandomAgent", "PassiveAgent"),
    }
    values.update(overrides)
    return TournamentConfig(**values)


def test_shipped_example_config_loads() -> None:
    config = load_config_file(EXAMPLE_CONFIG)
    assert config.agent_names == ("RandomAgent", "PassiveAgent", "GreedyAgent")
    assert config.bot_folder == Path("bots")
    assert config.engine == "my_engine.game:play"


def test_json_config_maps_every_field(tmp_path: Path) -> None:
    data = _document(tmp_path, botFolder="bots", saveGameLogs=False, runner="pkg.mod:run")
    config = load_config_file(_write(tmp_path, data))
    assert config.tournament_folder == tmp_path / "out"
    assert config.bot_folder == Path("bots")
    assert config.iterations == 3
    assert config.max_game_length == 500
    assert config.time_budget_ms == 50
    assert config.iteration_budget == -1
    assert config.pre_analysis_budget_ms == 200
    assert config.save_game_logs is False
    assert config.runner == "pkg.mod:run"
    assert config.engine is None


def test_legacy_bot_jars_folder_key(tmp_path: Path) -> None:
    config = load_config_file(_write(tmp_path, _document(tmp_path, botJarsFolder="jars")))
    assert config.bot_folder == Path("jars")

    both = _document(tmp_path, botJarsFolder="jars", botFolder="bots")
    assert load_config_file(_write(tmp_path, both, "both.json")).bot_folder == Path("bots")


def test_yaml_config_is_accepted(tmp_path: Path) -> None:
    data = _document(tmp_path)
    lines = [f"{key}: {json.dumps(value)}" for key, value in data.items()]
    path = tmp_path / "tournament.yaml"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    config = load_config_file(path)
    assert config.agent_names == ("RandomAgent", "PassiveAgent")


def test_missing_required_field_is_reported(tmp_path: Path) -> None:
    data = _document(tmp_path)
    del data["iterations"]
    with pytest.raises(ConfigurationError) as excinfo:
        load_config_file(_write(tmp_path, data))
    assert "'iterations' is a required property" in str(excinfo.value)


def test_wrong_field_type_names_the_field(tmp_path: Path) -> None:
    data = _document(tmp_path, timeBudget="fast")
    with pytest.raises(ConfigurationError) as excinfo:
        load_config_file(_write(tmp_path, data))
    assert "timeBudget" in str(excinfo.value)


def test_malformed_entry_point_is_rejected(tmp_path: Path) -> None:
    data = _document(tmp_path, engine="not an entry point")
    with pytest.raises(ConfigurationError) as excinfo:
        load_config_file(_write(tmp_path, data))
    assert "engine" in str(excinfo.value)


def test_missing_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        load_config_file(tmp_path / "absent.json")
    assert "not found" in str(excinfo.value)


def test_unparseable_file_is_reported(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text('{"maps": [', encoding="utf-8")
    with pytest.raises(ConfigurationError) as excinfo:
        load_config_file(path)
    assert "Invalid JSON/YAML" in str(excinfo.value)


def test_non_mapping_document_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ConfigurationError) as excinfo:
        load_config_file(path)
    assert "mapping" in str(excinfo.value)


def test_valid_config_passes(tmp_path: Path) -> None:
    validate_config(_config(tmp_path))


def test_empty_scenarios_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        validate_config(_config(tmp_path, scenarios=()))
    assert "At least 1 map is required." in str(excinfo.value)


def test_single_agent_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        validate_config(_config(tmp_path, agent_names=("RandomAgent",)))
    assert "At least 2 AIs are required" in str(excinfo.value)


def test_blank_agent_name_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        validate_config(_config(tmp_path, agent_names=("RandomAgent", "  ")))
    assert "ais[1]" in str(excinfo.value)


@pytest.mark.parametrize(
    ("field", "value", "label"),
    [
        ("iterations", 0, "iterations"),
        ("max_game_length", -5, "maxGameLength"),
        ("time_budget_ms", 0, "timeBudget"),
        ("iteration_budget", 0, "iterationsBudget"),
        ("iteration_budget", -2, "iterationsBudget"),
        ("pre_analysis_budget_ms", -1, "preAnalysisBudget"),
    ],
)
def test_out_of_range_numbers_rejected(tmp_path: Path, field: str, value: int, label: str) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        validate_config(_config(tmp_path, **{field: value}))
    assert label in str(excinfo.value)


def test_bounded_iteration_budget_and_zero_pre_analysis_allowed(tmp_path: Path) -> None:
    validate_config(_config(tmp_path, iteration_budget=200, pre_analysis_budget_ms=0))


def test_missing_scenario_file_rejected(tmp_path: Path) -> None:
    existing = tmp_path / "arena.xml"
    existing.write_text("<map/>", encoding="utf-8")
    config = _config(tmp_path, scenarios=(str(existing), str(tmp_path / "nowhere.xml")))
    with pytest.raises(ConfigurationError) as excinfo:
        validate_config(config)
    message = str(excinfo.value)
    assert "maps[1]" in message
    assert "Map file not found" in message
    assert "nowhere.xml" in message


def test_validation_does_not_touch_the_filesystem(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        validate_config(_config(tmp_path, scenarios=()))
    assert not (tmp_path / "out").exists()
