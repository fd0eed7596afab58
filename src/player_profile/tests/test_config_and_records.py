from __future__ import annotations

from pathlib import Path

import pytest

from player_profile.config import ProfileConfig, load_profile_config
from player_profile.core.paths import DEFAULT_SNAPSHOT_LOG, PROFILES_DIR, PROJECT_ROOT
from player_profile.disciplines import UnknownDisciplineError, find_discipline, get_discipline, list_disciplines
from player_profile.services import prepare_test_record
from player_profile.services.test_record_service import InvalidTestRecordError

ENV_VARS = (
    "PROFILE_MAX_ROUNDS",
    "PROFILE_MAX_MOVES",
    "PROFILE_LOG_LEVEL",
    "PROFILE_LOG_DIR",
    "PROFILE_SNAPSHOT_LOG_PATH",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_config_defaults(clean_env) -> None:
    cfg = load_profile_config()
    assert cfg == ProfileConfig()
    assert cfg.max_rounds == 50
    assert cfg.max_moves == 50
    assert cfg.log_level == "INFO"
    assert cfg.log_dir is None
    assert cfg.snapshot_log_path == DEFAULT_SNAPSHOT_LOG


def test_default_snapshot_log_lives_under_project_data() -> None:
    assert DEFAULT_SNAPSHOT_LOG == PROJECT_ROOT / "data" / "profiles" / "snapshots.jsonl"
    assert DEFAULT_SNAPSHOT_LOG.parent == PROFILES_DIR


def test_config_reads_environment(clean_env, tmp_path: Path) -> None:
    clean_env.setenv("PROFILE_MAX_ROUNDS", "10")
    clean_env.setenv("PROFILE_MAX_MOVES", "5")
    clean_env.setenv("PROFILE_LOG_LEVEL", "debug")
    clean_env.setenv("PROFILE_LOG_DIR", str(tmp_path / "logs"))
    clean_env.setenv("PROFILE_SNAPSHOT_LOG_PATH", str(tmp_path / "snaps.jsonl"))
    cfg = load_profile_config()
    assert cfg.max_rounds == 10
    assert cfg.max_moves == 5
    assert cfg.log_level == "DEBUG"
    assert cfg.log_dir == tmp_path / "logs"
    assert cfg.snapshot_log_path == tmp_path / "snaps.jsonl"


@pytest.mark.parametrize(
    "name,value",
    [
        ("PROFILE_MAX_ROUNDS", "zero"),
        ("PROFILE_MAX_ROUNDS", "0"),
        ("PROFILE_MAX_MOVES", "-3"),
        ("PROFILE_LOG_LEVEL", "LOUD"),
    ],
)
def test_config_rejects_bad_values(clean_env, name: str, value: str) -> None:
    clean_env.setenv(name, value)
    with pytest.raises(ValueError):
        load_profile_config()


def test_registry_lists_thirteen_disciplines() -> None:
    names = [d.name for d in list_disciplines()]
    assert len(names) == 13
    assert "1v1" in names and "Skill Moves" in names
    assert find_discipline("Bench Press") is None
    with pytest.raises(UnknownDisciplineError):
        get_discipline("Bench Press")


def test_prepare_test_record_cleans_fixed_scores() -> None:
    record = prepare_test_record(
        "  Passing Gates ",
        "2024-05-01",
        {"passing_strong": "7", "passing_weak": "", "note": "windy"},
        ProfileConfig(),
    )
    assert record == {"test_name": "Passing Gates", "test_date": "2024-05-01", "scores": {"passing_strong": 7.0}}


def test_prepare_test_record_stores_list_form_for_legacy_moves() -> None:
    record = prepare_test_record(
        "Skill Moves",
        "2024-05-01",
        {"skillmove_1": 4, "skillmove_name_1": "Elastico", "skillmove_2": None},
        ProfileConfig(),
    )
    assert record["scores"] == {"moves": [{"name": "Elastico", "score": 4}]}


@pytest.mark.parametrize(
    "test_name,test_date,scores",
    [
        ("", "2024-05-01", {}),
        (None, "2024-05-01", {}),
        ("Power", "05/01/2024", {}),
        ("Power", "2024-5-1", {}),
        ("Bench Press", "2024-05-01", {}),
        ("Power", "2024-05-01", ["not", "a", "mapping"]),
    ],
)
def test_prepare_test_record_rejects_invalid_input(test_name, test_date, scores) -> None:
    with pytest.raises(InvalidTestRecordError):
        prepare_test_record(test_name, test_date, scores, ProfileConfig())


def test_invalid_record_error_is_a_value_error() -> None:
    assert issubclass(InvalidTestRecordError, ValueError)


def test_prepare_test_record_names_unknown_discipline() -> None:
    with pytest.raises(InvalidTestRecordError, match="Unknown test_name 'Bench Press'"):
        prepare_test_record("Bench Press", "2024-05-01", {"reps": 5}, ProfileConfig())
