from __future__ import annotations

import pytest

from player_profile.config import ProfileConfig
from player_profile.disciplines import UnknownDisciplineError, list_disciplines
from player_profile.features.normalize import clean_scores, normalize_moves, normalize_rounds, normalize_scores


def test_rounds_list_form_is_coerced_and_capped() -> None:
    rounds = normalize_rounds({"rounds": [3, "2", "", None, "x"] + [1] * 60})
    assert rounds[:5] == [3, 2.0, None, None, None]
    assert len(rounds) == 50


def test_rounds_legacy_keys_sorted_by_numeric_suffix_without_gap_filling() -> None:
    scores = {"onevone_round_10": 4, "onevone_round_2": 1, "onevone_round_1": "3", "other": 9}
    assert normalize_rounds(scores) == [3.0, 1, 4]


def test_rounds_list_form_wins_over_legacy_keys() -> None:
    scores = {"rounds": [1, 2], "onevone_round_1": 5}
    assert normalize_rounds(scores) == [1, 2]


def test_rounds_cap_follows_config() -> None:
    cfg = ProfileConfig(max_rounds=3)
    out = normalize_scores("1v1", {"rounds": [1, 2, 3, 4, 5]}, cfg)
    assert out == {"rounds": [1, 2, 3]}


def test_moves_list_form_trims_names_and_defaults_blank_names() -> None:
    moves = normalize_moves(
        {
            "moves": [
                {"name": "  Step over ", "score": "4"},
                {"name": "   ", "score": 3},
                {"name": "Drag back", "score": None},
                {"name": "", "score": None},
                "garbage",
            ]
        }
    )
    assert moves == [
        {"name": "Step over", "score": 4.0},
        {"name": "Move", "score": 3},
        {"name": "Drag back", "score": None},
    ]


def test_moves_legacy_form_uses_companion_name_keys() -> None:
    scores = {
        "skillmove_2": 5,
        "skillmove_1": 3,
        "skillmove_name_1": "Elastico",
        "skillmove_name_2": "  ",
        "skillmove_3": None,
    }
    assert normalize_moves(scores) == [
        {"name": "Elastico", "score": 3},
        {"name": "Move 2", "score": 5},
    ]


def test_legacy_and_list_encodings_normalize_identically() -> None:
    legacy_rounds = {"onevone_round_1": 3, "onevone_round_2": 2, "onevone_round_3": 3}
    list_rounds = {"rounds": [3, 2, 3]}
    assert normalize_scores("1v1", legacy_rounds) == normalize_scores("1v1", list_rounds)

    legacy_moves = {
        "skillmove_1": 4,
        "skillmove_name_1": "Cruyff turn",
        "skillmove_2": 2,
        "skillmove_name_2": "Roulette",
    }
    list_moves = {"moves": [{"name": "Cruyff turn", "score": 4}, {"name": "Roulette", "score": 2}]}
    assert normalize_scores("Skill Moves", legacy_moves) == normalize_scores("Skill Moves", list_moves)


def test_fixed_disciplines_coerce_every_declared_field() -> None:
    out = normalize_scores("Passing Gates", {"passing_strong": "9", "passing_weak": "n/a", "extra": 1})
    assert out == {"passing_strong": 9.0, "passing_weak": None}


def test_unknown_discipline_normalizes_to_empty_payload() -> None:
    assert normalize_scores("Bench Press", {"reps": 10}) == {}


@pytest.mark.parametrize("discipline", list_disciplines(), ids=lambda d: d.key)
def test_normalization_is_idempotent(discipline) -> None:
    raw = {
        "rounds": [3, "2", None],
        "moves": [{"name": " Scissors ", "score": "4"}, {"name": "", "score": 2}],
    }
    for idx, field in enumerate(discipline.fields, start=1):
        raw[field] = str(idx * 3) if idx % 3 else ""
    once = normalize_scores(discipline.name, raw)
    twice = normalize_scores(discipline.name, once)
    assert once == twice


def test_clean_scores_drops_missing_fixed_fields() -> None:
    cleaned = clean_scores("Core Plank", {"plank_time": "45", "plank_form": "", "junk": 3})
    assert cleaned == {"plank_time": 45.0}


def test_clean_scores_stores_list_form_for_legacy_payloads() -> None:
    cleaned = clean_scores("1v1", {"onevone_round_1": "2", "onevone_round_2": 3})
    assert cleaned == {"rounds": [2.0, 3]}


def test_clean_scores_rejects_unknown_discipline() -> None:
    with pytest.raises(UnknownDisciplineError):
        clean_scores("Bench Press", {})
