"""Per-discipline metric calculators.

Each calculator receives the canonical payload produced by
:func:`player_profile.features.normalize.normalize_scores` and returns the
structured inputs stored under ``inputs.<input_key>`` together with a flat
mapping of globally unique metric names.

Strict and tolerant aggregates are chosen per discipline and must not be
unified: switching a metric between the two families changes which values go
``None`` under partial data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from player_profile.config import ProfileConfig
from player_profile.core.numeric import (
    MaybeNumber,
    abs_asymmetry_pct,
    difference,
    max_of,
    max_of_all,
    mean,
    min_of_all,
    safe_asymmetry_pct,
    safe_ratio,
    spread,
    sum_of_all,
    sum_top2_of_four,
)
from player_profile.disciplines import find_discipline
from player_profile.features.normalize import normalize_scores
from player_profile.logging import get_logger

logger = get_logger()

INCHES_TO_CM = 2.54

Metrics = Dict[str, MaybeNumber]
Calculator = Callable[[Mapping[str, Any]], Tuple[Dict[str, Any], Metrics]]


@dataclass(frozen=True)
class DisciplineResult:
    test_name: str
    input_key: str
    inputs: Dict[str, Any]
    metrics: Metrics


def _series(payload: Mapping[str, Any], prefix: str, count: int) -> List[MaybeNumber]:
    return [payload.get(f"{prefix}{i}") for i in range(1, count + 1)]


def _strong_weak_trials(payload: Mapping[str, Any], field_prefix: str, metric_prefix: str):
    strong = _series(payload, f"{field_prefix}_strong_", 4)
    weak = _series(payload, f"{field_prefix}_weak_", 4)
    strong_avg = mean(strong)
    weak_avg = mean(weak)
    strong_max = max_of(strong)
    weak_max = max_of(weak)
    metrics: Metrics = {
        f"{metric_prefix}_strong_avg": strong_avg,
        f"{metric_prefix}_weak_avg": weak_avg,
        f"{metric_prefix}_strong_max": strong_max,
        f"{metric_prefix}_weak_max": weak_max,
        f"{metric_prefix}_weak_to_strong_ratio": safe_ratio(weak_avg, strong_avg),
        f"{metric_prefix}_asymmetry_pct": safe_asymmetry_pct(strong_avg, weak_avg),
        f"{metric_prefix}_weak_to_strong_ratio_max": safe_ratio(weak_max, strong_max),
        f"{metric_prefix}_asymmetry_pct_max": safe_asymmetry_pct(strong_max, weak_max),
    }
    return {"strong": strong, "weak": weak}, metrics


def power_metrics(payload: Mapping[str, Any]):
    return _strong_weak_trials(payload, "power", "shot_power")


def serve_distance_metrics(payload: Mapping[str, Any]):
    return _strong_weak_trials(payload, "serve", "serve_distance")


def figure8_metrics(payload: Mapping[str, Any]):
    strong = payload.get("figure8_strong")
    weak = payload.get("figure8_weak")
    both = payload.get("figure8_both")
    metrics: Metrics = {
        "figure8_loops_strong": strong,
        "figure8_loops_weak": weak,
        "figure8_loops_both": both,
        "figure8_weak_to_strong_ratio": safe_ratio(weak, strong),
        "figure8_both_to_strong_ratio": safe_ratio(both, strong),
        "figure8_asymmetry_pct": safe_asymmetry_pct(strong, weak),
    }
    return {"strong": strong, "weak": weak, "both": both}, metrics


def passing_gates_metrics(payload: Mapping[str, Any]):
    strong = payload.get("passing_strong")
    weak = payload.get("passing_weak")
    total = None if strong is None or weak is None else strong + weak
    weak_share = safe_ratio(weak, total)
    metrics: Metrics = {
        "passing_gates_strong_hits": strong,
        "passing_gates_weak_hits": weak,
        "passing_gates_total_hits": total,
        "passing_gates_weak_to_strong_ratio": safe_ratio(weak, strong),
        "passing_gates_asymmetry_pct": safe_asymmetry_pct(strong, weak),
        "passing_gates_weak_share_pct": None if weak_share is None else weak_share * 100,
    }
    return {"strong": strong, "weak": weak}, metrics


def one_v_one_metrics(payload: Mapping[str, Any]):
    rounds = list(payload.get("rounds") or [])
    metrics: Metrics = {
        "one_v_one_avg_score": mean(rounds),
        "one_v_one_total_score": sum_of_all(rounds),
        "one_v_one_best_round": max_of_all(rounds),
        "one_v_one_worst_round": min_of_all(rounds),
        "one_v_one_consistency_range": spread(rounds),
    }
    return {"rounds": rounds}, metrics


def juggling_metrics(payload: Mapping[str, Any]):
    attempts = _series(payload, "juggling_", 4)
    metrics: Metrics = {
        "juggle_best": max_of(attempts),
        "juggle_best2_sum": sum_top2_of_four(attempts),
        "juggle_avg_all": mean(attempts),
        "juggle_total": sum_of_all(attempts),
        "juggle_consistency_range": spread(attempts),
    }
    return {"attempts": attempts}, metrics


def skill_moves_metrics(payload: Mapping[str, Any]):
    moves = [dict(m) for m in payload.get("moves") or []]
    ratings = [m.get("score") for m in moves]
    metrics: Metrics = {
        "skill_moves_avg_rating": mean(ratings),
        "skill_moves_total_rating": sum_of_all(ratings),
        "skill_moves_best_rating": max_of_all(ratings),
        "skill_moves_worst_rating": min_of_all(ratings),
        "skill_moves_consistency_range": spread(ratings),
    }
    return {"moves": moves, "ratings": ratings}, metrics


def agility_metrics(payload: Mapping[str, Any]):
    trials = _series(payload, "agility_", 3)
    best = min_of_all(trials)
    worst = max_of_all(trials)
    metrics: Metrics = {
        "agility_5_10_5_best_time": best,
        "agility_5_10_5_avg_time": mean(trials),
        "agility_5_10_5_worst_time": worst,
        "agility_5_10_5_consistency_range": difference(worst, best),
    }
    return {"trials": trials}, metrics


def reaction_sprint_metrics(payload: Mapping[str, Any]):
    reaction_times = _series(payload, "reaction_cue_", 3)
    total_times = _series(payload, "reaction_total_", 3)
    metrics: Metrics = {
        "reaction_5m_reaction_time_avg": mean(reaction_times),
        "reaction_5m_total_time_avg": mean(total_times),
        "reaction_5m_reaction_time_best": min_of_all(reaction_times),
        "reaction_5m_total_time_best": min_of_all(total_times),
        "reaction_5m_reaction_time_worst": max_of_all(reaction_times),
        "reaction_5m_total_time_worst": max_of_all(total_times),
        "reaction_5m_reaction_consistency_range": spread(reaction_times),
        "reaction_5m_total_consistency_range": spread(total_times),
    }
    return {"reaction_times": reaction_times, "total_times": total_times}, metrics


def single_leg_hop_metrics(payload: Mapping[str, Any]):
    left = _series(payload, "hop_left_", 3)
    right = _series(payload, "hop_right_", 3)
    left_max = max_of(left)
    right_max = max_of(right)
    metrics: Metrics = {
        "single_leg_hop_left": left_max,
        "single_leg_hop_right": right_max,
        "single_leg_hop_asymmetry_pct": abs_asymmetry_pct(left_max, right_max),
        "single_leg_hop_left_avg": mean(left),
        "single_leg_hop_right_avg": mean(right),
        "single_leg_hop_left_consistency_range": spread(left),
        "single_leg_hop_right_consistency_range": spread(right),
    }
    return {"left": left, "right": right}, metrics


def double_leg_jumps_metrics(payload: Mapping[str, Any]):
    c10 = payload.get("jumps_10s")
    c20 = payload.get("jumps_20s")
    c30 = payload.get("jumps_30s")
    last10 = difference(c30, c20)
    if c10 is None or last10 is None or c10 == 0:
        dropoff_pct = None
    else:
        dropoff_pct = ((c10 - last10) / c10) * 100
    metrics: Metrics = {
        "double_leg_jumps_first10": c10,
        "double_leg_jumps_total_reps": c30,
        "double_leg_jumps_last10": last10,
        "double_leg_jumps_dropoff_pct": dropoff_pct,
        "double_leg_jumps_mid10": difference(c20, c10),
        "double_leg_jumps_first20": c20,
        "double_leg_jumps_last20": difference(c30, c10),
    }
    return {"c10": c10, "c20": c20, "c30": c30}, metrics


def ankle_dorsiflexion_metrics(payload: Mapping[str, Any]):
    # entered in inches
    left_in = payload.get("ankle_left")
    right_in = payload.get("ankle_right")
    left_cm = None if left_in is None else left_in * INCHES_TO_CM
    right_cm = None if right_in is None else right_in * INCHES_TO_CM
    avg_cm = None if left_cm is None or right_cm is None else (left_cm + right_cm) / 2
    metrics: Metrics = {
        "ankle_dorsiflex_left_cm": left_cm,
        "ankle_dorsiflex_right_cm": right_cm,
        "ankle_dorsiflex_avg_cm": avg_cm,
        "ankle_dorsiflex_asymmetry_pct": abs_asymmetry_pct(left_cm, right_cm),
        "ankle_dorsiflex_left_minus_right_cm": difference(left_cm, right_cm),
    }
    return {"left_in": left_in, "right_in": right_in}, metrics


def core_plank_metrics(payload: Mapping[str, Any]):
    hold = payload.get("plank_time")
    form_flag = payload.get("plank_form")
    if hold is None or form_flag is None:
        good_form = None
    else:
        good_form = hold if form_flag == 1 else 0
    metrics: Metrics = {
        "core_plank_hold_sec": hold,
        "core_plank_form_flag": form_flag,
        "core_plank_hold_sec_if_good_form": good_form,
    }
    return {"hold": hold, "form_flag": form_flag}, metrics


CALCULATORS: Dict[str, Calculator] = {
    "Power": power_metrics,
    "Serve Distance": serve_distance_metrics,
    "Figure 8 Loops": figure8_metrics,
    "Passing Gates": passing_gates_metrics,
    "1v1": one_v_one_metrics,
    "Juggling": juggling_metrics,
    "Skill Moves": skill_moves_metrics,
    "5-10-5 Agility": agility_metrics,
    "Reaction Sprint": reaction_sprint_metrics,
    "Single-leg Hop": single_leg_hop_metrics,
    "Double-leg Jumps": double_leg_jumps_metrics,
    "Ankle Dorsiflexion": ankle_dorsiflexion_metrics,
    "Core Plank": core_plank_metrics,
}


def compute_discipline(
    test_name: str,
    scores: Optional[Mapping[str, Any]],
    config: ProfileConfig | None = None,
) -> Optional[DisciplineResult]:
    """Normalize ``scores`` and run the calculator for ``test_name`` (``None`` if unknown)."""
    discipline = find_discipline(test_name)
    calculator = CALCULATORS.get(test_name)
    if discipline is None or calculator is None:
        return None
    canonical = normalize_scores(test_name, scores, config)
    inputs, metrics = calculator(canonical)
    missing = sum(1 for value in metrics.values() if value is None)
    logger.debug("Computed {} metrics for {} ({} null)", len(metrics), test_name, missing)
    return DisciplineResult(
        test_name=test_name,
        input_key=discipline.input_key,
        inputs=inputs,
        metrics=metrics,
    )


def compute_metrics_for_test(
    test_name: str,
    scores: Optional[Mapping[str, Any]],
    config: ProfileConfig | None = None,
) -> Metrics:
    result = compute_discipline(test_name, scores, config)
    return {} if result is None else dict(result.metrics)


__all__ = [
    "CALCULATORS",
    "DisciplineResult",
    "INCHES_TO_CM",
    "compute_discipline",
    "compute_metrics_for_test",
]
