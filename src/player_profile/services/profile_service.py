"""Assemble a player's profile snapshot from their test records.

Pure and synchronous: the caller fetches the records and the most recent prior
snapshot, this module never touches storage and never mutates its inputs.
"""

from __future__ import annotations

import copy
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from player_profile.config import ProfileConfig, load_profile_config
from player_profile.core.numeric import MaybeNumber
from player_profile.features.calculators import compute_discipline
from player_profile.features.differ import build_comparisons
from player_profile.features.progressions import compute_test_progressions
from player_profile.features.selection import pick_latest_by_test
from player_profile.logging import get_logger
from player_profile.schemas import PreviousProfile, TestRecord

logger = get_logger()

PROFILE_VERSION = 1

RecordLike = Union[TestRecord, Mapping[str, Any]]
PreviousLike = Union[PreviousProfile, Mapping[str, Any], None]


def _as_records(records: Sequence[RecordLike]) -> List[TestRecord]:
    return [r if isinstance(r, TestRecord) else TestRecord.model_validate(dict(r)) for r in records]


def _as_previous(previous: PreviousLike) -> Optional[PreviousProfile]:
    if previous is None or isinstance(previous, PreviousProfile):
        return previous
    if "data" in previous and "metrics" not in previous:
        return PreviousProfile.from_snapshot_row(previous)
    return PreviousProfile.model_validate(dict(previous))


def _render_now(now: Union[datetime, str]) -> str:
    return now.isoformat() if isinstance(now, datetime) else str(now)


def _test_history(by_name: Mapping[str, List[TestRecord]]) -> List[Dict[str, Any]]:
    history = []
    for name, group in by_name.items():
        # newest first by date only, ties keep input order
        ordered = sorted(group, key=lambda r: r.test_date, reverse=True)
        history.append(
            {
                "test_name": name,
                "entries": [{"id": r.id, "test_date": r.test_date} for r in ordered],
            }
        )
    return history


def compute_profile(
    tests: Sequence[RecordLike],
    now: Union[datetime, str],
    previous_profile: PreviousLike = None,
    *,
    config: ProfileConfig | None = None,
) -> Dict[str, Any]:
    """
    Compute a new profile snapshot payload.

    Exactly one record per discipline (the latest by ``test_date`` then
    ``created_at``) feeds that discipline's metrics. Disciplines without records
    contribute no keys at all. ``comparisons`` is only present when a previous
    profile is supplied.
    """
    cfg = config or load_profile_config()
    records = _as_records(tests)
    previous = _as_previous(previous_profile)
    selection = pick_latest_by_test(records)

    inputs: Dict[str, Any] = {}
    metrics: Dict[str, MaybeNumber] = {}
    for test_name, record in selection.latest.items():
        result = compute_discipline(test_name, record.scores, cfg)
        if result is None:
            logger.debug("Skipping unknown test name {!r} (record {})", test_name, record.id)
            continue
        inputs[result.input_key] = result.inputs
        metrics.update(result.metrics)
    inputs["test_history"] = _test_history(selection.by_name)

    payload: Dict[str, Any] = {
        "version": PROFILE_VERSION,
        "computed_at": _render_now(now),
        "sources": {
            "tests_total": len(records),
            "latest_tests": [
                {"id": r.id, "test_name": r.test_name, "test_date": r.test_date}
                for r in selection.latest.values()
            ],
        },
        "raw_tests": [
            {
                "id": r.id,
                "test_name": r.test_name,
                "test_date": r.test_date,
                "scores": copy.deepcopy(r.scores),
            }
            for r in records
        ],
        "inputs": inputs,
        "metrics": metrics,
    }

    comparisons = build_comparisons(
        metrics,
        previous.id if previous is not None else None,
        previous.metrics if previous is not None else None,
    )
    if comparisons is not None:
        payload["comparisons"] = comparisons

    payload["test_progressions"] = compute_test_progressions(selection.by_name, cfg)

    logger.info(
        "Computed profile | tests={} | disciplines={} | metrics={} | compared={}",
        len(records),
        len(selection.latest),
        len(metrics),
        comparisons is not None,
    )
    return payload


__all__ = ["PROFILE_VERSION", "compute_profile"]
