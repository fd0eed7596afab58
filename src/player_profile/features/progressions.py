"""Per-discipline progress from the first recorded test to the most recent one."""

from __future__ import annotations

import copy
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence

from player_profile.config import ProfileConfig
from player_profile.features.calculators import Metrics, compute_metrics_for_test
from player_profile.features.differ import diff_metrics
from player_profile.features.selection import oldest_first
from player_profile.schemas import TestRecord


def _days_between(first: str, last: str) -> Optional[int]:
    try:
        start = date.fromisoformat(first[:10])
        end = date.fromisoformat(last[:10])
    except ValueError:
        return None
    return (end - start).days


def _point(record: TestRecord, metrics: Metrics) -> Dict[str, Any]:
    return {"test_date": record.test_date, "test_id": record.id, "metrics": dict(metrics)}


def progression_for(
    test_name: str,
    records: Sequence[TestRecord],
    config: ProfileConfig | None = None,
) -> Optional[Dict[str, Any]]:
    if not records:
        return None
    ordered = oldest_first(records)
    timeline = [
        _point(record, compute_metrics_for_test(test_name, record.scores, config))
        for record in ordered
    ]
    first, most_recent = copy.deepcopy(timeline[0]), copy.deepcopy(timeline[-1])
    previous = copy.deepcopy(timeline[-2]) if len(timeline) > 1 else None

    since_first = diff_metrics(most_recent["metrics"], first["metrics"])
    changes: Dict[str, Any] = {
        "since_first": since_first["deltas"],
        "pct_since_first": since_first["pct_changes"],
    }
    if previous is not None:
        since_previous = diff_metrics(most_recent["metrics"], previous["metrics"])
        changes["since_previous"] = since_previous["deltas"]
        changes["pct_since_previous"] = since_previous["pct_changes"]

    out: Dict[str, Any] = {
        "first_test": first,
        "most_recent_test": most_recent,
    }
    if previous is not None:
        out["previous_test"] = previous
    out.update(
        {
            "changes": changes,
            "test_count": len(ordered),
            "date_range_days": _days_between(first["test_date"], most_recent["test_date"]),
            "timeline": timeline,
        }
    )
    return out


def compute_test_progressions(
    by_name: Mapping[str, List[TestRecord]],
    config: ProfileConfig | None = None,
) -> Dict[str, Dict[str, Any]]:
    progressions: Dict[str, Dict[str, Any]] = {}
    for test_name, records in by_name.items():
        entry = progression_for(test_name, records, config)
        if entry is not None:
            progressions[test_name] = entry
    return progressions


__all__ = ["compute_test_progressions", "progression_for"]
