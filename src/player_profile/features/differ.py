from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from player_profile.core.numeric import MaybeNumber, delta, pct_change, to_finite_number


def diff_metrics(
    current: Mapping[str, MaybeNumber],
    previous: Mapping[str, Any],
) -> Dict[str, Dict[str, MaybeNumber]]:
    """
    Compare ``current`` against ``previous`` key by key.

    Every key of ``current`` appears in both output maps; a key missing from
    ``previous`` (or holding a non-numeric value) compares as ``None``.
    """
    deltas: Dict[str, MaybeNumber] = {}
    pct_changes: Dict[str, MaybeNumber] = {}
    for key, value in current.items():
        prev_value = to_finite_number(previous.get(key))
        deltas[key] = delta(value, prev_value)
        pct_changes[key] = pct_change(value, prev_value)
    return {"deltas": deltas, "pct_changes": pct_changes}


def build_comparisons(
    current: Mapping[str, MaybeNumber],
    previous_id: Optional[str],
    previous_metrics: Optional[Mapping[str, Any]],
) -> Optional[Dict[str, Any]]:
    """Comparisons section of a snapshot, or ``None`` when there is nothing to compare to."""
    if previous_id is None or previous_metrics is None:
        return None
    diff = diff_metrics(current, previous_metrics)
    return {
        "previous_profile_id": previous_id,
        "deltas": diff["deltas"],
        "pct_changes": diff["pct_changes"],
    }


__all__ = ["build_comparisons", "diff_metrics"]
