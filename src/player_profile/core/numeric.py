"""Null-safe scalar helpers shared by the normalizer, calculators and differ.

Two aggregate families live here and are used deliberately per discipline:

- strict (``mean``, ``sum_of_all``, ``min_of_all``, ``max_of_all``): one missing
  value (or an empty list) makes the whole aggregate ``None``.
- tolerant (``max_of``): missing values are dropped before aggregating.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence

import numpy as np

Number = float
MaybeNumber = Optional[float]


def to_finite_number(value: Any) -> MaybeNumber:
    """Return ``value`` as a finite number, or ``None`` when it cannot be one."""
    # bool is an int subclass but never a score
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, np.integer, np.floating)):
        try:
            return value if math.isfinite(value) else None
        except OverflowError:
            # ints too large for a float
            return None
    if isinstance(value, str) and value.strip() != "":
        # float() accepts digit separators and non-ASCII digits, score entries never carry them
        if "_" in value or not value.isascii():
            return None
        try:
            parsed = float(value)
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def _complete(values: Sequence[MaybeNumber]) -> list[float] | None:
    if len(values) == 0 or any(v is None for v in values):
        return None
    return list(values)  # type: ignore[arg-type]


def mean(values: Sequence[MaybeNumber]) -> MaybeNumber:
    nums = _complete(values)
    if nums is None:
        return None
    return float(np.mean(nums))


def sum_of_all(values: Sequence[MaybeNumber]) -> MaybeNumber:
    nums = _complete(values)
    if nums is None:
        return None
    return float(np.sum(nums))


def min_of_all(values: Sequence[MaybeNumber]) -> MaybeNumber:
    nums = _complete(values)
    if nums is None:
        return None
    return min(nums)


def max_of_all(values: Sequence[MaybeNumber]) -> MaybeNumber:
    nums = _complete(values)
    if nums is None:
        return None
    return max(nums)


def max_of(values: Sequence[MaybeNumber]) -> MaybeNumber:
    nums = [v for v in values if v is not None]
    if not nums:
        return None
    return max(nums)


def spread(values: Sequence[MaybeNumber]) -> MaybeNumber:
    """Strict max minus strict min (the "consistency range")."""
    return difference(max_of_all(values), min_of_all(values))


def sum_top2_of_four(values: Sequence[MaybeNumber]) -> MaybeNumber:
    if len(values) != 4:
        return None
    nums = _complete(values)
    if nums is None:
        return None
    ordered = sorted(nums, reverse=True)
    return ordered[0] + ordered[1]


def difference(a: MaybeNumber, b: MaybeNumber) -> MaybeNumber:
    if a is None or b is None:
        return None
    return a - b


def safe_ratio(numerator: MaybeNumber, denominator: MaybeNumber) -> MaybeNumber:
    if numerator is None or denominator is None:
        return None
    if denominator == 0:
        return None
    return numerator / denominator


def safe_asymmetry_pct(strong: MaybeNumber, weak: MaybeNumber) -> MaybeNumber:
    if strong is None or weak is None:
        return None
    if strong == 0:
        return None
    return ((strong - weak) / strong) * 100


def abs_asymmetry_pct(left: MaybeNumber, right: MaybeNumber) -> MaybeNumber:
    """Absolute left/right gap relative to the larger side."""
    if left is None or right is None:
        return None
    larger = max(left, right)
    if larger == 0:
        return None
    return (abs(left - right) / larger) * 100


def pct_change(current: MaybeNumber, previous: MaybeNumber) -> MaybeNumber:
    if current is None or previous is None:
        return None
    if previous == 0:
        return None
    return ((current - previous) / previous) * 100


def delta(current: MaybeNumber, previous: MaybeNumber) -> MaybeNumber:
    return difference(current, previous)


__all__ = [
    "abs_asymmetry_pct",
    "delta",
    "difference",
    "max_of",
    "max_of_all",
    "mean",
    "min_of_all",
    "pct_change",
    "safe_asymmetry_pct",
    "safe_ratio",
    "spread",
    "sum_of_all",
    "sum_top2_of_four",
    "to_finite_number",
]
