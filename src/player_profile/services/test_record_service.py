"""Validation and clean-up of a test record before it is written to the store."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional

from player_profile.config import ProfileConfig
from player_profile.disciplines import find_discipline
from player_profile.features.normalize import clean_scores

TEST_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InvalidTestRecordError(ValueError):
    """Raised when an authored test record cannot be stored."""


def prepare_test_record(
    test_name: Any,
    test_date: Any,
    scores: Optional[Mapping[str, Any]],
    config: ProfileConfig | None = None,
) -> Dict[str, Any]:
    """Validate name/date and return the record fields with cleaned scores."""
    name = str(test_name if test_name is not None else "").strip()
    day = str(test_date if test_date is not None else "").strip()

    if not name:
        raise InvalidTestRecordError("test_name is required")
    if not TEST_DATE_RE.match(day):
        raise InvalidTestRecordError("test_date must be YYYY-MM-DD")
    if find_discipline(name) is None:
        raise InvalidTestRecordError(f"Unknown test_name {name!r}")
    if scores is not None and not isinstance(scores, Mapping):
        raise InvalidTestRecordError("scores must be an object")

    cleaned = clean_scores(name, scores or {}, config)
    return {"test_name": name, "test_date": day, "scores": cleaned}


__all__ = ["InvalidTestRecordError", "prepare_test_record"]
