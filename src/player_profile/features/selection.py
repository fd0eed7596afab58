from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from player_profile.schemas import TestRecord


@dataclass(frozen=True)
class LatestSelection:
    """Latest record per discipline plus the full grouped history."""

    latest: Dict[str, TestRecord]
    by_name: Dict[str, List[TestRecord]]


def newest_first(records: Sequence[TestRecord]) -> List[TestRecord]:
    """Order by ``test_date`` desc, then ``created_at`` desc; remaining ties keep input order."""
    # ISO dates compare lexically in chronological order
    by_created = sorted(records, key=lambda r: r.created_at, reverse=True)
    return sorted(by_created, key=lambda r: r.test_date, reverse=True)


def oldest_first(records: Sequence[TestRecord]) -> List[TestRecord]:
    return sorted(records, key=lambda r: (r.test_date, r.created_at))


def group_by_test_name(records: Sequence[TestRecord]) -> Dict[str, List[TestRecord]]:
    grouped: Dict[str, List[TestRecord]] = {}
    for record in records:
        grouped.setdefault(record.test_name, []).append(record)
    return grouped


def pick_latest_by_test(records: Sequence[TestRecord]) -> LatestSelection:
    by_name = group_by_test_name(records)
    latest = {name: newest_first(group)[0] for name, group in by_name.items()}
    return LatestSelection(latest=latest, by_name=by_name)


__all__ = [
    "LatestSelection",
    "group_by_test_name",
    "newest_first",
    "oldest_first",
    "pick_latest_by_test",
]
