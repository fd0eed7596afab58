from __future__ import annotations

from player_profile.features.selection import newest_first, oldest_first, pick_latest_by_test
from player_profile.schemas import TestRecord


def _record(record_id: str, test_name: str, test_date: str, created_at: str = "2024-01-01T00:00:00Z") -> TestRecord:
    return TestRecord(
        id=record_id,
        player_id="p1",
        test_name=test_name,
        test_date=test_date,
        scores={},
        created_at=created_at,
    )


def test_latest_prefers_later_test_date_regardless_of_order() -> None:
    jan = _record("jan", "Juggling", "2024-01-10")
    feb = _record("feb", "Juggling", "2024-02-01")
    assert pick_latest_by_test([jan, feb]).latest["Juggling"].id == "feb"
    assert pick_latest_by_test([feb, jan]).latest["Juggling"].id == "feb"


def test_equal_test_date_breaks_tie_on_created_at() -> None:
    early = _record("early", "Power", "2024-03-05", created_at="2024-03-05T08:00:00Z")
    late = _record("late", "Power", "2024-03-05", created_at="2024-03-05T17:30:00Z")
    assert pick_latest_by_test([late, early]).latest["Power"].id == "late"
    assert pick_latest_by_test([early, late]).latest["Power"].id == "late"


def test_full_ties_keep_input_order() -> None:
    a = _record("a", "Power", "2024-03-05")
    b = _record("b", "Power", "2024-03-05")
    assert pick_latest_by_test([a, b]).latest["Power"].id == "a"
    assert pick_latest_by_test([b, a]).latest["Power"].id == "b"


def test_groups_keep_every_record_per_discipline() -> None:
    records = [
        _record("1", "Power", "2024-01-01"),
        _record("2", "1v1", "2024-01-02"),
        _record("3", "Power", "2024-02-01"),
    ]
    selection = pick_latest_by_test(records)
    assert list(selection.by_name) == ["Power", "1v1"]
    assert [r.id for r in selection.by_name["Power"]] == ["1", "3"]
    assert set(selection.latest) == {"Power", "1v1"}


def test_orderings_are_mirror_images() -> None:
    records = [
        _record("b", "Power", "2024-01-01", created_at="2024-01-01T10:00:00Z"),
        _record("c", "Power", "2024-02-01"),
        _record("a", "Power", "2024-01-01", created_at="2024-01-01T09:00:00Z"),
    ]
    assert [r.id for r in newest_first(records)] == ["c", "b", "a"]
    assert [r.id for r in oldest_first(records)] == ["a", "b", "c"]
