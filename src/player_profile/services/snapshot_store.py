"""Append-only JSON-lines log of profile snapshots.

Each recompute appends one row; rows are never rewritten except by the
administrative delete. The most recent row by ``computed_at`` is a player's
current profile.
"""

from __future__ import annotations

import json
import uuid
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from player_profile.logging import get_logger

logger = get_logger()


class SnapshotNotFoundError(LookupError):
    """Raised when a snapshot id is not present in the log."""


def read_snapshots(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        return []
    records: List[Dict[str, Any]] = []
    with path.open("r", encoding="utf-8") as handle:
        for raw in handle:
            line = raw.strip()
            if not line:
                continue
            try:
                payload = json.loads(line)
            except json.JSONDecodeError:
                logger.warning("Skipping malformed snapshot line in {}", path)
                continue
            if isinstance(payload, dict):
                records.append(payload)
    return records


def _write_snapshots(path: Path, records: List[Dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        for record in records:
            handle.write(json.dumps(record, ensure_ascii=True) + "\n")


def append_snapshot(
    path: Path,
    *,
    player_id: str,
    name: str,
    data: Mapping[str, Any],
) -> Dict[str, Any]:
    row = {
        "id": uuid.uuid4().hex,
        "player_id": str(player_id),
        "name": name,
        "computed_at": str(data.get("computed_at", "")),
        "data": dict(data),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(row, ensure_ascii=True) + "\n")
    logger.info("Stored snapshot {} for player {}", row["id"], row["player_id"])
    return row


def list_snapshots(path: Path, player_id: str) -> List[Dict[str, Any]]:
    """Snapshots for ``player_id``, newest first."""
    rows = [r for r in read_snapshots(path) if str(r.get("player_id", "")) == str(player_id)]
    rows.sort(key=lambda r: str(r.get("computed_at", "")), reverse=True)
    return rows


def latest_snapshot(path: Path, player_id: str) -> Optional[Dict[str, Any]]:
    rows = list_snapshots(path, player_id)
    return rows[0] if rows else None


def get_snapshot(path: Path, snapshot_id: str) -> Dict[str, Any]:
    for row in read_snapshots(path):
        if str(row.get("id")) == str(snapshot_id):
            return row
    raise SnapshotNotFoundError(f"Snapshot {snapshot_id!r} not found in {path}")


def delete_snapshot(path: Path, snapshot_id: str) -> Dict[str, Any]:
    records = read_snapshots(path)
    kept = [r for r in records if str(r.get("id")) != str(snapshot_id)]
    if len(kept) == len(records):
        raise SnapshotNotFoundError(f"Snapshot {snapshot_id!r} not found in {path}")
    _write_snapshots(path, kept)
    logger.info("Deleted snapshot {}", snapshot_id)
    return {"path": str(path), "snapshot_id": str(snapshot_id), "deleted": True}


__all__ = [
    "SnapshotNotFoundError",
    "append_snapshot",
    "delete_snapshot",
    "get_snapshot",
    "latest_snapshot",
    "list_snapshots",
    "read_snapshots",
]
