from __future__ import annotations

import argparse
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Sequence

import pandas as pd

from player_profile.config import load_profile_config
from player_profile.services.snapshot_store import list_snapshots

HISTORY_COLUMNS = ["snapshot_id", "computed_at", "metric", "value", "delta", "pct_change"]


def metric_history_frame(snapshots: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    """Long-form metric history: one row per (snapshot, metric)."""
    rows: list[dict[str, Any]] = []
    for snap in snapshots:
        data = snap.get("data") or {}
        metrics = data.get("metrics") or {}
        comparisons = data.get("comparisons") or {}
        deltas = comparisons.get("deltas") or {}
        pct_changes = comparisons.get("pct_changes") or {}
        for metric, value in metrics.items():
            rows.append(
                {
                    "snapshot_id": snap.get("id"),
                    "computed_at": snap.get("computed_at") or data.get("computed_at"),
                    "metric": metric,
                    "value": value,
                    "delta": deltas.get(metric),
                    "pct_change": pct_changes.get(metric),
                }
            )
    if not rows:
        return pd.DataFrame(columns=HISTORY_COLUMNS)
    frame = pd.DataFrame(rows, columns=HISTORY_COLUMNS)
    for col in ("value", "delta", "pct_change"):
        frame[col] = pd.to_numeric(frame[col], errors="coerce")
    return frame.sort_values(["computed_at", "metric"], kind="stable").reset_index(drop=True)


def export_metric_history(
    *,
    snapshots_path: str | Path,
    player_id: str,
    out_csv: str | Path,
) -> Dict[str, Any]:
    snaps = list_snapshots(Path(snapshots_path), player_id)
    frame = metric_history_frame(snaps)

    out_path = Path(out_csv)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(out_path, index=False)

    payload = {
        "generated_at_utc": datetime.now(timezone.utc).isoformat(),
        "snapshots_path": str(snapshots_path),
        "player_id": str(player_id),
        "snapshot_count": int(len(snaps)),
        "metric_count": int(frame["metric"].nunique()) if not frame.empty else 0,
        "row_count": int(len(frame)),
        "csv_path": str(out_path),
    }
    print(f"[metric-history] wrote csv -> {out_path}")
    print(
        "[metric-history] "
        f"player={player_id} | snapshots={payload['snapshot_count']} | rows={payload['row_count']}"
    )
    return payload


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export a player's metric history (values, deltas, % changes) across snapshots to CSV."
    )
    parser.add_argument("--player-id", required=True, help="Player whose snapshots to export.")
    parser.add_argument("--out", required=True, help="Output CSV path.")
    parser.add_argument("--snapshots", default=None, help="Snapshot log path (defaults to PROFILE_SNAPSHOT_LOG_PATH).")
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    snapshots_path = args.snapshots or load_profile_config().snapshot_log_path
    export_metric_history(snapshots_path=snapshots_path, player_id=args.player_id, out_csv=args.out)


if __name__ == "__main__":
    main()
