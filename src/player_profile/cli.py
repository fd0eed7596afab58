from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

import typer
from pydantic import ValidationError

from player_profile.config import load_profile_config
from player_profile.logging import configure_logging
from player_profile.scripts.export_metric_history import export_metric_history
from player_profile.services.profile_service import compute_profile
from player_profile.services.snapshot_store import (
    SnapshotNotFoundError,
    append_snapshot,
    delete_snapshot,
    latest_snapshot,
)
from player_profile.services.test_record_service import (
    InvalidTestRecordError,
    prepare_test_record,
)

DEFAULT_SNAPSHOT_NAME = "Recompute stats"


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"File not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"{path} is not valid JSON: {exc}") from exc


def _load_records(path: Path) -> List[dict]:
    payload = _load_json(path)
    if isinstance(payload, dict):
        payload = payload.get("tests", [])
    if not isinstance(payload, list):
        raise typer.BadParameter(f"{path} must hold a list of test records or {{'tests': [...]}}.")
    return payload


def _resolve_player_id(records: List[dict], explicit: Optional[str]) -> str:
    if explicit:
        return explicit
    ids = {str(r.get("player_id")) for r in records if isinstance(r, dict) and r.get("player_id")}
    if len(ids) != 1:
        raise typer.BadParameter("Pass --player-id when records do not share exactly one player_id.")
    return ids.pop()


app = typer.Typer(help="Compute and manage player performance profile snapshots.")


@app.callback()
def main_callback() -> None:
    configure_logging(load_profile_config())


@app.command()
def compute(
    records_path: Path = typer.Argument(..., help="JSON file with the player's test records."),
    player_id: Optional[str] = typer.Option(None, "--player-id", "-p", help="Owning player id."),
    name: str = typer.Option(DEFAULT_SNAPSHOT_NAME, "--name", "-n", help="Label for the new snapshot."),
    snapshots: Optional[Path] = typer.Option(None, help="Snapshot log (defaults to PROFILE_SNAPSHOT_LOG_PATH)."),
    out: Optional[Path] = typer.Option(None, help="Write the snapshot payload here instead of stdout."),
    store: bool = typer.Option(True, "--store/--no-store", help="Append the snapshot to the log."),
) -> None:
    config = load_profile_config()
    log_path = snapshots or config.snapshot_log_path
    records = _load_records(records_path)
    pid = _resolve_player_id(records, player_id)
    label = name.strip() or DEFAULT_SNAPSHOT_NAME

    previous = latest_snapshot(log_path, pid)
    try:
        data = compute_profile(records, datetime.now(timezone.utc), previous, config=config)
    except ValidationError as exc:
        typer.echo(f"[error] invalid test records: {exc}", err=True)
        raise typer.Exit(1)

    if store:
        row = append_snapshot(log_path, player_id=pid, name=label, data=data)
        typer.echo(f"[profile] stored snapshot {row['id']} -> {log_path}", err=True)

    text = json.dumps(data, indent=2)
    if out is not None:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
        typer.echo(f"[profile] wrote snapshot -> {out}", err=True)
    else:
        typer.echo(text)


@app.command()
def clean(
    test_name: str = typer.Argument(..., help="Discipline name, e.g. 'Power' or '1v1'."),
    test_date: str = typer.Argument(..., help="Test date, YYYY-MM-DD."),
    scores_path: Path = typer.Argument(..., help="JSON file with the raw score payload."),
) -> None:
    scores = _load_json(scores_path)
    try:
        record = prepare_test_record(test_name, test_date, scores, load_profile_config())
    except InvalidTestRecordError as exc:
        typer.echo(f"[error] {exc}", err=True)
        raise typer.Exit(1)
    typer.echo(json.dumps(record, indent=2))


@app.command()
def history(
    player_id: str = typer.Argument(..., help="Player whose snapshots to export."),
    out: Path = typer.Option(..., help="Output CSV path."),
    snapshots: Optional[Path] = typer.Option(None, help="Snapshot log (defaults to PROFILE_SNAPSHOT_LOG_PATH)."),
) -> None:
    log_path = snapshots or load_profile_config().snapshot_log_path
    export_metric_history(snapshots_path=log_path, player_id=player_id, out_csv=out)


@app.command()
def delete(
    snapshot_id: str = typer.Argument(..., help="Snapshot id to remove."),
    snapshots: Optional[Path] = typer.Option(None, help="Snapshot log (defaults to PROFILE_SNAPSHOT_LOG_PATH)."),
) -> None:
    log_path = snapshots or load_profile_config().snapshot_log_path
    try:
        delete_snapshot(log_path, snapshot_id)
    except SnapshotNotFoundError as exc:
        typer.echo(f"[error] {exc}", err=True)
        raise typer.Exit(1)
    typer.echo(f"[profile] deleted snapshot {snapshot_id}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
