"""Typed views of the rows the engine reads from the record store."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator


def _iso(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class TestRecord(BaseModel):
    """One recorded evaluation event for a player."""

    # keep pytest from collecting this as a test class
    __test__ = False

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    player_id: str = ""
    test_name: str
    test_date: str
    scores: Dict[str, Any] = {}
    created_at: str = ""
    updated_at: Optional[str] = None

    @field_validator("id", "player_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if value is None:
            return ""
        return str(value) if not isinstance(value, str) else value

    @field_validator("test_date", "updated_at", mode="before")
    @classmethod
    def _render_dates(cls, value: Any) -> Any:
        return _iso(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _render_created_at(cls, value: Any) -> Any:
        return "" if value is None else _iso(value)

    @field_validator("scores", mode="before")
    @classmethod
    def _default_scores(cls, value: Any) -> Any:
        return {} if value is None else value


class PreviousProfile(BaseModel):
    """The metrics of the most recent prior snapshot, used for comparisons."""

    model_config = ConfigDict(extra="ignore")

    id: str
    metrics: Dict[str, Any] = {}

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if value is not None and not isinstance(value, str) else value

    @field_validator("metrics", mode="before")
    @classmethod
    def _default_metrics(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def from_snapshot_row(cls, row: Mapping[str, Any]) -> "PreviousProfile":
        """Build from a stored snapshot row shaped ``{id, data: {metrics}}``."""
        data = row.get("data") or {}
        return cls(id=row["id"], metrics=data.get("metrics") or {})


__all__ = ["PreviousProfile", "TestRecord"]
