"""Collapse raw score payloads into one canonical shape per discipline.

Two encodings exist for the list-valued disciplines:

- current: an explicit list field (``rounds`` for 1v1, ``moves`` for Skill Moves)
- legacy: flat indexed keys (``onevone_round_3``, ``skillmove_2`` plus an
  optional ``skillmove_name_2``)

The list field wins whenever it is present. Fixed disciplines have no competing
encodings; each declared field is coerced on its own.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

from player_profile.config import ProfileConfig, load_profile_config
from player_profile.core.numeric import MaybeNumber, to_finite_number
from player_profile.disciplines import Discipline, find_discipline, get_discipline

DEFAULT_MOVE_NAME = "Move"


def _indexed_entries(scores: Mapping[str, Any], prefix: str) -> List[Tuple[int, Any]]:
    """Return ``(index, raw value)`` for every ``<prefix><n>`` key, ordered by n."""
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
    found: List[Tuple[int, Any]] = []
    for key, value in scores.items():
        match = pattern.match(str(key))
        if match:
            found.append((int(match.group(1)), value))
    found.sort(key=lambda item: item[0])
    return found


def _clean_name(raw: Any) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def normalize_rounds(
    scores: Mapping[str, Any],
    *,
    list_field: str = "rounds",
    legacy_prefix: str = "onevone_round_",
    limit: int = 50,
) -> List[MaybeNumber]:
    raw = scores.get(list_field)
    if isinstance(raw, (list, tuple)):
        return [to_finite_number(v) for v in list(raw)[:limit]]
    # legacy gaps are not filled, a missing index simply yields no entry
    return [to_finite_number(v) for _, v in _indexed_entries(scores, legacy_prefix)][:limit]


def normalize_moves(
    scores: Mapping[str, Any],
    *,
    list_field: str = "moves",
    legacy_prefix: str = "skillmove_",
    legacy_name_prefix: str = "skillmove_name_",
    limit: int = 50,
) -> List[Dict[str, Any]]:
    moves: List[Dict[str, Any]] = []
    raw = scores.get(list_field)
    if isinstance(raw, (list, tuple)):
        for item in raw:
            entry = item if isinstance(item, Mapping) else {}
            name = _clean_name(entry.get("name"))
            score = to_finite_number(entry.get("score"))
            if not name and score is None:
                continue
            moves.append({"name": name or DEFAULT_MOVE_NAME, "score": score})
    else:
        for idx, value in _indexed_entries(scores, legacy_prefix):
            name = _clean_name(scores.get(f"{legacy_name_prefix}{idx}"))
            score = to_finite_number(value)
            if not name and score is None:
                continue
            moves.append({"name": name or f"{DEFAULT_MOVE_NAME} {idx}", "score": score})
    return moves[:limit]


def normalize_fixed(scores: Mapping[str, Any], fields: Tuple[str, ...]) -> Dict[str, MaybeNumber]:
    return {key: to_finite_number(scores.get(key)) for key in fields}


def _normalize_for(
    discipline: Discipline, scores: Mapping[str, Any], cfg: ProfileConfig
) -> Dict[str, Any]:
    if discipline.family == "rounds":
        return {
            "rounds": normalize_rounds(
                scores,
                list_field=discipline.list_field or "rounds",
                legacy_prefix=discipline.legacy_prefix or "",
                limit=cfg.max_rounds,
            )
        }
    if discipline.family == "moves":
        return {
            "moves": normalize_moves(
                scores,
                list_field=discipline.list_field or "moves",
                legacy_prefix=discipline.legacy_prefix or "",
                legacy_name_prefix=discipline.legacy_name_prefix or "",
                limit=cfg.max_moves,
            )
        }
    return normalize_fixed(scores, discipline.fields)


def normalize_scores(
    test_name: str,
    scores: Optional[Mapping[str, Any]],
    config: ProfileConfig | None = None,
) -> Dict[str, Any]:
    """Return the canonical payload for ``test_name``; unknown disciplines yield ``{}``."""
    discipline = find_discipline(test_name)
    if discipline is None:
        return {}
    cfg = config or load_profile_config()
    return _normalize_for(discipline, scores or {}, cfg)


def clean_scores(
    test_name: str,
    scores: Optional[Mapping[str, Any]],
    config: ProfileConfig | None = None,
) -> Dict[str, Any]:
    """
    Authoring-time clean-up of a score payload before it is stored.

    List disciplines are stored in canonical list form. Fixed disciplines keep
    only their declared fields that hold a finite number; anything else is
    dropped rather than stored as null.
    """
    discipline = get_discipline(test_name)
    cfg = config or load_profile_config()
    canonical = _normalize_for(discipline, scores or {}, cfg)
    if discipline.is_dynamic:
        return canonical
    return {key: value for key, value in canonical.items() if value is not None}


__all__ = [
    "DEFAULT_MOVE_NAME",
    "clean_scores",
    "normalize_fixed",
    "normalize_moves",
    "normalize_rounds",
    "normalize_scores",
]
