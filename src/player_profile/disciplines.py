from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple

Family = Literal["fixed", "rounds", "moves"]


class UnknownDisciplineError(KeyError):
    """Raised when a test name does not match any registered discipline."""


def _numbered(prefix: str, count: int) -> Tuple[str, ...]:
    return tuple(f"{prefix}{i}" for i in range(1, count + 1))


@dataclass(frozen=True)
class Discipline:
    name: str
    key: str
    input_key: str
    family: Family = "fixed"
    fields: Tuple[str, ...] = field(default_factory=tuple)
    # list-valued payloads only
    list_field: Optional[str] = None
    legacy_prefix: Optional[str] = None
    legacy_name_prefix: Optional[str] = None

    @property
    def is_dynamic(self) -> bool:
        return self.family != "fixed"


DISCIPLINES: Dict[str, Discipline] = {
    "Power": Discipline(
        name="Power",
        key="power",
        input_key="power",
        fields=_numbered("power_strong_", 4) + _numbered("power_weak_", 4),
    ),
    "Serve Distance": Discipline(
        name="Serve Distance",
        key="serve_distance",
        input_key="serve",
        fields=_numbered("serve_strong_", 4) + _numbered("serve_weak_", 4),
    ),
    "Figure 8 Loops": Discipline(
        name="Figure 8 Loops",
        key="figure_8_loops",
        input_key="figure8",
        fields=("figure8_strong", "figure8_weak", "figure8_both"),
    ),
    "Passing Gates": Discipline(
        name="Passing Gates",
        key="passing_gates",
        input_key="passing",
        fields=("passing_strong", "passing_weak"),
    ),
    "1v1": Discipline(
        name="1v1",
        key="one_v_one",
        input_key="onevone",
        family="rounds",
        list_field="rounds",
        legacy_prefix="onevone_round_",
    ),
    "Juggling": Discipline(
        name="Juggling",
        key="juggling",
        input_key="juggling",
        fields=_numbered("juggling_", 4),
    ),
    "Skill Moves": Discipline(
        name="Skill Moves",
        key="skill_moves",
        input_key="skillmoves",
        family="moves",
        list_field="moves",
        legacy_prefix="skillmove_",
        legacy_name_prefix="skillmove_name_",
    ),
    "5-10-5 Agility": Discipline(
        name="5-10-5 Agility",
        key="agility_5_10_5",
        input_key="agility",
        fields=_numbered("agility_", 3),
    ),
    "Reaction Sprint": Discipline(
        name="Reaction Sprint",
        key="reaction_sprint",
        input_key="reaction5m",
        fields=_numbered("reaction_cue_", 3) + _numbered("reaction_total_", 3),
    ),
    "Single-leg Hop": Discipline(
        name="Single-leg Hop",
        key="single_leg_hop",
        input_key="hop",
        fields=_numbered("hop_left_", 3) + _numbered("hop_right_", 3),
    ),
    "Double-leg Jumps": Discipline(
        name="Double-leg Jumps",
        key="double_leg_jumps",
        input_key="jumps",
        fields=("jumps_10s", "jumps_20s", "jumps_30s"),
    ),
    "Ankle Dorsiflexion": Discipline(
        name="Ankle Dorsiflexion",
        key="ankle_dorsiflexion",
        input_key="ankle",
        fields=("ankle_left", "ankle_right"),
    ),
    "Core Plank": Discipline(
        name="Core Plank",
        key="core_plank",
        input_key="plank",
        fields=("plank_time", "plank_form"),
    ),
}


def list_disciplines() -> List[Discipline]:
    return list(DISCIPLINES.values())


def find_discipline(name: str) -> Optional[Discipline]:
    return DISCIPLINES.get(name)


def get_discipline(name: str) -> Discipline:
    try:
        return DISCIPLINES[name]
    except KeyError as exc:
        raise UnknownDisciplineError(
            f"Unknown test name '{name}'. Available options: "
            + ", ".join(DISCIPLINES)
        ) from exc


__all__ = [
    "DISCIPLINES",
    "Discipline",
    "UnknownDisciplineError",
    "find_discipline",
    "get_discipline",
    "list_disciplines",
]
