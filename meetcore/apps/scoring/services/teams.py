# meetcore/apps/scoring/services/teams.py
"""
Clasificación por clubes.

Por club y por métrica (overall, squat, bench, deadlift) cuentan los mejores
4 hombres y la mejor mujer. Los huecos se rellenan con marcadores de 0 puntos
para que cada fila tenga siempre 5 contribuyentes. El ranking entre clubes es
de estilo competición (empates exactos comparten puesto).
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .coefficients import FEMALE, MALE, normalize_gender
from .comparators import ComparatorChain, by_desc

REQUIRED_MALE_COUNT = 4
REQUIRED_FEMALE_COUNT = 1
TEAM_SIZE = REQUIRED_MALE_COUNT + REQUIRED_FEMALE_COUNT

METRIC_OVERALL = "overall"
METRIC_SQUAT = "squat"
METRIC_BENCH = "bench"
METRIC_DEADLIFT = "deadlift"
METRICS = (METRIC_OVERALL, METRIC_SQUAT, METRIC_BENCH, METRIC_DEADLIFT)

# métrica -> (campo de puntos, campo secundario) de TeamMember
_METRIC_FIELDS = {
    METRIC_OVERALL: ("coefficient_points", "total_weight"),
    METRIC_SQUAT: ("squat_points", "best_squat"),
    METRIC_BENCH: ("bench_points", "best_bench"),
    METRIC_DEADLIFT: ("deadlift_points", "best_deadlift"),
}


@dataclass(frozen=True)
class TeamMember:
    registration_id: str
    club: str
    gender: str
    bodyweight_kg: Optional[float] = None
    name: str = ""
    is_disqualified: bool = False
    coefficient_points: float = 0.0
    total_weight: float = 0.0
    squat_points: float = 0.0
    best_squat: float = 0.0
    bench_points: float = 0.0
    best_bench: float = 0.0
    deadlift_points: float = 0.0
    best_deadlift: float = 0.0


@dataclass(frozen=True)
class TeamContributor:
    registration_id: str
    gender: str
    points: float = 0.0
    secondary: float = 0.0
    bodyweight_kg: Optional[float] = None
    name: str = ""
    is_placeholder: bool = False

    def as_dict(self) -> Dict[str, object]:
        return {
            "registration_id": self.registration_id,
            "name": self.name,
            "gender": self.gender,
            "points": self.points,
            "secondary": self.secondary,
            "bodyweight_kg": self.bodyweight_kg,
            "is_placeholder": self.is_placeholder,
        }


@dataclass
class TeamResultRow:
    club: str
    rank: int = 0
    total_points: float = 0.0
    overall_points: float = 0.0
    contributors: Tuple[TeamContributor, ...] = ()

    def points_list(self) -> Tuple[float, ...]:
        return tuple(c.points for c in self.contributors)

    def as_dict(self) -> Dict[str, object]:
        return {
            "club": self.club,
            "rank": self.rank,
            "total_points": self.total_points,
            "overall_points": self.overall_points,
            "contributors": [c.as_dict() for c in self.contributors],
        }


@dataclass
class TeamScoreboard:
    metric: str
    rows: List[TeamResultRow] = field(default_factory=list)

    def row_for(self, club: str) -> Optional[TeamResultRow]:
        return next((r for r in self.rows if r.club == club), None)

    def as_dict(self) -> Dict[str, object]:
        return {"metric": self.metric, "rows": [r.as_dict() for r in self.rows]}


@dataclass
class TeamResults:
    overall: TeamScoreboard
    squat: TeamScoreboard
    bench: TeamScoreboard
    deadlift: TeamScoreboard

    def boards(self) -> List[TeamScoreboard]:
        return [self.overall, self.squat, self.bench, self.deadlift]

    def as_dict(self) -> Dict[str, object]:
        return {b.metric: b.as_dict() for b in self.boards()}


# ------------------------------
# Orden
# ------------------------------
def _bodyweight_key(c: TeamContributor) -> float:
    bw = c.bodyweight_kg
    return float(bw) if bw is not None and math.isfinite(float(bw)) else math.inf


CONTRIBUTOR_ORDER = (
    by_desc("points")
    .then_desc("secondary")
    .then_asc(_bodyweight_key)
    .then_asc(lambda c: str(c.registration_id))
)

# El club cierra el orden: dos clubes distintos nunca comparten puesto
TEAM_ORDER = by_desc("total_points").then_desc(TeamResultRow.points_list).then_asc("club")


# ------------------------------
# Selección
# ------------------------------
def _contributor(member: TeamMember, metric: str) -> TeamContributor:
    points_field, secondary_field = _METRIC_FIELDS[metric]
    return TeamContributor(
        registration_id=str(member.registration_id),
        gender=normalize_gender(member.gender),
        points=float(getattr(member, points_field) or 0.0),
        secondary=float(getattr(member, secondary_field) or 0.0),
        bodyweight_kg=member.bodyweight_kg,
        name=member.name,
    )


def _placeholder(club: str, gender: str, index: int) -> TeamContributor:
    slug = re.sub(r"\s+", "-", club)
    return TeamContributor(
        registration_id=f"{slug}::placeholder-{gender}-{index}",
        gender=gender,
        is_placeholder=True,
    )


def select_gender_quota(
    candidates: Iterable[TeamContributor],
    male_count: int = REQUIRED_MALE_COUNT,
    female_count: int = REQUIRED_FEMALE_COUNT,
    order: ComparatorChain = CONTRIBUTOR_ORDER,
) -> Tuple[List[TeamContributor], List[TeamContributor]]:
    """
    Cupo por género: dos selecciones independientes (top N hombres, top M
    mujeres), no un top 5 mixto.
    """
    candidates = list(candidates)
    males = order.sort(c for c in candidates if c.gender == MALE)[:male_count]
    females = order.sort(c for c in candidates if c.gender == FEMALE)[:female_count]
    return males, females


def _club_row(club: str, members: List[TeamMember], metric: str) -> TeamResultRow:
    males, females = select_gender_quota(_contributor(m, metric) for m in members)
    selected = CONTRIBUTOR_ORDER.sort(males + females)

    padding = [_placeholder(club, MALE, i) for i in range(REQUIRED_MALE_COUNT - len(males))]
    padding += [_placeholder(club, FEMALE, i) for i in range(REQUIRED_FEMALE_COUNT - len(females))]

    return TeamResultRow(
        club=club,
        total_points=sum((c.points for c in selected), 0.0),
        contributors=tuple(selected + padding),
    )


def _assign_ranks(rows: List[TeamResultRow]) -> List[TeamResultRow]:
    ordered = TEAM_ORDER.sort(rows)
    for pos, row in enumerate(ordered, start=1):
        prev = ordered[pos - 2] if pos > 1 else None
        if prev is not None and TEAM_ORDER(prev, row) == 0:
            row.rank = prev.rank
        else:
            row.rank = pos
    return ordered


def group_by_club(members: Iterable[TeamMember]) -> Dict[str, List[TeamMember]]:
    """Clubes con sus miembros elegibles (sin DQ, género reconocido, club no vacío)."""
    clubs: Dict[str, List[TeamMember]] = {}
    for m in members:
        club = (m.club or "").strip()
        if m.is_disqualified or not club or normalize_gender(m.gender) is None:
            continue
        clubs.setdefault(club, []).append(m)
    return clubs


def compute_team_results(members: Iterable[TeamMember]) -> TeamResults:
    clubs = group_by_club(members)

    boards: Dict[str, TeamScoreboard] = {}
    for metric in METRICS:
        rows = [_club_row(club, club_members, metric) for club, club_members in clubs.items()]
        boards[metric] = TeamScoreboard(metric=metric, rows=_assign_ranks(rows))

    overall_by_club = {r.club: r.total_points for r in boards[METRIC_OVERALL].rows}
    for board in boards.values():
        for row in board.rows:
            row.overall_points = overall_by_club.get(row.club, 0.0)

    return TeamResults(**boards)
