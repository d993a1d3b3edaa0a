# meetcore/apps/scoring/services/ranking.py
"""
Posiciones individuales en tres ámbitos:

- open:   todas las filas con la etiqueta "Open" (o sin etiquetas).
- age:    agrupadas por categoría de edad.
- weight: agrupadas por clase de peso.

Las etiquetas distintas de "Open" se clasifican bajo demanda (rank_by_tag),
sin guardar la posición.

Los descalificados no reciben posición en ningún ámbito. Las filas que no
califican quedan con posición None (nunca se conserva un valor anterior).
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

from .comparators import by_desc

MANDATORY_TAG_LABEL = "Open"

SCOPE_OPEN = "open"
SCOPE_AGE = "age"
SCOPE_WEIGHT = "weight"
SCOPES = (SCOPE_OPEN, SCOPE_AGE, SCOPE_WEIGHT)

_PLACE_FIELD = {
    SCOPE_OPEN: "place_open",
    SCOPE_AGE: "place_in_age_class",
    SCOPE_WEIGHT: "place_in_weight_class",
}


@dataclass(frozen=True)
class RankingRow:
    registration_id: str
    coefficient_points: float
    total_weight: float
    bodyweight_kg: Optional[float] = None
    is_disqualified: bool = False
    labels: Tuple[str, ...] = ()
    age_category_id: Optional[Hashable] = None
    weight_class_id: Optional[Hashable] = None


@dataclass(frozen=True)
class RankedRow:
    row: RankingRow
    place_open: Optional[int] = None
    place_in_age_class: Optional[int] = None
    place_in_weight_class: Optional[int] = None

    @property
    def registration_id(self) -> str:
        return self.row.registration_id

    def places(self) -> Tuple[Optional[int], Optional[int], Optional[int]]:
        return (self.place_open, self.place_in_age_class, self.place_in_weight_class)


def _bodyweight_key(row: RankingRow) -> float:
    # Sin peso registrado va detrás de cualquier peso real
    bw = row.bodyweight_kg
    return float(bw) if bw is not None and math.isfinite(float(bw)) else math.inf


RANKING_ORDER = (
    by_desc("coefficient_points")
    .then_desc("total_weight")
    .then_asc(_bodyweight_key)
    .then_asc(lambda r: str(r.registration_id))
)


def has_open_tag(labels: Optional[Sequence[str]]) -> bool:
    """Sin etiquetas cuenta como Open implícito."""
    cleaned = [str(l).strip() for l in (labels or []) if str(l).strip()]
    if not cleaned:
        return True
    return any(l.lower() == MANDATORY_TAG_LABEL.lower() for l in cleaned)


def _group_key(row: RankingRow, scope: str) -> Tuple[bool, Optional[Hashable]]:
    """(califica, grupo) de la fila para el ámbito dado."""
    if row.is_disqualified:
        return False, None
    if scope == SCOPE_OPEN:
        return has_open_tag(row.labels), None
    if scope == SCOPE_AGE:
        return row.age_category_id is not None, row.age_category_id
    if scope == SCOPE_WEIGHT:
        return row.weight_class_id is not None, row.weight_class_id
    raise ValueError(f"Ámbito de ranking desconocido: {scope!r}")


def rank_rows(rows: Iterable[RankingRow], scope: str) -> List[RankedRow]:
    """
    Devuelve un RankedRow por fila, en el mismo orden de entrada, con solo la
    posición del ámbito pedido rellenada.
    """
    rows = list(rows)
    field = _PLACE_FIELD.get(scope)
    if field is None:
        raise ValueError(f"Ámbito de ranking desconocido: {scope!r}")

    groups: Dict[Hashable, List[int]] = {}
    for idx, row in enumerate(rows):
        qualifies, group = _group_key(row, scope)
        if qualifies:
            groups.setdefault(group, []).append(idx)

    places: Dict[int, int] = {}
    sort_key = RANKING_ORDER.key()
    for members in groups.values():
        ordered = sorted(members, key=lambda i: sort_key(rows[i]))
        for place, idx in enumerate(ordered, start=1):
            places[idx] = place

    return [RankedRow(row=row, **{field: places.get(idx)}) for idx, row in enumerate(rows)]


def rank_all(rows: Iterable[RankingRow]) -> List[RankedRow]:
    """Los tres ámbitos combinados en una sola lista (orden de entrada)."""
    rows = list(rows)
    merged = [RankedRow(row=row) for row in rows]
    for scope in SCOPES:
        field = _PLACE_FIELD[scope]
        for i, ranked in enumerate(rank_rows(rows, scope)):
            merged[i] = replace(merged[i], **{field: getattr(ranked, field)})
    return merged


def has_tag(labels: Optional[Sequence[str]], tag: str) -> bool:
    """Comparación sin mayúsculas; "Open" sigue la regla del Open implícito."""
    wanted = str(tag).strip().lower()
    if wanted == MANDATORY_TAG_LABEL.lower():
        return has_open_tag(labels)
    return any(str(l).strip().lower() == wanted for l in (labels or []))


def rank_by_tag(rows: Iterable[RankingRow], tag: str) -> List[Tuple[RankingRow, int]]:
    """Filas no descalificadas con la etiqueta, ordenadas, con su posición."""
    eligible = [r for r in rows if not r.is_disqualified and has_tag(r.labels, tag)]
    return [(row, place) for place, row in enumerate(RANKING_ORDER.sort(eligible), start=1)]
