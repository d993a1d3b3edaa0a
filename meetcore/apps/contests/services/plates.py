# meetcore/apps/contests/services/plates.py
"""
Plan de carga de discos para la barra.

Reparto voraz de mayor a menor disco por lado. Es óptimo para las
denominaciones habituales de powerlifting; con inventarios arbitrarios puede
quedarse por debajo del objetivo aunque exista otra combinación exacta.
Nunca supera el peso pedido.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from meetcore.apps.scoring.services.coefficients import FEMALE, normalize_gender

EPSILON = 1e-6

DEFAULT_MENS_BAR_KG = 20.0
DEFAULT_WOMENS_BAR_KG = 15.0
DEFAULT_CLAMP_WEIGHT_KG = 2.5
DEFAULT_INCREMENT_KG = 2.5

DEFAULT_PLATE_COLOR = "#374151"
PLATE_COLORS = {
    25.0: "#DC2626",
    20.0: "#2563EB",
    15.0: "#EAB308",
    10.0: "#16A34A",
    5.0: "#F8FAFC",
    2.5: "#DC2626",
    2.0: "#2563EB",
    1.5: "#EAB308",
    1.25: "#16A34A",
    1.0: "#16A34A",
    0.5: "#6B7280",
}


def default_plate_color(weight_kg) -> str:
    try:
        w = float(weight_kg)
    except (TypeError, ValueError):
        return DEFAULT_PLATE_COLOR
    for known, color in PLATE_COLORS.items():
        if abs(known - w) <= EPSILON:
            return color
    return DEFAULT_PLATE_COLOR


@dataclass(frozen=True)
class PlateStock:
    plate_weight_kg: float
    pairs_available: int
    color: Optional[str] = None


@dataclass(frozen=True)
class PlateLoad:
    plate_weight: float
    pair_count: int
    color: str


@dataclass(frozen=True)
class PlatePlan:
    plates: Tuple[PlateLoad, ...]
    exact: bool
    total_loaded: float
    increment_kg: float
    bar_weight_kg: float
    clamp_weight_total_kg: float
    weight_to_load_kg: float
    target_weight_kg: float

    def as_dict(self) -> Dict[str, object]:
        return {
            "plates": [
                {"plate_weight": p.plate_weight, "pair_count": p.pair_count, "color": p.color}
                for p in self.plates
            ],
            "exact": self.exact,
            "total_loaded": round(self.total_loaded, 3),
            "increment_kg": self.increment_kg,
            "bar_weight_kg": self.bar_weight_kg,
            "clamp_weight_total_kg": self.clamp_weight_total_kg,
            "weight_to_load_kg": round(self.weight_to_load_kg, 3),
            "target_weight_kg": self.target_weight_kg,
        }


DEFAULT_PLATE_INVENTORY = (
    PlateStock(25.0, 10),
    PlateStock(20.0, 10),
    PlateStock(15.0, 10),
    PlateStock(10.0, 10),
    PlateStock(5.0, 10),
    PlateStock(2.5, 10),
    PlateStock(1.25, 5),
    PlateStock(0.5, 5),
    PlateStock(0.25, 5),
)


def _num(value, default: float) -> float:
    try:
        f = float(value)
    except (TypeError, ValueError):
        return default
    return f if math.isfinite(f) else default


def resolve_bar_weight(gender, mens_bar_kg=None, womens_bar_kg=None, override_kg=None) -> float:
    """La barra indicada explícitamente manda; si no, la del género."""
    override = _num(override_kg, 0.0)
    if override > 0:
        return override
    if normalize_gender(gender) == FEMALE:
        return _num(womens_bar_kg, DEFAULT_WOMENS_BAR_KG) or DEFAULT_WOMENS_BAR_KG
    return _num(mens_bar_kg, DEFAULT_MENS_BAR_KG) or DEFAULT_MENS_BAR_KG


def _usable_stock(inventory: Iterable[PlateStock]) -> List[PlateStock]:
    usable = [
        s for s in inventory
        if _num(s.plate_weight_kg, 0.0) > 0 and int(s.pairs_available or 0) > 0
    ]
    return sorted(usable, key=lambda s: float(s.plate_weight_kg), reverse=True)


def build_plate_plan(
    inventory: Iterable[PlateStock],
    target_weight_kg,
    bar_weight_kg=DEFAULT_MENS_BAR_KG,
    clamp_weight_per_clamp_kg=DEFAULT_CLAMP_WEIGHT_KG,
) -> PlatePlan:
    target = _num(target_weight_kg, 0.0)
    bar = _num(bar_weight_kg, DEFAULT_MENS_BAR_KG)
    clamp_total = 2 * _num(clamp_weight_per_clamp_kg, 0.0)

    base = bar + clamp_total
    weight_to_load = max(0.0, target - base)
    per_side = weight_to_load / 2

    stock = _usable_stock(inventory)
    increment = 2 * float(stock[-1].plate_weight_kg) if stock else DEFAULT_INCREMENT_KG

    if not stock or weight_to_load <= EPSILON:
        return PlatePlan(
            plates=(),
            exact=weight_to_load <= EPSILON,
            total_loaded=base,
            increment_kg=increment,
            bar_weight_kg=bar,
            clamp_weight_total_kg=clamp_total,
            weight_to_load_kg=weight_to_load,
            target_weight_kg=target,
        )

    remaining = per_side
    loads: List[PlateLoad] = []
    for s in stock:
        w = float(s.plate_weight_kg)
        if w > remaining + EPSILON:
            continue
        # EPSILON solo absorbe el ruido de coma flotante (0.3 - 0.1 da 0.19999...)
        pairs = min(int(math.floor((remaining + EPSILON) / w)), int(s.pairs_available))
        if pairs > 0:
            loads.append(PlateLoad(plate_weight=w, pair_count=pairs, color=s.color or default_plate_color(w)))
            remaining -= w * pairs

    remaining = max(remaining, 0.0)
    return PlatePlan(
        plates=tuple(loads),
        exact=remaining <= EPSILON,
        total_loaded=base + 2 * (per_side - remaining),
        increment_kg=increment,
        bar_weight_kg=bar,
        clamp_weight_total_kg=clamp_total,
        weight_to_load_kg=weight_to_load,
        target_weight_kg=target,
    )
