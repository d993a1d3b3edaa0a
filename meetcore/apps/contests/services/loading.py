# meetcore/apps/contests/services/loading.py
from __future__ import annotations

from typing import Optional

from django.conf import settings

from meetcore.apps.scoring.errors import NotFound

from ..models import Contest
from .plates import DEFAULT_PLATE_INVENTORY, PlatePlan, build_plate_plan, resolve_bar_weight


def plate_plan_for_contest(
    contest_id: int,
    target_weight_kg,
    gender: Optional[str] = None,
    bar_override_kg=None,
) -> PlatePlan:
    """Plan de carga con el inventario y la barra/clips configurados en el concurso."""
    try:
        contest = Contest.objects.get(pk=contest_id)
    except Contest.DoesNotExist:
        raise NotFound("Contest", contest_id)

    inventory = [p.as_stock() for p in contest.plates.all()] or list(DEFAULT_PLATE_INVENTORY)
    bar = resolve_bar_weight(gender, contest.mens_bar_weight, contest.womens_bar_weight, bar_override_kg)
    clamp = contest.clamp_weight
    if clamp is None:
        clamp = getattr(settings, "MEETCORE_DEFAULT_CLAMP_WEIGHT_KG", 2.5)

    return build_plate_plan(inventory, target_weight_kg, bar, clamp)
