# meetcore/apps/contests/services/setup.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, List

from django.db import transaction

from ..models import Contest, ContestAgeCategory, ContestTag, ContestWeightClass, PlateSet
from .categories import (
    DEFAULT_AGE_CATEGORY_TEMPLATES,
    DEFAULT_WEIGHT_CLASS_TEMPLATES,
    AgeCategoryDescriptor,
    WeightClassDescriptor,
)
from .plates import DEFAULT_PLATE_INVENTORY, default_plate_color
from meetcore.apps.scoring.services.ranking import MANDATORY_TAG_LABEL

logger = logging.getLogger(__name__)


def _dec(value) -> Decimal | None:
    return None if value is None else Decimal(str(value))


# ------------------------------
# Categorías / clases
# ------------------------------
def seed_contest_categories(contest: Contest) -> Dict[str, int]:
    """
    Copia las plantillas por defecto al concurso si todavía no tiene
    categorías de edad o clases de peso. Idempotente.
    """
    created_age = created_weight = 0
    with transaction.atomic():
        if not contest.age_categories.exists():
            ContestAgeCategory.objects.bulk_create([
                ContestAgeCategory(
                    contest=contest,
                    code=t.code,
                    name=t.name,
                    min_age=t.min_age,
                    max_age=t.max_age,
                    sort_order=t.sort_order,
                )
                for t in DEFAULT_AGE_CATEGORY_TEMPLATES
            ])
            created_age = len(DEFAULT_AGE_CATEGORY_TEMPLATES)

        if not contest.weight_classes.exists():
            ContestWeightClass.objects.bulk_create([
                ContestWeightClass(
                    contest=contest,
                    code=t.code,
                    name=t.name,
                    gender=t.gender,
                    min_weight=_dec(t.min_weight),
                    max_weight=_dec(t.max_weight),
                    sort_order=t.sort_order,
                )
                for t in DEFAULT_WEIGHT_CLASS_TEMPLATES
            ])
            created_weight = len(DEFAULT_WEIGHT_CLASS_TEMPLATES)

    if created_age or created_weight:
        logger.info(
            "Concurso %s: %d categorías de edad y %d clases de peso por defecto.",
            contest.slug, created_age, created_weight,
        )
    return {"age_categories": created_age, "weight_classes": created_weight}


def age_descriptors(contest: Contest) -> List[AgeCategoryDescriptor]:
    return [c.as_descriptor() for c in contest.age_categories.all()]


def weight_descriptors(contest: Contest) -> List[WeightClassDescriptor]:
    return [w.as_descriptor() for w in contest.weight_classes.all()]


# ------------------------------
# Discos / etiquetas
# ------------------------------
def seed_default_plates(contest: Contest) -> int:
    if contest.plates.exists():
        return 0
    PlateSet.objects.bulk_create([
        PlateSet(
            contest=contest,
            plate_weight=_dec(s.plate_weight_kg),
            quantity=s.pairs_available,
            color=default_plate_color(s.plate_weight_kg),
        )
        for s in DEFAULT_PLATE_INVENTORY
    ])
    return len(DEFAULT_PLATE_INVENTORY)


def ensure_default_tags(contest: Contest) -> ContestTag:
    tag, _ = ContestTag.objects.get_or_create(contest=contest, label=MANDATORY_TAG_LABEL)
    return tag


def prepare_contest(contest: Contest) -> Dict[str, int]:
    """Todo lo que un concurso nuevo necesita antes de inscribir."""
    summary = seed_contest_categories(contest)
    summary["plates"] = seed_default_plates(contest)
    ensure_default_tags(contest)
    return summary
