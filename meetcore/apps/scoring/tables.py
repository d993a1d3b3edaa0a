# meetcore/apps/scoring/tables.py
"""
Tablas de coeficientes del proceso: se leen de BD y, si alguna tabla está
vacía, se usa el dataset incluido en scoring/data.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.conf import settings

from .services.coefficients import (
    FEMALE,
    MALE,
    CoefficientCache,
    CoefficientTables,
    McCulloughEntry,
    McCulloughTable,
    ReshelEntry,
    ReshelTables,
    load_bundled_mccullough,
    load_bundled_reshel,
    normalize_gender,
)

logger = logging.getLogger(__name__)


def _increment() -> float:
    return float(getattr(settings, "MEETCORE_RESHEL_INCREMENT_KG", 0.25))


def load_reshel_from_db() -> Optional[ReshelTables]:
    from .models import ReshelCoefficient

    by_gender = {MALE: [], FEMALE: []}
    for row in ReshelCoefficient.objects.order_by("bodyweight"):
        g = normalize_gender(row.gender)
        if g is None:
            logger.warning("Fila Reshel con género desconocido ignorada: %r", row.gender)
            continue
        by_gender[g].append(ReshelEntry(bodyweight_kg=float(row.bodyweight), coefficient=row.coefficient))

    if not by_gender[MALE] or not by_gender[FEMALE]:
        return None
    return ReshelTables(male=by_gender[MALE], female=by_gender[FEMALE], increment_kg=_increment())


def load_mccullough_from_db() -> Optional[McCulloughTable]:
    from .models import McCulloughCoefficient

    entries = [
        McCulloughEntry(age=row.age, coefficient=row.coefficient)
        for row in McCulloughCoefficient.objects.order_by("age")
    ]
    return McCulloughTable(entries=entries) if entries else None


def load_tables_from_db() -> CoefficientTables:
    reshel = load_reshel_from_db()
    if reshel is None:
        logger.warning("Tabla Reshel vacía en BD; se usa el dataset incluido.")
        reshel = load_bundled_reshel(increment_kg=_increment())

    mccullough = load_mccullough_from_db()
    if mccullough is None:
        logger.warning("Tabla McCullough vacía en BD; se usa el dataset incluido.")
        mccullough = load_bundled_mccullough()

    return CoefficientTables(reshel=reshel, mccullough=mccullough)


coefficient_cache = CoefficientCache(load_tables_from_db)


def current_tables() -> CoefficientTables:
    return coefficient_cache.snapshot()
