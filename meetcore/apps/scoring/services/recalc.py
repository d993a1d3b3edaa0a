# meetcore/apps/scoring/services/recalc.py
"""
Orquestación del recálculo sobre la BD:

- prepare_registration: completa categoría, clase y coeficientes que falten.
- recalculate_registration: reemplaza el Result de una inscripción.
- update_rankings: recalcula las tres posiciones de todo el concurso.
- team_results_for_contest: clasificación por clubes bajo demanda.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from django.db import transaction
from django.utils import timezone

from meetcore.apps.contests.models import Contest, ContestAgeCategory, ContestWeightClass
from meetcore.apps.contests.services.categories import match_age_category, match_weight_class
from meetcore.apps.contests.services.setup import (
    age_descriptors,
    seed_contest_categories,
    weight_descriptors,
)
from meetcore.apps.registration.models import Registration

from ..errors import NotFound
from ..models import Result
from ..tables import current_tables
from .coefficients import CoefficientTables, coefficient_changed, mccullough_for_dates, resolve_reshel
from .ranking import RankingRow, rank_all, rank_by_tag
from .results import Coefficients, compute_result
from .teams import TeamMember, TeamResults, compute_team_results

logger = logging.getLogger(__name__)

PLACE_FIELDS = ("place_open", "place_in_age_class", "place_in_weight_class")


# ------------------------------
# Inscripción
# ------------------------------
def _resolve_coefficients(registration: Registration, tables: CoefficientTables) -> Dict[str, float]:
    competitor = registration.competitor
    return {
        "reshel_coefficient": resolve_reshel(registration.bodyweight, competitor.gender, tables.reshel),
        "mccullough_coefficient": mccullough_for_dates(
            competitor.birth_date, registration.contest.date, tables.mccullough
        ),
    }


def prepare_registration(registration: Registration, tables: Optional[CoefficientTables] = None) -> Registration:
    """
    Completa en memoria (sin guardar) lo que falte: categoría de edad, clase
    de peso y coeficientes. Lo asignado se respeta, salvo la clase de peso
    cuando el peso corporal cambió desde la última lectura.
    """
    contest = registration.contest
    competitor = registration.competitor

    changed = registration.changed_fields()
    if "bodyweight" in changed and "weight_class_id" not in changed:
        # Nuevo pesaje: la clase asignada ya no vale
        registration.weight_class = None
        if "reshel_coefficient" not in changed:
            registration.reshel_coefficient = None

    if registration.age_category_id is None or (
        registration.weight_class_id is None and registration.bodyweight is not None
    ):
        seed_contest_categories(contest)

    if registration.age_category_id is None:
        match = match_age_category(competitor.birth_date, contest.date, age_descriptors(contest))
        if match is not None:
            registration.age_category = ContestAgeCategory.objects.get(pk=match.id)

    if registration.weight_class_id is None and registration.bodyweight is not None:
        match = match_weight_class(registration.bodyweight, competitor.gender, weight_descriptors(contest))
        if match is not None:
            registration.weight_class = ContestWeightClass.objects.get(pk=match.id)

    if registration.reshel_coefficient is None or registration.mccullough_coefficient is None:
        resolved = _resolve_coefficients(registration, tables or current_tables())
        if registration.reshel_coefficient is None:
            registration.reshel_coefficient = resolved["reshel_coefficient"]
        if registration.mccullough_coefficient is None:
            registration.mccullough_coefficient = resolved["mccullough_coefficient"]

    return registration


def rederive_registrations(registrations, age: bool = False, weight: bool = False) -> int:
    """
    Vuelve a derivar categoría de edad (y McCullough) o clase de peso (y
    Reshel) de las inscripciones dadas, p. ej. tras cambiar la fecha de
    nacimiento, el género o la fecha del concurso.
    """
    count = 0
    for registration in registrations.select_related("contest", "competitor"):
        if age:
            registration.age_category = None
            registration.mccullough_coefficient = None
        if weight:
            registration.weight_class = None
            registration.reshel_coefficient = None
        registration.save()
        count += 1
    if count:
        logger.info("%d inscripciones con categoría/clase derivadas de nuevo.", count)
    return count


def refresh_registration_coefficients(registration: Registration, tables: Optional[CoefficientTables] = None) -> bool:
    """
    Vuelve a resolver los coeficientes y guarda solo si cambian más de 1e-4.
    Devuelve True si se guardó algo.
    """
    resolved = _resolve_coefficients(registration, tables or current_tables())
    changed = [
        name for name, value in resolved.items()
        if coefficient_changed(getattr(registration, name), value)
    ]
    if not changed:
        return False
    for name in changed:
        setattr(registration, name, resolved[name])
    registration.save(update_fields=changed)
    logger.debug("Inscripción %s: coeficientes actualizados %s", registration.pk, changed)
    return True


def _load_registration(registration_id) -> Registration:
    try:
        return (
            Registration.objects
            .select_related("contest", "competitor")
            .get(pk=registration_id)
        )
    except Registration.DoesNotExist:
        logger.warning("Recálculo pedido para inscripción inexistente: %s", registration_id)
        raise NotFound("Registration", registration_id)


def recalculate_registration(registration_id, tables: Optional[CoefficientTables] = None) -> Result:
    """Reemplaza (de forma atómica) el Result de la inscripción."""
    with transaction.atomic():
        registration = _load_registration(registration_id)
        refresh_registration_coefficients(registration, tables)

        attempts = [a.as_input() for a in registration.attempts.all()]
        score = compute_result(
            attempts,
            registration.contest.discipline,
            Coefficients(
                reshel=registration.reshel_coefficient,
                mccullough=registration.mccullough_coefficient,
            ),
        )

        fields = Result.fields_from_score(score)
        fields["calculated_at"] = timezone.now()
        result, _ = Result.objects.update_or_create(registration=registration, defaults=fields)

    logger.debug(
        "Inscripción %s: total=%.2f puntos=%.3f dq=%s",
        registration_id, score.total_weight, score.coefficient_points, score.is_disqualified,
    )
    return result


# ------------------------------
# Concurso
# ------------------------------
def _get_contest(contest_id) -> Contest:
    try:
        return Contest.objects.get(pk=contest_id)
    except Contest.DoesNotExist:
        logger.warning("Concurso inexistente: %s", contest_id)
        raise NotFound("Contest", contest_id)


def _ranking_row(result: Result) -> RankingRow:
    reg = result.registration
    return RankingRow(
        registration_id=str(reg.pk),
        coefficient_points=result.coefficient_points,
        total_weight=result.total_weight,
        bodyweight_kg=float(reg.bodyweight) if reg.bodyweight is not None else None,
        is_disqualified=result.is_disqualified,
        labels=tuple(reg.labels or ()),
        age_category_id=reg.age_category_id,
        weight_class_id=reg.weight_class_id,
    )


def update_rankings(contest_id) -> int:
    """
    Recalcula las posiciones de todos los resultados del concurso sobre una
    misma lectura. Las filas que no califican quedan explícitamente en None.
    Devuelve cuántos resultados cambiaron.
    """
    with transaction.atomic():
        _get_contest(contest_id)
        results: List[Result] = list(
            Result.objects
            .select_for_update()
            .filter(registration__contest_id=contest_id)
            .select_related("registration")
            .order_by("id")
        )
        ranked = rank_all(_ranking_row(r) for r in results)

        changed: List[Result] = []
        for result, row in zip(results, ranked):
            if tuple(getattr(result, f) for f in PLACE_FIELDS) == row.places():
                continue
            result.place_open, result.place_in_age_class, result.place_in_weight_class = row.places()
            changed.append(result)

        if changed:
            Result.objects.bulk_update(changed, list(PLACE_FIELDS))

    logger.info("Concurso %s: %d resultados, %d posiciones actualizadas.", contest_id, len(results), len(changed))
    return len(changed)


def tag_ranking_for_contest(contest_id, tag: str) -> List[Tuple[Result, int]]:
    """
    Clasificación de una etiqueta calculada en el momento (no se guarda).
    Solo resultados no descalificados que llevan la etiqueta.
    """
    _get_contest(contest_id)
    qs = (
        Result.objects
        .filter(registration__contest_id=contest_id)
        .select_related("registration__competitor", "registration__age_category", "registration__weight_class")
    )
    results = {str(r.registration_id): r for r in qs}
    ranked = rank_by_tag((_ranking_row(r) for r in results.values()), tag)
    return [(results[row.registration_id], place) for row, place in ranked]


def recalculate_contest(contest_id, tables: Optional[CoefficientTables] = None) -> Dict[str, int]:
    contest = _get_contest(contest_id)
    tables = tables or current_tables()

    ids = list(contest.registrations.order_by("id").values_list("id", flat=True))
    for registration_id in ids:
        recalculate_registration(registration_id, tables)
    changed = update_rankings(contest_id)
    return {"registrations": len(ids), "placements_changed": changed}


def team_results_for_contest(contest_id) -> TeamResults:
    _get_contest(contest_id)
    results = (
        Result.objects
        .filter(registration__contest_id=contest_id)
        .select_related("registration__competitor")
        .order_by("id")
    )
    members = []
    for r in results:
        reg = r.registration
        members.append(TeamMember(
            registration_id=str(reg.pk),
            club=reg.competitor.club,
            gender=reg.competitor.gender,
            bodyweight_kg=float(reg.bodyweight) if reg.bodyweight is not None else None,
            name=reg.competitor.full_name,
            is_disqualified=r.is_disqualified,
            coefficient_points=r.coefficient_points,
            total_weight=r.total_weight,
            squat_points=r.squat_points,
            best_squat=r.best_squat,
            bench_points=r.bench_points,
            best_bench=r.best_bench,
            deadlift_points=r.deadlift_points,
            best_deadlift=r.best_deadlift,
        ))
    return compute_team_results(members)
