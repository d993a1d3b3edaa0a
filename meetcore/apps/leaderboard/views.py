from __future__ import annotations

import csv
import math
from typing import Any, Dict

from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET

from meetcore.apps.contests.models import Contest
from meetcore.apps.scoring.models import Result
from meetcore.apps.scoring.services.ranking import MANDATORY_TAG_LABEL
from meetcore.apps.scoring.services.recalc import tag_ranking_for_contest, team_results_for_contest
from meetcore.apps.scoring.services.teams import METRICS


# ---------- Utilidades ----------

def _place_key(place):
    # Sin posición al final
    return place if place is not None else math.inf


def _result_row(r: Result) -> Dict[str, Any]:
    reg = r.registration
    comp = reg.competitor
    return {
        "registration_id": reg.pk,
        "name": comp.full_name,
        "gender": comp.gender,
        "club": comp.club,
        "bodyweight_kg": float(reg.bodyweight) if reg.bodyweight is not None else None,
        "age_category": reg.age_category.code if reg.age_category else None,
        "weight_class": reg.weight_class.code if reg.weight_class else None,
        "labels": list(reg.labels or []),
        "best_squat": r.best_squat,
        "best_bench": r.best_bench,
        "best_deadlift": r.best_deadlift,
        "total_weight": r.total_weight,
        "coefficient_points": round(r.coefficient_points, 3),
        "squat_points": round(r.squat_points, 3),
        "bench_points": round(r.bench_points, 3),
        "deadlift_points": round(r.deadlift_points, 3),
        "is_disqualified": r.is_disqualified,
        "disqualification_reason": r.disqualification_reason,
        "place_open": r.place_open,
        "place_in_age_class": r.place_in_age_class,
        "place_in_weight_class": r.place_in_weight_class,
    }


def _tag_results(request, contest: Contest) -> JsonResponse:
    tag = (request.GET.get("tag") or request.GET.get("label") or "").strip()
    if not tag:
        return JsonResponse({"ok": False, "error": "Falta el parámetro tag."}, status=400)

    known = {label.lower() for label in contest.tags.values_list("label", flat=True)}
    known.add(MANDATORY_TAG_LABEL.lower())
    if tag.lower() not in known:
        return JsonResponse({"ok": False, "error": f"Etiqueta desconocida: {tag}"}, status=404)

    rows = []
    for result, place in tag_ranking_for_contest(contest.pk, tag):
        row = _result_row(result)
        row["place"] = place
        rows.append(row)
    return JsonResponse({"contest": contest.slug, "scope": "tag", "tag": tag, "rows": rows})


EXPORT_COLUMNS = (
    ("place_open", "Puesto"),
    ("name", "Nombre"),
    ("club", "Club"),
    ("gender", "Sexo"),
    ("bodyweight_kg", "Peso corporal"),
    ("age_category", "Categoría"),
    ("weight_class", "Clase"),
    ("best_squat", "Sentadilla"),
    ("best_bench", "Banca"),
    ("best_deadlift", "Peso muerto"),
    ("total_weight", "Total"),
    ("coefficient_points", "Puntos"),
    ("squat_points", "Puntos sentadilla"),
    ("bench_points", "Puntos banca"),
    ("deadlift_points", "Puntos peso muerto"),
    ("is_disqualified", "Descalificado"),
)


# ---------- Vistas ----------

@require_GET
def contest_results(request, slug: str):
    """
    Resultados individuales del concurso, ordenados por posición open.
    ?scope=age|weight agrupa por categoría de edad o clase de peso.
    ?scope=tag&tag=<etiqueta> (o label=) clasifica solo esa etiqueta.
    """
    contest = get_object_or_404(Contest, slug=slug)
    scope = request.GET.get("scope", "open")
    if scope == "tag":
        return _tag_results(request, contest)

    results = list(
        Result.objects
        .filter(registration__contest=contest)
        .select_related("registration__competitor", "registration__age_category", "registration__weight_class")
    )

    if scope == "age":
        place_field, group_of = "place_in_age_class", (lambda r: r["age_category"])
    elif scope == "weight":
        place_field, group_of = "place_in_weight_class", (lambda r: r["weight_class"])
    elif scope == "open":
        place_field, group_of = "place_open", None
    else:
        return JsonResponse({"ok": False, "error": f"Ámbito desconocido: {scope}"}, status=400)

    rows = sorted(
        (_result_row(r) for r in results),
        key=lambda r: (_place_key(r[place_field]), -r["coefficient_points"], r["registration_id"]),
    )

    payload: Dict[str, Any] = {"contest": contest.slug, "scope": scope}
    if group_of is None:
        payload["rows"] = rows
    else:
        groups: Dict[str, list] = {}
        for row in rows:
            groups.setdefault(group_of(row) or "—", []).append(row)
        payload["groups"] = groups
    return JsonResponse(payload)


@require_GET
def contest_teams(request, slug: str):
    """Clasificación por clubes: ?metric=overall|squat|bench|deadlift (por defecto, todas)."""
    contest = get_object_or_404(Contest, slug=slug)
    metric = request.GET.get("metric")
    if metric and metric not in METRICS:
        return JsonResponse({"ok": False, "error": f"Métrica desconocida: {metric}"}, status=400)

    boards = team_results_for_contest(contest.pk).as_dict()
    if metric:
        boards = {metric: boards[metric]}
    return JsonResponse({"contest": contest.slug, "boards": boards})


@require_GET
def contest_results_csv(request, slug: str):
    """Resultados en CSV por posición open; los que no tienen puesto al final."""
    contest = get_object_or_404(Contest, slug=slug)
    results = (
        Result.objects
        .filter(registration__contest=contest)
        .select_related("registration__competitor", "registration__age_category", "registration__weight_class")
    )
    rows = sorted(
        (_result_row(r) for r in results),
        key=lambda r: (_place_key(r["place_open"]), -r["coefficient_points"], r["registration_id"]),
    )

    response = HttpResponse(content_type="text/csv; charset=utf-8")
    response["Content-Disposition"] = f'attachment; filename="{contest.slug}-results.csv"'
    writer = csv.writer(response)
    writer.writerow([title for _, title in EXPORT_COLUMNS])
    for row in rows:
        writer.writerow(["" if row[key] is None else row[key] for key, _ in EXPORT_COLUMNS])
    return response
