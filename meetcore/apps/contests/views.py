from __future__ import annotations

from django.contrib.auth.decorators import login_required
from django.db import transaction
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_http_methods

from meetcore.apps.judging.permissions import is_judge

from .forms import ContestStateForm
from .models import Contest, ContestState
from .services.loading import plate_plan_for_contest


def health(request):
    return JsonResponse({"ok": True})


@require_GET
def contest_list(request):
    contests = Contest.objects.all().order_by("-date", "name")
    return JsonResponse({
        "contests": [
            {
                "slug": c.slug,
                "name": c.name,
                "date": c.date.isoformat(),
                "discipline": c.discipline,
                "status": c.status,
            }
            for c in contests
        ]
    })


@require_GET
def contest_detail(request, slug: str):
    contest = get_object_or_404(Contest, slug=slug)
    return JsonResponse({
        "slug": contest.slug,
        "name": contest.name,
        "date": contest.date.isoformat(),
        "location": contest.location,
        "discipline": contest.discipline,
        "status": contest.status,
        "bars": {
            "mens_kg": float(contest.mens_bar_weight),
            "womens_kg": float(contest.womens_bar_weight),
            "clamp_kg": float(contest.clamp_weight),
        },
        "age_categories": [
            {"id": c.pk, "code": c.code, "name": c.name, "min_age": c.min_age, "max_age": c.max_age}
            for c in contest.age_categories.all()
        ],
        "weight_classes": [
            {
                "id": w.pk,
                "code": w.code,
                "name": w.name,
                "gender": w.gender,
                "min_weight": float(w.min_weight) if w.min_weight is not None else None,
                "max_weight": float(w.max_weight) if w.max_weight is not None else None,
            }
            for w in contest.weight_classes.all()
        ],
        "plates": [
            {"plate_weight": float(p.plate_weight), "pairs": p.quantity, "color": p.color}
            for p in contest.plates.all()
        ],
        "tags": [t.label for t in contest.tags.all()],
    })


def _parse_kg(value):
    if value in (None, ""):
        return None
    try:
        return float(str(value).replace(",", "."))
    except ValueError:
        raise ValueError(f"Peso inválido: {value!r}")


@require_GET
def plate_plan(request, slug: str):
    """
    /contests/<slug>/plate-plan/?weight=180&gender=Female&bar=20
    """
    contest = get_object_or_404(Contest, slug=slug)
    try:
        target = _parse_kg(request.GET.get("weight"))
        bar = _parse_kg(request.GET.get("bar"))
    except ValueError as exc:
        return JsonResponse({"ok": False, "error": str(exc)}, status=400)
    if target is None or target < 0:
        return JsonResponse({"ok": False, "error": "Indique un peso objetivo (weight) válido."}, status=400)

    plan = plate_plan_for_contest(contest.pk, target, request.GET.get("gender"), bar)
    return JsonResponse({"ok": True, "plan": plan.as_dict()})


# ------------------------------
# Estado en vivo
# ------------------------------
def _default_state(contest: Contest) -> ContestState:
    return ContestState(contest=contest, status=contest.status)


@require_GET
def contest_state(request, slug: str):
    contest = get_object_or_404(Contest, slug=slug)
    state = ContestState.objects.filter(contest=contest).first() or _default_state(contest)
    return JsonResponse({"ok": True, "state": state.as_dict()})


@login_required
@require_http_methods(["POST"])
def contest_state_update(request, slug: str):
    """
    Mesa de control: movimiento, ronda e intento en curso. El estado del
    concurso se mantiene igual que el del estado en vivo.
    """
    if not is_judge(request.user):
        return JsonResponse({"ok": False, "error": "Solo jueces o staff."}, status=403)

    contest = get_object_or_404(Contest, slug=slug)
    state = ContestState.objects.filter(contest=contest).first() or _default_state(contest)
    form = ContestStateForm(request.POST, instance=state)
    if not form.is_valid():
        return JsonResponse({"ok": False, "errors": form.errors.get_json_data()}, status=400)

    with transaction.atomic():
        state = form.save()
        if contest.status != state.status:
            # update(): sin pasar por Contest.save
            Contest.objects.filter(pk=contest.pk).update(status=state.status)
    return JsonResponse({"ok": True, "state": state.as_dict()})
