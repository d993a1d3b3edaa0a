# meetcore/apps/judging/views.py
from __future__ import annotations

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST

from meetcore.apps.registration.models import Registration

from .forms import AttemptDecisionForm
from .models import Attempt
from .permissions import is_judge


def _attempt_dict(a: Attempt) -> dict:
    return {
        "id": a.pk,
        "registration_id": a.registration_id,
        "lift": a.lift,
        "attempt_number": a.attempt_number,
        "weight": float(a.weight),
        "status": a.status,
        "judges": [a.judge_left, a.judge_center, a.judge_right],
        "notes": a.notes,
    }


@login_required
@require_GET
def registration_attempts(request, registration_id: int):
    registration = get_object_or_404(Registration, pk=registration_id)
    attempts = registration.attempts.all()
    return JsonResponse({
        "registration_id": registration.pk,
        "competitor": registration.competitor.full_name,
        "attempts": [_attempt_dict(a) for a in attempts],
    })


@login_required
@require_POST
def attempt_decision(request, attempt_id: int):
    """
    Registra la decisión de los jueces. Guardar el intento dispara el
    recálculo del resultado y de las posiciones (ver signals.py).
    """
    if not is_judge(request.user):
        return JsonResponse({"ok": False, "error": "Solo jueces o staff."}, status=403)

    attempt = get_object_or_404(Attempt.objects.select_related("registration"), pk=attempt_id)
    form = AttemptDecisionForm(request.POST, instance=attempt)
    if not form.is_valid():
        return JsonResponse({"ok": False, "errors": form.errors.get_json_data()}, status=400)

    attempt = form.save()
    return JsonResponse({"ok": True, "attempt": _attempt_dict(attempt)})
