# meetcore/apps/judging/forms.py
from __future__ import annotations

from django import forms

from meetcore.apps.scoring.services.results import AttemptStatus

from .models import Attempt

JUDGE_FIELDS = ("judge_left", "judge_center", "judge_right")


class AttemptDecisionForm(forms.ModelForm):
    """
    Decisión sobre un intento. Si llegan votos, quedan los tres completos y no
    se indica estado, el estado sale de la mayoría. Lo que no llega en el
    POST conserva su valor actual.
    """

    class Meta:
        model = Attempt
        fields = ["weight", "status", "judge_left", "judge_center", "judge_right", "notes"]
        labels = {
            "weight": "Peso (kg)",
            "status": "Estado",
            "judge_left": "Juez izquierdo",
            "judge_center": "Juez central",
            "judge_right": "Juez derecho",
            "notes": "Notas",
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Un POST parcial conserva los valores actuales
        self.fields["weight"].required = False
        self.fields["status"].required = False

    def clean_weight(self):
        weight = self.cleaned_data.get("weight")
        if weight is None:
            return self.instance.weight
        if weight < 0:
            raise forms.ValidationError("El peso no puede ser negativo.")
        return weight

    def clean(self):
        cleaned = super().clean()
        # Voto ausente en el POST = se conserva el registrado
        for name in JUDGE_FIELDS:
            if name not in self.data:
                cleaned[name] = getattr(self.instance, name)

        status = cleaned.get("status")
        votes = [cleaned.get(k) for k in JUDGE_FIELDS]
        votes_posted = any(name in self.data for name in JUDGE_FIELDS)

        if not status:
            if votes_posted and all(v is not None for v in votes):
                cleaned["status"] = AttemptStatus.SUCCESSFUL if sum(votes) >= 2 else AttemptStatus.FAILED
            else:
                cleaned["status"] = self.instance.status or AttemptStatus.PENDING
        return cleaned
