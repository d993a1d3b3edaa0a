# meetcore/apps/contests/forms.py
from __future__ import annotations

from django import forms

from .models import ContestState

# Campos que no admiten vacío: si llegan vacíos se conserva el valor actual
_REQUIRED_ON_MODEL = ("status", "current_round")


class ContestStateForm(forms.ModelForm):
    """
    Cambio del estado en vivo. Solo se tocan los campos presentes en el POST;
    un current_lift o current_attempt_number vacío los limpia.
    """

    class Meta:
        model = ContestState
        fields = ["status", "current_lift", "current_round", "current_attempt_number"]
        labels = {
            "status": "Estado",
            "current_lift": "Movimiento en curso",
            "current_round": "Ronda",
            "current_attempt_number": "Intento",
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            field.required = False

    def clean(self):
        cleaned = super().clean()
        for name in self._meta.fields:
            if name not in self.data:
                cleaned[name] = getattr(self.instance, name)
            elif name in _REQUIRED_ON_MODEL and cleaned.get(name) in (None, ""):
                cleaned[name] = getattr(self.instance, name)
        return cleaned
