# meetcore/apps/judging/models.py
from __future__ import annotations

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from meetcore.apps.scoring.services.results import Attempt as AttemptInput
from meetcore.apps.scoring.services.results import AttemptStatus, LiftKind

# Decisión de cada juez: True = válido (blanca), False = nulo (roja)
JUDGE_DECISION_CHOICES = (
    (None, "—"),
    (True, "Válido"),
    (False, "Nulo"),
)


class Attempt(models.Model):
    """
    Intento de un movimiento. Único por (inscripción, movimiento, número).
    El 4.º intento solo cuenta para récords, pero se guarda igual.
    """
    registration = models.ForeignKey(
        "registration.Registration",
        on_delete=models.CASCADE,
        related_name="attempts",
    )
    lift = models.CharField(max_length=10, choices=LiftKind.CHOICES)
    attempt_number = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(4)],
    )
    weight = models.DecimalField(max_digits=6, decimal_places=2)
    status = models.CharField(max_length=12, choices=AttemptStatus.CHOICES, default=AttemptStatus.PENDING)

    judge_left = models.BooleanField(null=True, blank=True, choices=JUDGE_DECISION_CHOICES)
    judge_center = models.BooleanField(null=True, blank=True, choices=JUDGE_DECISION_CHOICES)
    judge_right = models.BooleanField(null=True, blank=True, choices=JUDGE_DECISION_CHOICES)

    notes = models.CharField(max_length=200, blank=True, default="")

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = (("registration", "lift", "attempt_number"),)
        ordering = ("registration_id", "lift", "attempt_number")

    def __str__(self) -> str:
        return f"{self.registration} · {self.lift} #{self.attempt_number} · {self.weight} kg ({self.status})"

    def clean(self):
        if self.weight is not None and self.weight < 0:
            raise ValidationError({"weight": "El peso no puede ser negativo."})

    def judge_votes(self):
        return [v for v in (self.judge_left, self.judge_center, self.judge_right) if v is not None]

    def status_from_judges(self) -> str:
        """Mayoría de 3 jueces; Pending mientras falte algún voto."""
        votes = self.judge_votes()
        if len(votes) < 3:
            return AttemptStatus.PENDING
        return AttemptStatus.SUCCESSFUL if sum(votes) >= 2 else AttemptStatus.FAILED

    def as_input(self) -> AttemptInput:
        return AttemptInput(
            lift=self.lift,
            attempt_number=self.attempt_number,
            weight_kg=float(self.weight),
            status=self.status,
        )
