# meetcore/apps/scoring/models.py
from __future__ import annotations

from django.db import models
from django.utils import timezone

from meetcore.apps.contests.models import GENDER_CHOICES

from .services.results import ScoreResult


class Result(models.Model):
    """
    Resultado derivado de una inscripción. Se reemplaza completo en cada
    recálculo; como mucho existe uno por inscripción.
    """
    registration = models.OneToOneField(
        "registration.Registration",
        on_delete=models.CASCADE,
        related_name="result",
    )

    best_squat = models.FloatField(default=0)
    best_bench = models.FloatField(default=0)
    best_deadlift = models.FloatField(default=0)
    total_weight = models.FloatField(default=0)
    coefficient_points = models.FloatField(default=0)
    squat_points = models.FloatField(default=0)
    bench_points = models.FloatField(default=0)
    deadlift_points = models.FloatField(default=0)

    is_disqualified = models.BooleanField(default=False)
    disqualification_reason = models.CharField(max_length=120, null=True, blank=True)

    place_open = models.PositiveIntegerField(null=True, blank=True)
    place_in_age_class = models.PositiveIntegerField(null=True, blank=True)
    place_in_weight_class = models.PositiveIntegerField(null=True, blank=True)

    calculated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ("place_open", "-coefficient_points", "id")

    def __str__(self) -> str:
        return f"{self.registration} · {self.coefficient_points:.2f} pts"

    @staticmethod
    def fields_from_score(score: ScoreResult) -> dict:
        return {
            "best_squat": score.best_squat,
            "best_bench": score.best_bench,
            "best_deadlift": score.best_deadlift,
            "total_weight": score.total_weight,
            "coefficient_points": score.coefficient_points,
            "squat_points": score.squat_points,
            "bench_points": score.bench_points,
            "deadlift_points": score.deadlift_points,
            "is_disqualified": score.is_disqualified,
            "disqualification_reason": score.disqualification_reason,
        }


class ReshelCoefficient(models.Model):
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    bodyweight = models.DecimalField(max_digits=6, decimal_places=2)
    coefficient = models.FloatField()

    class Meta:
        unique_together = (("gender", "bodyweight"),)
        ordering = ("gender", "bodyweight")

    def __str__(self) -> str:
        return f"Reshel {self.gender} {self.bodyweight} kg = {self.coefficient}"


class McCulloughCoefficient(models.Model):
    age = models.PositiveSmallIntegerField(unique=True)
    coefficient = models.FloatField()

    class Meta:
        ordering = ("age",)

    def __str__(self) -> str:
        return f"McCullough {self.age} = {self.coefficient}"
