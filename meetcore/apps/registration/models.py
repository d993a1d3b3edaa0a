# meetcore/apps/registration/models.py
from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from meetcore.apps.contests.models import GENDER_CHOICES, ChangeTrackingMixin, Contest


class Competitor(ChangeTrackingMixin, models.Model):
    tracked_fields = ("birth_date", "gender")

    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    birth_date = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    club = models.CharField(max_length=120, blank=True, default="")
    city = models.CharField(max_length=120, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        ordering = ("last_name", "first_name", "id")

    def __str__(self) -> str:
        return self.full_name

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def save(self, *args, **kwargs):
        changed = self.changed_fields()
        super().save(*args, **kwargs)
        self.remember_loaded_values()
        if changed:
            from meetcore.apps.scoring.services.recalc import rederive_registrations  # import local para evitar ciclos
            rederive_registrations(
                self.registrations.all(),
                age="birth_date" in changed,
                weight="gender" in changed,
            )


class Registration(ChangeTrackingMixin, models.Model):
    """
    Inscripción de un competidor en un concurso.
    Categoría, clase y coeficientes se completan al guardar si faltan; un
    cambio de peso corporal vuelve a calcular la clase y el Reshel.
    """
    tracked_fields = ("bodyweight", "weight_class_id", "reshel_coefficient")

    contest = models.ForeignKey(Contest, on_delete=models.CASCADE, related_name="registrations")
    competitor = models.ForeignKey(Competitor, on_delete=models.CASCADE, related_name="registrations")

    age_category = models.ForeignKey(
        "contests.ContestAgeCategory",
        on_delete=models.SET_NULL,
        null=True, blank=True, related_name="registrations",
    )
    weight_class = models.ForeignKey(
        "contests.ContestWeightClass",
        on_delete=models.SET_NULL,
        null=True, blank=True, related_name="registrations",
    )

    bodyweight = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    lot_number = models.PositiveIntegerField(null=True, blank=True)

    reshel_coefficient = models.FloatField(null=True, blank=True)
    mccullough_coefficient = models.FloatField(null=True, blank=True)

    flight_code = models.CharField(max_length=8, blank=True, default="")
    flight_order = models.PositiveIntegerField(null=True, blank=True)

    # Etiquetas del concurso (ej. ["Open"]); vacío = Open implícito
    labels = models.JSONField(default=list, blank=True)

    rack_height_squat = models.PositiveSmallIntegerField(null=True, blank=True)
    rack_height_bench = models.PositiveSmallIntegerField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        unique_together = (("contest", "competitor"),)
        ordering = ("contest_id", "flight_code", "flight_order", "lot_number", "id")

    def __str__(self) -> str:
        return f"{self.competitor} @ {self.contest.name}"

    def clean(self):
        if self.bodyweight is not None and self.bodyweight <= 0:
            raise ValidationError({"bodyweight": "El peso corporal debe ser positivo."})
        if not isinstance(self.labels, list):
            raise ValidationError({"labels": "Las etiquetas deben ser una lista."})

    def save(self, *args, **kwargs):
        # Guardados parciales (update_fields) no recalculan derivados
        if not kwargs.get("update_fields"):
            from meetcore.apps.scoring.services.recalc import prepare_registration  # import local para evitar ciclos
            prepare_registration(self)
        super().save(*args, **kwargs)
        self.remember_loaded_values()
