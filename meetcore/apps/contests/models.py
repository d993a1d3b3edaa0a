# meetcore/apps/contests/models.py
from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from meetcore.apps.scoring.services.results import Discipline, LiftKind

from .services.categories import AgeCategoryDescriptor, WeightClassDescriptor
from .services.plates import PlateStock

GENDER_CHOICES = (
    ("Male", "Male"),
    ("Female", "Female"),
)


class ChangeTrackingMixin:
    """
    Recuerda los valores de `tracked_fields` tal como se leyeron de BD (o tras
    el último save) para saber qué cambió antes de guardar.
    """
    tracked_fields: tuple = ()

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance.remember_loaded_values()
        return instance

    def remember_loaded_values(self) -> None:
        # Solo campos ya cargados: no dispara consultas por campos diferidos
        self._loaded_values = {f: self.__dict__[f] for f in self.tracked_fields if f in self.__dict__}

    def changed_fields(self) -> set:
        loaded = getattr(self, "_loaded_values", None) or {}
        return {f for f, value in loaded.items() if self.__dict__.get(f) != value}


class Contest(ChangeTrackingMixin, models.Model):
    tracked_fields = ("date",)

    STATUS_SETUP = "Setup"
    STATUS_IN_PROGRESS = "InProgress"
    STATUS_PAUSED = "Paused"
    STATUS_COMPLETED = "Completed"
    STATUS_CHOICES = (
        (STATUS_SETUP, "Preparación"),
        (STATUS_IN_PROGRESS, "En curso"),
        (STATUS_PAUSED, "Pausado"),
        (STATUS_COMPLETED, "Finalizado"),
    )

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=200, unique=True)
    date = models.DateField()
    location = models.CharField(max_length=200, blank=True, default="")
    discipline = models.CharField(max_length=20, choices=Discipline.CHOICES, default=Discipline.POWERLIFTING)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_SETUP)
    competition_type = models.CharField(max_length=60, blank=True, default="", help_text="Ej. Local, Nacional.")

    mens_bar_weight = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("20.00"))
    womens_bar_weight = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("15.00"))
    clamp_weight = models.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal("2.50"),
        help_text="Peso de cada clip (kg).",
    )

    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        ordering = ("-date", "name")

    def __str__(self) -> str:
        return f"{self.name} ({self.date})"

    def save(self, *args, **kwargs):
        changed = self.changed_fields()
        super().save(*args, **kwargs)
        self.remember_loaded_values()
        # Otra fecha = otra edad para todos los inscritos
        if "date" in changed:
            from meetcore.apps.scoring.services.recalc import rederive_registrations  # import local para evitar ciclos
            rederive_registrations(self.registrations.all(), age=True)


class ContestAgeCategory(models.Model):
    contest = models.ForeignKey(Contest, on_delete=models.CASCADE, related_name="age_categories")
    code = models.CharField(max_length=32)
    name = models.CharField(max_length=100, blank=True, default="")
    min_age = models.PositiveSmallIntegerField(null=True, blank=True)
    max_age = models.PositiveSmallIntegerField(null=True, blank=True)
    sort_order = models.IntegerField(default=0)

    class Meta:
        unique_together = (("contest", "code"),)
        ordering = ("contest_id", "sort_order", "id")

    def __str__(self) -> str:
        return f"{self.contest.name} · {self.code}"

    def clean(self):
        if self.min_age is not None and self.max_age is not None and self.min_age > self.max_age:
            raise ValidationError("La edad mínima no puede ser mayor que la máxima.")

    def as_descriptor(self) -> AgeCategoryDescriptor:
        return AgeCategoryDescriptor(
            id=self.pk,
            code=self.code,
            min_age=self.min_age,
            max_age=self.max_age,
            sort_order=self.sort_order,
            name=self.name,
        )


class ContestWeightClass(models.Model):
    contest = models.ForeignKey(Contest, on_delete=models.CASCADE, related_name="weight_classes")
    code = models.CharField(max_length=32)
    name = models.CharField(max_length=100, blank=True, default="")
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    min_weight = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    max_weight = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    sort_order = models.IntegerField(default=0)

    class Meta:
        unique_together = (("contest", "gender", "code"),)
        ordering = ("contest_id", "gender", "sort_order", "id")

    def __str__(self) -> str:
        return f"{self.contest.name} · {self.gender} · {self.code}"

    def clean(self):
        if self.min_weight is not None and self.max_weight is not None and self.min_weight > self.max_weight:
            raise ValidationError("El peso mínimo no puede ser mayor que el máximo.")

    def as_descriptor(self) -> WeightClassDescriptor:
        return WeightClassDescriptor(
            id=self.pk,
            code=self.code,
            gender=self.gender,
            min_weight=float(self.min_weight) if self.min_weight is not None else None,
            max_weight=float(self.max_weight) if self.max_weight is not None else None,
            sort_order=self.sort_order,
            name=self.name,
        )


class PlateSet(models.Model):
    """Inventario de discos del concurso: `quantity` son PARES disponibles."""
    contest = models.ForeignKey(Contest, on_delete=models.CASCADE, related_name="plates")
    plate_weight = models.DecimalField(max_digits=5, decimal_places=2)
    quantity = models.PositiveIntegerField(default=0, help_text="Pares disponibles.")
    color = models.CharField(max_length=16, blank=True, default="")

    class Meta:
        unique_together = (("contest", "plate_weight"),)
        ordering = ("contest_id", "-plate_weight")

    def __str__(self) -> str:
        return f"{self.plate_weight} kg × {self.quantity}"

    def clean(self):
        if self.plate_weight is not None and self.plate_weight <= 0:
            raise ValidationError("El peso del disco debe ser positivo.")

    def as_stock(self) -> PlateStock:
        return PlateStock(
            plate_weight_kg=float(self.plate_weight),
            pairs_available=self.quantity,
            color=self.color or None,
        )


class ContestTag(models.Model):
    contest = models.ForeignKey(Contest, on_delete=models.CASCADE, related_name="tags")
    label = models.CharField(max_length=60)

    class Meta:
        unique_together = (("contest", "label"),)
        ordering = ("contest_id", "label")

    def __str__(self) -> str:
        return self.label


class ContestState(models.Model):
    """
    Estado en vivo del concurso: qué movimiento, ronda e intento están en la
    plataforma. Uno por concurso; sin fila = estado por defecto.
    """
    contest = models.OneToOneField(Contest, on_delete=models.CASCADE, primary_key=True, related_name="state")
    status = models.CharField(max_length=20, choices=Contest.STATUS_CHOICES, default=Contest.STATUS_SETUP)
    current_lift = models.CharField(max_length=10, choices=LiftKind.CHOICES, null=True, blank=True)
    current_round = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    current_attempt_number = models.PositiveSmallIntegerField(
        null=True, blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(4)],
    )
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.contest.name} · {self.status} · {self.current_lift or '—'} #{self.current_attempt_number or '-'}"

    def as_dict(self) -> dict:
        return {
            "contest": self.contest.slug,
            "status": self.status,
            "current_lift": self.current_lift,
            "current_round": self.current_round,
            "current_attempt_number": self.current_attempt_number,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
