# meetcore/apps/contests/services/categories.py
"""
Asignación de categoría de edad y clase de peso a partir de los
descriptores de un concurso. Sin acceso a BD.
"""
from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import Hashable, Iterable, List, Optional, Sequence

from meetcore.apps.scoring.services.coefficients import FEMALE, MALE, age_on

FALLBACK_AGE_CODE = "SENIOR"
_FALLBACK_AGE_CODES = ("SENIOR", "OPEN")


@dataclass(frozen=True)
class AgeCategoryDescriptor:
    id: Optional[Hashable]
    code: str
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    sort_order: int = 0
    name: str = ""

    def contains(self, age: Optional[int]) -> bool:
        if age is None:
            return False
        if self.min_age is not None and age < self.min_age:
            return False
        if self.max_age is not None and age > self.max_age:
            return False
        return True


@dataclass(frozen=True)
class WeightClassDescriptor:
    id: Optional[Hashable]
    code: str
    gender: str
    min_weight: Optional[float] = None
    max_weight: Optional[float] = None
    sort_order: int = 0
    name: str = ""

    def contains(self, bodyweight: Optional[float]) -> bool:
        if bodyweight is None:
            return False
        if self.min_weight is not None and bodyweight < float(self.min_weight):
            return False
        if self.max_weight is not None and bodyweight > float(self.max_weight):
            return False
        return True


# ------------------------------
# Plantillas por defecto
# ------------------------------
DEFAULT_AGE_CATEGORY_TEMPLATES = (
    AgeCategoryDescriptor(None, "T16", None, 16, 10, "Teen do 16"),
    AgeCategoryDescriptor(None, "T19", 16, 19, 20, "Teen 16-19"),
    AgeCategoryDescriptor(None, "JUNIOR", 20, 23, 30, "Junior 20-23"),
    AgeCategoryDescriptor(None, "OPEN", 24, 39, 40, "Open"),
    AgeCategoryDescriptor(None, "M40", 40, 49, 50, "Masters 40-49"),
    AgeCategoryDescriptor(None, "M50", 50, 59, 60, "Masters 50-59"),
    AgeCategoryDescriptor(None, "M60", 60, None, 70, "Masters 60+"),
)

DEFAULT_WEIGHT_CLASS_TEMPLATES = (
    WeightClassDescriptor(None, "F_52", FEMALE, None, 52.0, 10, "Do 52 kg"),
    WeightClassDescriptor(None, "F_60", FEMALE, 52.01, 60.0, 20, "Do 60 kg"),
    WeightClassDescriptor(None, "F_67_5", FEMALE, 60.01, 67.5, 30, "Do 67.5 kg"),
    WeightClassDescriptor(None, "F_82_5", FEMALE, 67.51, 82.5, 40, "Do 82.5 kg"),
    WeightClassDescriptor(None, "F_82_5_PLUS", FEMALE, 82.51, None, 50, "82.5+ kg"),
    WeightClassDescriptor(None, "M_67_5", MALE, None, 67.5, 10, "Do 67.5 kg"),
    WeightClassDescriptor(None, "M_82_5", MALE, 67.51, 82.5, 20, "Do 82.5 kg"),
    WeightClassDescriptor(None, "M_95", MALE, 82.51, 95.0, 30, "Do 95 kg"),
    WeightClassDescriptor(None, "M_110", MALE, 95.01, 110.0, 40, "Do 110 kg"),
    WeightClassDescriptor(None, "M_125", MALE, 110.01, 125.0, 50, "Do 125 kg"),
    WeightClassDescriptor(None, "M_125_PLUS", MALE, 125.01, None, 60, "125+ kg"),
)


# ------------------------------
# Edad
# ------------------------------
def match_age_category(birth_date, contest_date, descriptors: Iterable[AgeCategoryDescriptor]) -> Optional[AgeCategoryDescriptor]:
    """
    Primer descriptor (por sort_order) cuyo rango contiene la edad. Si ninguno
    coincide: SENIOR/OPEN, luego el primero de la lista; None si no hay descriptores.
    """
    ordered = sorted(descriptors, key=lambda d: d.sort_order)
    if not ordered:
        return None

    age = age_on(birth_date, contest_date)
    for d in ordered:
        if d.contains(age):
            return d

    for d in ordered:
        if (d.code or "").strip().upper() in _FALLBACK_AGE_CODES:
            return d
    return ordered[0]


def determine_age_category(birth_date, contest_date, descriptors: Iterable[AgeCategoryDescriptor]) -> str:
    match = match_age_category(birth_date, contest_date, descriptors)
    return match.code if match is not None else FALLBACK_AGE_CODE


# ------------------------------
# Peso
# ------------------------------
def normalize_class_gender(gender) -> str:
    """Empieza por 'f' -> Female; cualquier otra cosa -> Male."""
    return FEMALE if str(gender or "").strip().lower().startswith("f") else MALE


def match_weight_class(bodyweight_kg, gender, descriptors: Iterable[WeightClassDescriptor]) -> Optional[WeightClassDescriptor]:
    """
    Primera clase (por sort_order) del género cuyo rango contiene el peso.
    Si ninguna contiene el peso se devuelve la última: la clase abierta
    absorbe el exceso.
    """
    descriptors = list(descriptors)
    if not descriptors:
        return None

    g = normalize_class_gender(gender)
    pool = [d for d in descriptors if normalize_class_gender(d.gender) == g] or descriptors
    ordered = sorted(pool, key=lambda d: d.sort_order)

    try:
        bw = float(bodyweight_kg)
    except (TypeError, ValueError):
        bw = None
    if bw is not None and not math.isfinite(bw):
        bw = None

    for d in ordered:
        if d.contains(bw):
            return d
    return ordered[-1]


def determine_weight_class(bodyweight_kg, gender, descriptors: Iterable[WeightClassDescriptor]) -> Optional[str]:
    match = match_weight_class(bodyweight_kg, gender, descriptors)
    return match.code if match is not None else None


# ------------------------------
# Validación
# ------------------------------
def validate_age_categories(descriptors: Sequence[AgeCategoryDescriptor]) -> List[str]:
    errors: List[str] = []
    for d in descriptors:
        if not (d.code or "").strip():
            errors.append("Hay una categoría de edad sin código.")
        if d.min_age is not None and d.max_age is not None and d.min_age > d.max_age:
            errors.append(f"{d.code}: edad mínima mayor que la máxima.")
    counts = Counter((d.code or "").strip().upper() for d in descriptors)
    errors += [f"Código de categoría repetido: {code}" for code, n in counts.items() if code and n > 1]
    return errors


def validate_weight_classes(descriptors: Sequence[WeightClassDescriptor]) -> List[str]:
    errors: List[str] = []
    for d in descriptors:
        if not (d.code or "").strip():
            errors.append("Hay una clase de peso sin código.")
        if d.min_weight is not None and d.max_weight is not None and float(d.min_weight) > float(d.max_weight):
            errors.append(f"{d.code}: peso mínimo mayor que el máximo.")
    counts = Counter((normalize_class_gender(d.gender), (d.code or "").strip().upper()) for d in descriptors)
    errors += [
        f"Código de clase repetido para {gender}: {code}"
        for (gender, code), n in counts.items() if code and n > 1
    ]
    return errors
