# meetcore/apps/scoring/services/coefficients.py
"""
Resolución de coeficientes Reshel (peso corporal) y McCullough (edad).

Funciones puras: reciben tablas inmutables ya validadas y nunca lanzan
excepciones por datos de negocio mal formados; en ese caso devuelven 1.0.
Las tablas vacías o desordenadas sí son un error estructural (InvalidTable)
y se detectan al construir los objetos de tabla.
"""
from __future__ import annotations

import json
import logging
import math
import threading
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence, Tuple

from ..errors import InvalidTable

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"

DEFAULT_INCREMENT_KG = 0.25
NEUTRAL_COEFFICIENT = 1.0
MATCH_TOLERANCE = 1e-4
# Diferencia mínima para volver a guardar un coeficiente ya persistido
CHANGE_TOLERANCE = 1e-4

MALE = "Male"
FEMALE = "Female"


# ------------------------------
# Objetos de tabla
# ------------------------------
@dataclass(frozen=True)
class ReshelEntry:
    bodyweight_kg: float
    coefficient: float


@dataclass(frozen=True)
class McCulloughEntry:
    age: int
    coefficient: float


def _check_ascending(keys: Sequence[float], name: str) -> None:
    if not keys:
        raise InvalidTable(f"La tabla {name} está vacía.")
    for prev, cur in zip(keys, keys[1:]):
        if not cur > prev:
            raise InvalidTable(f"La tabla {name} no está en orden estrictamente ascendente ({prev} -> {cur}).")


@dataclass(frozen=True)
class ReshelTables:
    male: Tuple[ReshelEntry, ...]
    female: Tuple[ReshelEntry, ...]
    increment_kg: float = DEFAULT_INCREMENT_KG

    def __post_init__(self):
        object.__setattr__(self, "male", tuple(self.male))
        object.__setattr__(self, "female", tuple(self.female))
        _check_ascending([e.bodyweight_kg for e in self.male], "Reshel (hombres)")
        _check_ascending([e.bodyweight_kg for e in self.female], "Reshel (mujeres)")
        if not (isinstance(self.increment_kg, (int, float)) and math.isfinite(self.increment_kg) and self.increment_kg > 0):
            raise InvalidTable(f"Incremento de tabulación inválido: {self.increment_kg!r}")

    def for_gender(self, gender) -> Optional[Tuple[ReshelEntry, ...]]:
        g = normalize_gender(gender)
        if g == MALE:
            return self.male
        if g == FEMALE:
            return self.female
        return None


@dataclass(frozen=True)
class McCulloughTable:
    entries: Tuple[McCulloughEntry, ...]

    def __post_init__(self):
        object.__setattr__(self, "entries", tuple(self.entries))
        _check_ascending([e.age for e in self.entries], "McCullough")


@dataclass(frozen=True)
class CoefficientTables:
    """Snapshot inmutable de todas las tablas que usa un pase de cálculo."""
    reshel: ReshelTables
    mccullough: McCulloughTable


# ------------------------------
# Utilidades
# ------------------------------
def normalize_gender(value) -> Optional[str]:
    """'male'/'m' -> Male, 'female'/'f' -> Female (sin distinguir mayúsculas); otro -> None."""
    if value is None:
        return None
    s = str(value).strip().lower()
    if s in ("male", "m"):
        return MALE
    if s in ("female", "f"):
        return FEMALE
    return None


def _to_finite(value) -> Optional[float]:
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def _closest(entries, target: float, key):
    """
    Entrada cuya clave coincide con target (tolerancia MATCH_TOLERANCE) o, si no
    hay, la de menor distancia. En empate gana la primera en orden ascendente.
    """
    for e in entries:
        if abs(key(e) - target) <= MATCH_TOLERANCE:
            return e
    best = entries[0]
    best_dist = abs(key(best) - target)
    for e in entries[1:]:
        dist = abs(key(e) - target)
        if dist < best_dist:
            best, best_dist = e, dist
    return best


def _parse_date(value) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        logger.debug("Fecha no interpretable: %r", value)
        return None


def age_on(birth_date, contest_date) -> Optional[int]:
    """
    Edad cumplida a la fecha del concurso. Acepta date o 'YYYY-MM-DD'.
    Devuelve None si alguna fecha no se puede interpretar.
    """
    birth = _parse_date(birth_date)
    contest = _parse_date(contest_date)
    if birth is None or contest is None:
        return None
    age = contest.year - birth.year
    if (contest.month, contest.day) < (birth.month, birth.day):
        age -= 1
    return age


def coefficient_changed(old, new, tolerance: float = CHANGE_TOLERANCE) -> bool:
    old_f = _to_finite(old)
    new_f = _to_finite(new)
    if old_f is None or new_f is None:
        return old_f != new_f
    return abs(old_f - new_f) > tolerance


# ------------------------------
# Resolución
# ------------------------------
def resolve_reshel(bodyweight_kg, gender, tables: ReshelTables) -> float:
    bw = _to_finite(bodyweight_kg)
    if bw is None or bw <= 0:
        return NEUTRAL_COEFFICIENT

    entries = tables.for_gender(gender)
    if entries is None:
        return NEUTRAL_COEFFICIENT

    inc = tables.increment_kg
    # round() de Python redondea .5 al par
    rounded = round(bw / inc) * inc
    clamped = min(max(rounded, entries[0].bodyweight_kg), entries[-1].bodyweight_kg)
    return _closest(entries, clamped, key=lambda e: e.bodyweight_kg).coefficient


def resolve_mccullough(age, table: McCulloughTable) -> float:
    value = _to_finite(age)
    if value is None or value < 0:
        return NEUTRAL_COEFFICIENT

    entries = table.entries
    whole = min(max(math.floor(value), entries[0].age), entries[-1].age)
    return _closest(entries, whole, key=lambda e: e.age).coefficient


def mccullough_for_dates(birth_date, contest_date, table: McCulloughTable) -> float:
    age = age_on(birth_date, contest_date)
    if age is None:
        return NEUTRAL_COEFFICIENT
    return resolve_mccullough(age, table)


# ------------------------------
# Carga de tablas
# ------------------------------
def reshel_entries_from_rows(rows: Iterable[dict]) -> Tuple[ReshelEntry, ...]:
    return tuple(
        ReshelEntry(bodyweight_kg=float(r["bodyweightKg"]), coefficient=float(r["coefficient"]))
        for r in rows
    )


def mccullough_entries_from_rows(rows: Iterable[dict]) -> Tuple[McCulloughEntry, ...]:
    return tuple(
        McCulloughEntry(age=int(r["age"]), coefficient=float(r["coefficient"]))
        for r in rows
    )


def _read_dataset(name: str, data_dir: Path) -> dict:
    path = data_dir / name
    with path.open(encoding="utf-8") as fp:
        return json.load(fp)


def load_bundled_reshel(data_dir: Path = DATA_DIR, increment_kg: Optional[float] = None) -> ReshelTables:
    men = _read_dataset("reshel_men.json", data_dir)
    women = _read_dataset("reshel_women.json", data_dir)
    inc = increment_kg if increment_kg is not None else float(men.get("incrementKg", DEFAULT_INCREMENT_KG))
    return ReshelTables(
        male=reshel_entries_from_rows(men["entries"]),
        female=reshel_entries_from_rows(women["entries"]),
        increment_kg=inc,
    )


def load_bundled_mccullough(data_dir: Path = DATA_DIR) -> McCulloughTable:
    payload = _read_dataset("mccullough.json", data_dir)
    return McCulloughTable(entries=mccullough_entries_from_rows(payload["entries"]))


def load_bundled_tables(data_dir: Path = DATA_DIR, increment_kg: Optional[float] = None) -> CoefficientTables:
    return CoefficientTables(
        reshel=load_bundled_reshel(data_dir, increment_kg),
        mccullough=load_bundled_mccullough(data_dir),
    )


# ------------------------------
# Caché de snapshots
# ------------------------------
class CoefficientCache:
    """
    Guarda un CoefficientTables inmutable construido por `loader`.

    - snapshot(): carga una sola vez y devuelve siempre el mismo objeto.
    - reload(): construye un snapshot nuevo y lo intercambia bajo lock;
      quien ya tenía el anterior sigue trabajando con él.
    - invalidate(): el próximo snapshot() vuelve a cargar.
    """

    def __init__(self, loader: Callable[[], CoefficientTables]):
        self._loader = loader
        self._snapshot: Optional[CoefficientTables] = None
        self._lock = threading.Lock()

    def snapshot(self) -> CoefficientTables:
        current = self._snapshot
        if current is not None:
            return current
        with self._lock:
            if self._snapshot is None:
                self._snapshot = self._loader()
            return self._snapshot

    def reload(self) -> CoefficientTables:
        fresh = self._loader()
        with self._lock:
            self._snapshot = fresh
        return fresh

    def invalidate(self) -> None:
        with self._lock:
            self._snapshot = None
