# meetcore/apps/scoring/services/results.py
"""
Cálculo del resultado de una inscripción a partir de sus intentos.

- Mejor intento válido por movimiento (0 si no hay).
- El total depende de la disciplina: Squat/Bench/Deadlift suman solo ese
  movimiento; Powerlifting (o una disciplina desconocida) suma los tres.
- Puntos = peso * Reshel * McCullough. Los puntos por movimiento se calculan
  siempre para los tres (los usa la clasificación por equipos).
- Descalificado si falta cualquiera de los tres movimientos.
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Optional, Tuple


class LiftKind:
    SQUAT = "Squat"
    BENCH = "Bench"
    DEADLIFT = "Deadlift"
    ALL = (SQUAT, BENCH, DEADLIFT)
    CHOICES = tuple((k, k) for k in ALL)


class AttemptStatus:
    PENDING = "Pending"
    SUCCESSFUL = "Successful"
    FAILED = "Failed"
    CHOICES = ((PENDING, PENDING), (SUCCESSFUL, SUCCESSFUL), (FAILED, FAILED))


class Discipline:
    SQUAT = "Squat"
    BENCH = "Bench"
    DEADLIFT = "Deadlift"
    POWERLIFTING = "Powerlifting"
    CHOICES = (
        (POWERLIFTING, POWERLIFTING),
        (SQUAT, SQUAT),
        (BENCH, BENCH),
        (DEADLIFT, DEADLIFT),
    )


DISQUALIFICATION_REASON = "Missing required lifts"


@dataclass(frozen=True)
class Attempt:
    lift: str
    attempt_number: int
    weight_kg: float
    status: str = AttemptStatus.PENDING


@dataclass(frozen=True)
class Coefficients:
    reshel: Optional[float] = 1.0
    mccullough: Optional[float] = 1.0


@dataclass(frozen=True)
class ScoreResult:
    best_squat: float
    best_bench: float
    best_deadlift: float
    total_weight: float
    coefficient_points: float
    squat_points: float
    bench_points: float
    deadlift_points: float
    is_disqualified: bool
    disqualification_reason: Optional[str] = None

    def best_for(self, lift: str) -> float:
        return {
            LiftKind.SQUAT: self.best_squat,
            LiftKind.BENCH: self.best_bench,
            LiftKind.DEADLIFT: self.best_deadlift,
        }.get(lift, 0.0)

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


def _same(a, b) -> bool:
    return str(a or "").strip().lower() == b.lower()


def _factor(value) -> float:
    try:
        f = float(value)
    except (TypeError, ValueError):
        return 1.0
    return f if math.isfinite(f) else 1.0


def best_successful(attempts: Iterable[Attempt], lift: str) -> float:
    best = 0.0
    for a in attempts:
        if not (_same(a.lift, lift) and _same(a.status, AttemptStatus.SUCCESSFUL)):
            continue
        try:
            w = float(a.weight_kg)
        except (TypeError, ValueError):
            continue
        if math.isfinite(w) and w > best:
            best = w
    return best


def lifts_for_discipline(discipline) -> Tuple[str, ...]:
    for lift in LiftKind.ALL:
        if _same(discipline, lift):
            return (lift,)
    return LiftKind.ALL


def compute_result(attempts: Iterable[Attempt], discipline, coefficients: Coefficients) -> ScoreResult:
    attempts = list(attempts)
    best = {lift: best_successful(attempts, lift) for lift in LiftKind.ALL}

    total = sum(best[lift] for lift in lifts_for_discipline(discipline))
    reshel = _factor(coefficients.reshel)
    mcc = _factor(coefficients.mccullough)

    missing = any(best[lift] == 0 for lift in LiftKind.ALL)

    return ScoreResult(
        best_squat=best[LiftKind.SQUAT],
        best_bench=best[LiftKind.BENCH],
        best_deadlift=best[LiftKind.DEADLIFT],
        total_weight=total,
        coefficient_points=total * reshel * mcc,
        squat_points=best[LiftKind.SQUAT] * reshel * mcc,
        bench_points=best[LiftKind.BENCH] * reshel * mcc,
        deadlift_points=best[LiftKind.DEADLIFT] * reshel * mcc,
        is_disqualified=missing,
        disqualification_reason=DISQUALIFICATION_REASON if missing else None,
    )
