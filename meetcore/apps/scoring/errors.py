# meetcore/apps/scoring/errors.py
from __future__ import annotations


class ScoringError(Exception):
    """Base de los errores de la capa de puntuación."""


class NotFound(ScoringError, LookupError):
    """La inscripción o el concurso referenciado no existe."""

    def __init__(self, kind: str, key) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} '{key}' no existe.")


class InvalidTable(ScoringError, ValueError):
    """Tabla de coeficientes vacía o con claves fuera de orden."""
