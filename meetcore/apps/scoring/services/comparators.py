# meetcore/apps/scoring/services/comparators.py
"""
Cadena de comparadores reutilizable para ranking individual y por equipos.

    order = by_desc("coefficient_points").then_desc("total_weight").then_asc(bw).then_asc(rid)
    sorted(rows, key=order.key())
"""
from __future__ import annotations

from functools import cmp_to_key
from operator import attrgetter
from typing import Any, Callable, Iterable, List, Tuple, Union

KeyFunc = Callable[[Any], Any]
KeySpec = Union[str, KeyFunc]


def _as_key(key: KeySpec) -> KeyFunc:
    return attrgetter(key) if isinstance(key, str) else key


class ComparatorChain:
    """Comparador compuesto: cada paso solo decide si los anteriores empatan."""

    def __init__(self, steps: Tuple[Tuple[KeyFunc, bool], ...] = ()):
        self._steps = steps

    def then_desc(self, key: KeySpec) -> "ComparatorChain":
        return ComparatorChain(self._steps + ((_as_key(key), True),))

    def then_asc(self, key: KeySpec) -> "ComparatorChain":
        return ComparatorChain(self._steps + ((_as_key(key), False),))

    def __call__(self, a, b) -> int:
        for key, descending in self._steps:
            ka, kb = key(a), key(b)
            if ka == kb:
                continue
            if descending:
                return -1 if ka > kb else 1
            return -1 if ka < kb else 1
        return 0

    def key(self):
        return cmp_to_key(self)

    def sort(self, items: Iterable) -> List:
        return sorted(items, key=self.key())


def by_desc(key: KeySpec) -> ComparatorChain:
    return ComparatorChain().then_desc(key)


def by_asc(key: KeySpec) -> ComparatorChain:
    return ComparatorChain().then_asc(key)
