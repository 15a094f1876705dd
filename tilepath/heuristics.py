"""Distance estimates between two cells."""

from __future__ import annotations

import math

from .types import Heuristic

_SQRT2 = math.sqrt(2)


def heuristic(kind: Heuristic | int, dx: int, dy: int, weight: float = 1) -> float:
    """Return the estimate of the given kind for a cell offset of (dx, dy).

    Raises ValueError for an unknown heuristic kind.
    """
    kind = Heuristic(kind)
    x = abs(int(dx))
    y = abs(int(dy))
    euclid = math.sqrt(x * x + y * y)

    if kind is Heuristic.EUCLID:
        return euclid
    if kind is Heuristic.EUCLID_POW:
        return float(euclid**weight)
    if kind is Heuristic.EUCLID_WGHT:
        return euclid * weight
    if kind is Heuristic.EUCLID_EXP:
        try:
            return euclid * math.exp(euclid)
        except OverflowError:
            return math.inf
    if kind is Heuristic.MANHATAN:
        return float(x + y)
    if kind is Heuristic.CHEBYSHEV:
        return float(max(x, y))
    # OCTILE
    return min(x, y) * (_SQRT2 - 1) + max(x, y)