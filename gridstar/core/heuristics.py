# gridstar/core/heuristics.py
#!/usr/bin/env python3
"""
Distance estimates between two cells.

- Manhattan pairs with 4-connected movement (unit straight steps).
- Euclidean pairs with 8-connected movement (straight 1, diagonal sqrt(2)).

Both stay admissible for their movement model, which keeps A* optimal.
"""

from math import sqrt
from typing import Callable, Dict

from gridstar.core.types import Cell, Metric

Heuristic = Callable[[Cell, Cell], float]


def manhattan(c: Cell, goal: Cell) -> float:
    return float(abs(c[0] - goal[0]) + abs(c[1] - goal[1]))


def euclidean(c: Cell, goal: Cell) -> float:
    dr = c[0] - goal[0]
    dc = c[1] - goal[1]
    return sqrt(dr * dr + dc * dc)


_BY_METRIC: Dict[Metric, Heuristic] = {
    Metric.MANHATTAN: manhattan,
    Metric.EUCLIDEAN: euclidean,
}


def heuristic_for(metric: Metric) -> Heuristic:
    """Return the heuristic function for `metric` (accepts the enum or its value)."""
    return _BY_METRIC[Metric(metric)]
