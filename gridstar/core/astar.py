# gridstar/core/astar.py
#!/usr/bin/env python3
"""
A* over an occupancy grid.

Two entry points share one loop:
- get_path(grid, start, finish) -> list of cells (empty when there is no path)
- search(grid, start, finish)   -> generator of StepResult, one per expansion,
                                   used by the viewer for animation

Frontier is a heapq of (f, cell) with lazy deletion: a cell may sit in the
heap more than once, stale entries are dropped when popped because the cell
is already closed. Ties on f fall back to cell ordering.

The success exit fires when the finish cell shows up as a neighbour of the
cell being expanded, not when it is popped.
"""

import heapq
import logging
from dataclasses import dataclass
from math import inf, sqrt
from typing import Dict, Iterator, List, Set, Tuple

from gridstar.core.heuristics import heuristic_for
from gridstar.core.types import Cell, Grid, Metric, SearchRecord, StepResult

logger = logging.getLogger(__name__)

DISTANCE_UNIT_STRAIGHT = 1.0
DISTANCE_UNIT_DIAGONAL = sqrt(2.0)

Offset = Tuple[Tuple[int, int], float]

STRAIGHT_OFFSETS: Tuple[Offset, ...] = (
    ((-1, 0), DISTANCE_UNIT_STRAIGHT),   # north
    ((1, 0), DISTANCE_UNIT_STRAIGHT),    # south
    ((0, 1), DISTANCE_UNIT_STRAIGHT),    # east
    ((0, -1), DISTANCE_UNIT_STRAIGHT),   # west
)
DIAGONAL_OFFSETS: Tuple[Offset, ...] = (
    ((-1, 1), DISTANCE_UNIT_DIAGONAL),   # north-east
    ((-1, -1), DISTANCE_UNIT_DIAGONAL),  # north-west
    ((1, 1), DISTANCE_UNIT_DIAGONAL),    # south-east
    ((1, -1), DISTANCE_UNIT_DIAGONAL),   # south-west
)


def reconstruct_path(records: Dict[Cell, SearchRecord], end: Cell) -> List[Cell]:
    """Follow parent links from `end` back to the self-parented origin."""
    path: List[Cell] = []
    seen: Set[Cell] = set()
    cur = end
    while True:
        rec = records.get(cur)
        if rec is None or rec.parent is None:
            raise RuntimeError(f"parent chain broken at {cur}")
        if cur in seen:
            raise RuntimeError(f"parent chain revisits {cur}")
        seen.add(cur)
        path.append(cur)
        if rec.parent == cur:
            break
        cur = rec.parent
    path.reverse()
    return path


@dataclass
class AStarAlgorithm:
    metric: Metric
    allow_diagonal: bool = True

    def __post_init__(self):
        self.metric = Metric(self.metric)
        self._heuristic = heuristic_for(self.metric)
        self._warn_on_mismatch()

    # -------------------- configuration --------------------

    def set_allow_diagonal(self, allow_diagonal: bool) -> None:
        """Must not be called while a search on this engine is in progress."""
        self.allow_diagonal = bool(allow_diagonal)
        self._warn_on_mismatch()

    def is_allow_diagonal(self) -> bool:
        return self.allow_diagonal

    def _warn_on_mismatch(self) -> None:
        if self.metric is Metric.MANHATTAN and self.allow_diagonal:
            logger.warning("Manhattan heuristic with diagonal moves overestimates; paths may not be optimal")
        elif self.metric is Metric.EUCLIDEAN and not self.allow_diagonal:
            logger.warning("Euclidean heuristic without diagonal moves underestimates; search expands more cells")

    def _offsets(self) -> Tuple[Offset, ...]:
        if self.allow_diagonal:
            return STRAIGHT_OFFSETS + DIAGONAL_OFFSETS
        return STRAIGHT_OFFSETS

    # -------------------- search --------------------

    def get_path(self, grid: Grid, start: Cell, finish: Cell) -> List[Cell]:
        """Shortest path from start to finish inclusive, or [] if there is none."""
        last = StepResult(status="no_path", path=[])
        for last in self.search(grid, start, finish):
            pass
        return list(last.path or [])

    def search(self, grid: Grid, start: Cell, finish: Cell) -> Iterator[StepResult]:
        """Run A* one expansion per yielded step; the last step is "done" or "no_path"."""
        start = tuple(start)
        finish = tuple(finish)
        offsets = self._offsets()
        h = self._heuristic
        logger.debug("A* %s -> %s (metric=%s, diagonal=%s)", start, finish,
                     self.metric.value, self.allow_diagonal)

        if not (grid.in_bounds(start) and grid.in_bounds(finish)):
            logger.debug("endpoint out of bounds for %dx%d grid", grid.rows, grid.cols)
            yield StepResult(status="no_path", path=[], metrics=_metrics())
            return

        if grid.is_blocked(start) or grid.is_blocked(finish):
            logger.debug("endpoint is blocked")
            yield StepResult(status="no_path", path=[], metrics=_metrics())
            return

        if start == finish:
            yield StepResult(status="done", current=start, path=[start],
                             metrics=_metrics(path_len=1, total_cost=0.0))
            return

        records: Dict[Cell, SearchRecord] = {}
        closed: Set[Cell] = set()
        open_set: Set[Cell] = set()
        open_pq: List[Tuple[float, Cell]] = []
        popped = 0

        h0 = h(start, finish)
        records[start] = SearchRecord(g=0.0, h=h0, f=h0, parent=start)
        heapq.heappush(open_pq, (h0, start))
        open_set.add(start)

        while open_pq:
            _, u = heapq.heappop(open_pq)
            if u in closed:
                continue  # stale entry

            popped += 1
            closed.add(u)
            open_set.discard(u)
            g_u = records[u].g
            r, c = u

            opened_now: List[Cell] = []
            for (dr, dc), step_cost in offsets:
                v = (r + dr, c + dc)
                if not grid.in_bounds(v):
                    continue

                if v == finish:
                    g_v = g_u + step_cost
                    records[v] = SearchRecord(g=g_v, h=0.0, f=g_v, parent=u)
                    path = reconstruct_path(records, finish)
                    logger.debug("path found: %d cells, cost %.3f, %d expansions",
                                 len(path), g_v, popped)
                    yield StepResult(
                        status="done",
                        opened=opened_now,
                        closed=[u],
                        current=u,
                        path=path,
                        metrics=_metrics(popped, len(open_set), len(closed), len(path), g_v),
                    )
                    return

                if v in closed or grid.is_blocked(v):
                    continue

                g_v = g_u + step_cost
                h_v = h(v, finish)
                f_v = g_v + h_v
                known = records.get(v)
                if f_v < (known.f if known is not None else inf):
                    records[v] = SearchRecord(g=g_v, h=h_v, f=f_v, parent=u)
                    heapq.heappush(open_pq, (f_v, v))
                    if v not in open_set:
                        open_set.add(v)
                        opened_now.append(v)

            yield StepResult(
                status="running",
                opened=opened_now,
                closed=[u],
                current=u,
                metrics=_metrics(popped, len(open_set), len(closed)),
            )

        logger.debug("frontier exhausted after %d expansions, no path", popped)
        yield StepResult(status="no_path", path=[],
                         metrics=_metrics(popped, 0, len(closed)))


def _metrics(popped: int = 0, open_size: int = 0, closed_count: int = 0,
             path_len: int = 0, total_cost=None) -> dict:
    return {
        "popped": popped,
        "open_size": open_size,
        "closed_count": closed_count,
        "path_len": path_len,
        "total_cost": total_cost,
    }
