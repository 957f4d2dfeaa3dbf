# gridstar/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from math import inf
from typing import List, Tuple, Optional, Dict, Any, Sequence

Cell = Tuple[int, int]  # (row, col)


class Metric(str, Enum):
    MANHATTAN = "manhattan"
    EUCLIDEAN = "euclidean"


@dataclass(frozen=True)
class Grid:
    rows: int
    cols: int
    cells: Tuple[bool, ...]            # row-major, True = passable

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.rows}x{self.cols}")
        if len(self.cells) != self.rows * self.cols:
            raise ValueError(
                f"Grid of {self.rows}x{self.cols} needs {self.rows * self.cols} cells, got {len(self.cells)}"
            )

    @classmethod
    def from_flat(cls, flags: Sequence[Any], rows: int, cols: int) -> "Grid":
        return cls(rows, cols, tuple(bool(v) for v in flags))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]]) -> "Grid":
        if not rows:
            raise ValueError("Grid needs at least one row")
        width = len(rows[0])
        if any(len(r) != width for r in rows):
            raise ValueError("All grid rows must have the same length")
        return cls(len(rows), width, tuple(bool(v) for r in rows for v in r))

    def in_bounds(self, c: Cell) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def is_blocked(self, c: Cell) -> bool:
        r, col = c
        return not self.cells[r * self.cols + col]


@dataclass
class SearchRecord:
    g: float = inf
    h: float = inf
    f: float = inf
    parent: Optional[Cell] = None      # origin points at itself


@dataclass
class StepResult:
    status: str                   # "running" | "done" | "no_path"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
