# gridstar/app/console.py
#!/usr/bin/env python3
"""Plain-terminal output: path listing and an ANSI drawing of the grid."""

from typing import List, Sequence

from gridstar.core.types import Cell, Grid

# ANSI styles
START_MARK   = "\033[1;32m*\033[0m"   # green
FINISH_MARK  = "\033[1;34m*\033[0m"   # blue
PATH_MARK    = "\033[1;31m*\033[0m"   # red
BLOCK_MARK   = "\033[1;46m \033[0m"   # cyan background
OPEN_MARK    = " "

PLAIN_MARKS = {"start": "S", "finish": "F", "path": "*", "block": "#", "open": " "}
ANSI_MARKS = {"start": START_MARK, "finish": FINISH_MARK, "path": PATH_MARK,
              "block": BLOCK_MARK, "open": OPEN_MARK}


def format_path(path: Sequence[Cell]) -> str:
    return " -> ".join(f"[{r}, {c}]" for r, c in path)


def render_grid(grid: Grid, path: Sequence[Cell], color: bool = True) -> str:
    marks = ANSI_MARKS if color else PLAIN_MARKS
    on_path = set(path)
    first = path[0] if path else None
    last = path[-1] if path else None

    lines: List[str] = []
    for r in range(grid.rows):
        row = []
        for c in range(grid.cols):
            cell = (r, c)
            if cell == first:
                key = "start"
            elif cell == last:
                key = "finish"
            elif cell in on_path:
                key = "path"
            elif grid.is_blocked(cell):
                key = "block"
            else:
                key = "open"
            row.append("|" + marks[key])
        lines.append("".join(row) + "|")
    return "\n".join(lines)
