# gridstar/app/maps.py
#!/usr/bin/env python3
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from gridstar.core.types import Cell, Grid, Metric

logger = logging.getLogger(__name__)

MAP_DIR = Path(__file__).resolve().parents[1] / "maps"


class MapError(ValueError):
    """Raised when a map file is malformed."""


@dataclass(frozen=True)
class MapFile:
    name: str
    grid: Grid
    start: Cell
    finish: Cell
    metric: Metric = Metric.MANHATTAN
    allow_diagonal: bool = False


def bundled_maps() -> Dict[str, Path]:
    return {p.stem: p for p in sorted(MAP_DIR.glob("*.json"))}


def load_map(path) -> MapFile:
    path = Path(path)
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as ex:
            raise MapError(f"{path}: not valid JSON ({ex})") from ex
    m = parse_map(data, name=path.stem, source=str(path))
    logger.debug("loaded map %s (%dx%d) from %s", m.name, m.grid.rows, m.grid.cols, path)
    return m


def parse_map(data: Dict[str, Any], name: str = "custom", source: str = "<map>") -> MapFile:
    if not isinstance(data, dict):
        raise MapError(f"{source}: top level must be an object")
    for key in ("rows", "cols", "cells", "start", "finish"):
        if key not in data:
            raise MapError(f"{source}: missing '{key}'")

    try:
        rows = int(data["rows"])
        cols = int(data["cols"])
    except (TypeError, ValueError) as ex:
        raise MapError(f"{source}: rows/cols must be integers") from ex

    cells = data["cells"]
    if not isinstance(cells, list):
        raise MapError(f"{source}: 'cells' must be a list")
    if cells and all(isinstance(r, list) for r in cells):
        if len(cells) != rows or any(len(r) != cols for r in cells):
            raise MapError(f"{source}: 'cells' must be {rows} rows of {cols} values")
        flat = [v for r in cells for v in r]
    else:
        flat = cells
    try:
        grid = Grid.from_flat(flat, rows, cols)
    except ValueError as ex:
        raise MapError(f"{source}: {ex}") from ex

    start = _cell(data["start"], "start", source)
    finish = _cell(data["finish"], "finish", source)
    if not grid.in_bounds(start):
        raise MapError(f"{source}: start {start} out of bounds")
    if not grid.in_bounds(finish):
        raise MapError(f"{source}: finish {finish} out of bounds")

    try:
        metric = Metric(str(data.get("metric", Metric.MANHATTAN.value)).lower())
    except ValueError as ex:
        raise MapError(f"{source}: unknown metric {data.get('metric')!r}") from ex

    return MapFile(
        name=str(data.get("name", name)),
        grid=grid,
        start=start,
        finish=finish,
        metric=metric,
        allow_diagonal=bool(data.get("allow_diagonal", False)),
    )


def _cell(value: Any, field_name: str, source: str) -> Cell:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise MapError(f"{source}: '{field_name}' must be [row, col]")
    try:
        return int(value[0]), int(value[1])
    except (TypeError, ValueError) as ex:
        raise MapError(f"{source}: '{field_name}' must hold integers") from ex
