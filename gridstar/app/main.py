# gridstar/app/main.py
#!/usr/bin/env python3
"""
gridstar command line

    gridstar                                  # bundled reference maze
    gridstar --bundled open_field
    gridstar --map my.json --start 0,0 --finish 4,7 --metric euclidean --diagonal
    gridstar --view                           # animate in the pygame viewer

Defaults:
- ENV: GRIDSTAR_LOG_LEVEL, GRIDSTAR_METRIC
- CLI flags override the environment, which overrides the map file.

Exit status: 0 path found, 1 no path, 2 map could not be loaded.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from gridstar.app.console import format_path, render_grid
from gridstar.app.maps import MapError, MapFile, bundled_maps, load_map
from gridstar.core.astar import AStarAlgorithm
from gridstar.core.types import Cell, Metric

logger = logging.getLogger(__name__)

DEFAULT_MAP = "reference_maze"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
METRICS = [m.value for m in Metric]
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_cell(text: str) -> Cell:
    parts = text.replace(" ", "").split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected ROW,COL, got {text!r}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected integers in ROW,COL, got {text!r}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="gridstar", description="A* shortest path on an occupancy grid")
    src = p.add_mutually_exclusive_group()
    src.add_argument("--map", dest="map_path", help="path to a JSON map file")
    src.add_argument("--bundled", choices=sorted(bundled_maps()), help="use a map shipped with gridstar")
    p.add_argument("--start", type=parse_cell, help="start cell as ROW,COL (overrides the map)")
    p.add_argument("--finish", type=parse_cell, help="finish cell as ROW,COL (overrides the map)")
    p.add_argument("--metric", type=str.lower, choices=METRICS,
                   default=os.getenv("GRIDSTAR_METRIC"), help="heuristic (default: $GRIDSTAR_METRIC or from the map)")
    p.add_argument("--diagonal", action=argparse.BooleanOptionalAction, default=None,
                   help="allow diagonal moves (default: from the map)")
    p.add_argument("--no-color", action="store_true", help="plain characters instead of ANSI colors")
    p.add_argument("--view", action="store_true", help="open the pygame viewer")
    p.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                   default=os.getenv("GRIDSTAR_LOG_LEVEL", "WARNING"),
                   help="logging level (default: $GRIDSTAR_LOG_LEVEL or WARNING)")
    return p


def resolve_map(args: argparse.Namespace) -> MapFile:
    if args.map_path:
        return load_map(args.map_path)
    return load_map(bundled_maps()[args.bundled or DEFAULT_MAP])


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    # argparse does not check environment defaults against choices
    if args.metric is not None and args.metric not in METRICS:
        parser.error(f"GRIDSTAR_METRIC must be one of {', '.join(METRICS)}, got {args.metric!r}")
    if args.log_level not in LOG_LEVELS:
        parser.error(f"GRIDSTAR_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {args.log_level!r}")
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    try:
        m = resolve_map(args)
    except (MapError, OSError) as ex:
        logger.error("Failed to load map: %s", ex)
        return 2

    metric = Metric(args.metric) if args.metric else m.metric
    diagonal = m.allow_diagonal if args.diagonal is None else args.diagonal
    start = args.start or m.start
    finish = args.finish or m.finish
    engine = AStarAlgorithm(metric, allow_diagonal=diagonal)

    if args.view:
        from gridstar.app.viewer import Viewer
        Viewer(m.grid, start, finish, engine, title=m.name).run()
        return 0

    path = engine.get_path(m.grid, start, finish)
    if not path:
        print(f"No path from {list(start)} to {list(finish)}.")
        print(render_grid(m.grid, [], color=not args.no_color))
        return 1

    print(format_path(path))
    print(render_grid(m.grid, path, color=not args.no_color))
    return 0


if __name__ == "__main__":
    sys.exit(main())
