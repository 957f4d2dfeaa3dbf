from gridstar.app.console import (
    BLOCK_MARK,
    FINISH_MARK,
    PATH_MARK,
    START_MARK,
    format_path,
    render_grid,
)
from gridstar.core.types import Grid


def test_format_path():
    assert format_path([(8, 0), (7, 0), (6, 0)]) == "[8, 0] -> [7, 0] -> [6, 0]"
    assert format_path([(1, 2)]) == "[1, 2]"
    assert format_path([]) == ""


def test_render_plain():
    grid = Grid.from_rows([
        [1, 1, 1],
        [0, 0, 1],
        [1, 1, 1],
    ])
    path = [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2)]
    assert render_grid(grid, path, color=False).splitlines() == [
        "|S|*|*|",
        "|#|#|*|",
        "| | |F|",
    ]


def test_render_without_path():
    grid = Grid.from_rows([[1, 0]])
    assert render_grid(grid, [], color=False) == "| |#|"


def test_render_ansi_marks():
    grid = Grid.from_rows([[1, 1, 1, 0]])
    out = render_grid(grid, [(0, 0), (0, 1), (0, 2)])
    assert out == "|" + START_MARK + "|" + PATH_MARK + "|" + FINISH_MARK + "|" + BLOCK_MARK + "|"
