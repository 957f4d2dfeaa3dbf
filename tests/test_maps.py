import json

import pytest

from gridstar.app.maps import MapError, bundled_maps, load_map, parse_map
from gridstar.core.types import Metric


def base_map(**overrides):
    data = {
        "rows": 2,
        "cols": 3,
        "cells": [[1, 1, 0], [0, 1, 1]],
        "start": [0, 0],
        "finish": [1, 2],
    }
    data.update(overrides)
    return data


def test_bundled_maps_present():
    maps = bundled_maps()
    assert "reference_maze" in maps
    assert "open_field" in maps


def test_reference_maze_contents():
    m = load_map(bundled_maps()["reference_maze"])
    assert m.name == "reference_maze"
    assert (m.grid.rows, m.grid.cols) == (9, 11)
    assert m.start == (8, 0)
    assert m.finish == (0, 10)
    assert m.metric is Metric.MANHATTAN
    assert m.allow_diagonal is False
    assert m.grid.is_blocked((0, 3))
    assert not m.grid.is_blocked((4, 5))


def test_open_field_uses_diagonals():
    m = load_map(bundled_maps()["open_field"])
    assert m.metric is Metric.EUCLIDEAN
    assert m.allow_diagonal is True


def test_defaults():
    m = parse_map(base_map(), name="tiny")
    assert m.name == "tiny"
    assert m.metric is Metric.MANHATTAN
    assert m.allow_diagonal is False
    assert m.grid.cells == (True, True, False, False, True, True)


def test_flat_cells_match_nested(tmp_path):
    nested = parse_map(base_map())
    flat = parse_map(base_map(cells=[1, 1, 0, 0, 1, 1]))
    assert flat.grid == nested.grid

    path = tmp_path / "tiny.json"
    path.write_text(json.dumps(base_map(metric="Euclidean", allow_diagonal=True)))
    loaded = load_map(path)
    assert loaded.name == "tiny"
    assert loaded.grid == nested.grid
    assert loaded.metric is Metric.EUCLIDEAN
    assert loaded.allow_diagonal is True


@pytest.mark.parametrize("overrides", [
    {"cells": [[1, 1, 0], [0, 1]]},
    {"cells": [1, 1, 0]},
    {"cells": "111011"},
    {"start": [2, 0]},
    {"finish": [0, -1]},
    {"start": [0]},
    {"finish": ["a", "b"]},
    {"metric": "chebyshev"},
    {"rows": "two"},
])
def test_malformed_maps_raise(overrides):
    with pytest.raises(MapError):
        parse_map(base_map(**overrides))


def test_missing_key_names_field():
    data = base_map()
    del data["finish"]
    with pytest.raises(MapError, match="finish"):
        parse_map(data, source="bad.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(MapError):
        load_map(path)


def test_map_error_is_value_error():
    assert issubclass(MapError, ValueError)
