import json

import pytest

from gridstar.app.main import build_parser, main, parse_cell


def test_parse_cell():
    assert parse_cell("8,0") == (8, 0)
    assert parse_cell(" 3, 4 ") == (3, 4)


@pytest.mark.parametrize("text", ["8", "a,b", "1,2,3"])
def test_parse_cell_rejects(text):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--start", text])


def test_default_reference_maze(capsys):
    assert main(["--no-color"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("[8, 0] -> ")
    assert lines[0].endswith(" -> [0, 10]")
    assert lines[0].count("->") == 42
    assert len(lines) == 1 + 9
    assert lines[9].startswith("|S|")
    assert lines[1].endswith("|F|")


def test_no_path_exit_code(capsys):
    # (1,1) is a wall in the reference maze
    assert main(["--no-color", "--finish", "1,1"]) == 1
    assert "No path" in capsys.readouterr().out


def test_custom_map_and_overrides(tmp_path, capsys):
    path = tmp_path / "field.json"
    path.write_text(json.dumps({
        "rows": 3, "cols": 3,
        "cells": [1] * 9,
        "start": [0, 0], "finish": [0, 2],
    }))
    assert main(["--map", str(path), "--finish", "2,2",
                 "--metric", "euclidean", "--diagonal", "--no-color"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "[0, 0] -> [1, 1] -> [2, 2]"


def test_metric_from_environment(monkeypatch):
    monkeypatch.setenv("GRIDSTAR_METRIC", "euclidean")
    args = build_parser().parse_args([])
    assert args.metric == "euclidean"


def test_missing_map_file(tmp_path):
    assert main(["--map", str(tmp_path / "nope.json")]) == 2


def test_malformed_map_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"rows": 1}))
    assert main(["--map", str(path)]) == 2


def test_bad_metric_in_environment_is_usage_error(monkeypatch, capsys):
    monkeypatch.setenv("GRIDSTAR_METRIC", "chebyshev")
    with pytest.raises(SystemExit) as exc:
        main(["--no-color"])
    assert exc.value.code == 2
    assert "GRIDSTAR_METRIC" in capsys.readouterr().err


def test_metric_flag_is_case_insensitive(capsys):
    assert main(["--metric", "MANHATTAN", "--no-diagonal", "--no-color"]) == 0


@pytest.mark.parametrize("level", ["debug", "Info", "ERROR"])
def test_log_level_accepts_any_case(level):
    args = build_parser().parse_args(["--log-level", level])
    assert args.log_level == level.upper()


def test_unknown_log_level_flag_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["--log-level", "verbose"])
    assert exc.value.code == 2


def test_bad_log_level_in_environment_is_usage_error(monkeypatch, capsys):
    monkeypatch.setenv("GRIDSTAR_LOG_LEVEL", "verbose")
    with pytest.raises(SystemExit) as exc:
        main(["--no-color"])
    assert exc.value.code == 2
    assert "GRIDSTAR_LOG_LEVEL" in capsys.readouterr().err
