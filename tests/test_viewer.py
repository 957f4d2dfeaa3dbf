import pytest

pygame = pytest.importorskip("pygame")

from gridstar.app.maps import bundled_maps, load_map
from gridstar.core.astar import AStarAlgorithm
from gridstar.core.types import Metric


@pytest.fixture
def viewer(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    from gridstar.app.viewer import Viewer

    m = load_map(bundled_maps()["reference_maze"])
    engine = AStarAlgorithm(Metric.MANHATTAN, allow_diagonal=False)
    v = Viewer(m.grid, m.start, m.finish, engine, title=m.name)
    yield v
    pygame.quit()


def run_to_end(v, limit=1000):
    for _ in range(limit):
        if v.state in ("Done", "No path"):
            return
        v._do_step()
    raise AssertionError("search did not finish")


def test_steps_until_done(viewer):
    assert viewer.state == "Idle"
    run_to_end(viewer)
    assert viewer.state == "Done"
    assert viewer.path == viewer.engine.get_path(viewer.grid, viewer.start, viewer.finish)
    assert viewer._last_metrics["path_len"] == 43
    viewer._draw()


def test_step_after_done_is_noop(viewer):
    run_to_end(viewer)
    path = list(viewer.path)
    viewer._do_step()
    assert viewer.state == "Done"
    assert viewer.path == path


def test_reset_clears_overlays(viewer):
    viewer._do_step()
    assert viewer.closed_set
    viewer._reset()
    assert not viewer.closed_set
    assert not viewer.open_set
    assert viewer.path == []
    assert viewer.state == "Idle"


def test_toggle_diagonal_restarts(viewer):
    viewer._do_step()
    viewer._toggle_diagonal()
    assert viewer.engine.is_allow_diagonal()
    assert viewer.btn_diag.active
    assert not viewer.closed_set
    run_to_end(viewer)
    assert viewer.state == "Done"
    viewer._draw()


def test_run_toggle_ignored_when_done(viewer):
    run_to_end(viewer)
    viewer._toggle_run()
    assert not viewer.running
