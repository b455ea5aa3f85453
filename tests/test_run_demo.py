import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "examples"))

from gridplan import Algorithm, RunController, Status  # noqa: E402
from run_demo import drive, plot_xy  # noqa: E402


def test_drive_pause_window_holds_for_exactly_pause_ticks():
    controller = RunController()
    snap = drive(controller, 0, max_ticks=10, pause_at=2, pause_ticks=3)
    # Ticks 2, 3 and 4 are spent paused; the other seven advance the search.
    assert snap.steps == 7
    assert snap.status is Status.CANCELED


def test_drive_single_pause_tick_skips_one_step():
    controller = RunController()
    snap = drive(controller, 0, max_ticks=10, pause_at=2, pause_ticks=1)
    assert snap.steps == 9


def test_drive_zero_pause_ticks_never_pauses():
    controller = RunController()
    snap = drive(controller, 0, max_ticks=10, pause_at=2, pause_ticks=0)
    assert snap.steps == 10


def test_plot_xy_centers_cells_but_not_rrt_points():
    points = [(2, 12), (3.25, 11.5)]
    assert plot_xy(points, Algorithm.ASTAR) == ([2.5, 3.75], [12.5, 12.0])
    assert plot_xy(points, Algorithm.DIJKSTRA) == ([2.5, 3.75], [12.5, 12.0])
    assert plot_xy(points, Algorithm.RRT) == ([2, 3.25], [12, 11.5])
