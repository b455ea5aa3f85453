import argparse
import csv
import logging
import time
from pathlib import Path

from gridplan import Algorithm, PlannerConfig, RRTParams, RunController, Status, tick_delay_from_speed

from planner_labels import FORMAL_PLANNER_ORDER, LAYER_COLORS, STATUS_TEXT, formal_planner_name

try:
    import matplotlib.pyplot as plt
except ImportError:  # matplotlib is optional
    plt = None


def ascii_render(controller: RunController) -> str:
    grid = controller.grid
    snap = controller.snapshot()
    visited = {(int(p[0]), int(p[1])) for p in snap.visited}
    path = {(int(p[0]), int(p[1])) for p in snap.path}
    rows = []
    for y in range(grid.height):
        row = []
        for x in range(grid.width):
            cell = (x, y)
            if cell == grid.start:
                row.append("S")
            elif cell == grid.goal:
                row.append("G")
            elif grid.data[y, x]:
                row.append("#")
            elif cell in path:
                row.append("*")
            elif cell in snap.frontier:
                row.append("+")
            elif cell in visited:
                row.append(".")
            else:
                row.append(" ")
        rows.append("".join(row))
    return "\n".join(rows)


def plot_xy(points, algorithm: Algorithm):
    """Cells are drawn at their centers; RRT points are continuous and drawn where they lie."""
    offset = 0.0 if algorithm is Algorithm.RRT else 0.5
    return [p[0] + offset for p in points], [p[1] + offset for p in points]


def plot_snapshot(controller: RunController, out_dir: Path):
    if plt is None:
        return None
    grid = controller.grid
    snap = controller.snapshot()
    label = formal_planner_name(controller.algorithm)
    fig, ax = plt.subplots(figsize=(6, 6))
    # Cell (x, y) covers [x, x+1) x [y, y+1); y grows downward like the canvas.
    ax.imshow(grid.data, cmap="gray_r", origin="upper", extent=[0, grid.width, grid.height, 0], vmin=0, vmax=1)
    if snap.tree:
        for (px, py), (cx, cy) in snap.tree:
            ax.plot([px, cx], [py, cy], color=LAYER_COLORS["tree"], linewidth=1.0)
    elif snap.visited:
        xs, ys = plot_xy(snap.visited, controller.algorithm)
        ax.scatter(xs, ys, c=LAYER_COLORS["visited"], marker="s", s=40, label="explored")
        if snap.frontier:
            fx, fy = plot_xy(snap.frontier, controller.algorithm)
            ax.scatter(fx, fy, c=LAYER_COLORS["frontier"], marker="s", s=40, label="frontier")
    if snap.path:
        path_x, path_y = plot_xy(snap.path, controller.algorithm)
        ax.plot(
            path_x,
            path_y,
            color=LAYER_COLORS["path"],
            linewidth=3,
            label="path",
        )
    (sx,), (sy,) = plot_xy([grid.start], controller.algorithm)
    (gx,), (gy,) = plot_xy([grid.goal], controller.algorithm)
    ax.scatter(sx, sy, c=LAYER_COLORS["start"], marker="o", s=80, label="start")
    ax.scatter(gx, gy, c=LAYER_COLORS["goal"], marker="*", s=120, label="goal")
    ax.set_aspect("equal")
    ax.set_title(f"{label}: {STATUS_TEXT[snap.status.value]}")
    ax.legend(loc="best")
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"{controller.algorithm.value}.png"
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path


def drive(controller: RunController, delay_ms: float, max_ticks: int, pause_at: int = -1, pause_ticks: int = 0):
    """External tick source: one advance_one_step() per tick, sleeping between ticks."""
    controller.start()
    ticks = 0
    paused_for = 0
    while ticks < max_ticks and controller.status in (Status.RUNNING, Status.PAUSED):
        if ticks == pause_at and pause_ticks > 0:
            controller.pause()
        if controller.status is Status.PAUSED:
            if paused_for >= pause_ticks:
                controller.resume()
            else:
                paused_for += 1
        controller.advance_one_step()
        ticks += 1
        if delay_ms > 0:
            time.sleep(delay_ms / 1000.0)
    if controller.status in (Status.RUNNING, Status.PAUSED):
        controller.cancel()
    return controller.snapshot()


def main():
    parser = argparse.ArgumentParser(description="Step-wise grid path planning demo.")
    parser.add_argument("--algorithm", default="all", help="astar, dijkstra, rrt or all")
    parser.add_argument("--speed", type=float, default=None, help="UI speed slider value in [5, 100]")
    parser.add_argument("--no-delay", action="store_true", help="Tick as fast as possible")
    parser.add_argument("--max-ticks", type=int, default=5000)
    parser.add_argument("--seed", type=int, default=None, help="RRT random seed")
    parser.add_argument("--wall", action="store_true", help="Add a full-height wall at x=12 (unreachable goal)")
    parser.add_argument("--pause-at", type=int, default=-1, help="Pause at this tick")
    parser.add_argument("--pause-ticks", type=int, default=10, help="Ticks to stay paused")
    parser.add_argument("--plot", action="store_true", help="Save a PNG per algorithm (needs matplotlib)")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(levelname)s %(name)s: %(message)s")

    config = PlannerConfig(rrt=RRTParams(rng_seed=args.seed))
    if args.speed is not None:
        config.tick_delay_ms = tick_delay_from_speed(args.speed)
    delay_ms = 0.0 if args.no_delay else config.tick_delay_ms

    if args.algorithm == "all":
        algorithms = list(Algorithm)
    else:
        algorithms = [Algorithm.parse(args.algorithm)]

    output_dir = Path(__file__).resolve().parent / "outputs"
    controller = RunController(config=config)
    results = []
    for algorithm in algorithms:
        controller.reset()
        if args.wall:
            controller.grid.fill((12, y) for y in range(controller.grid.height))
        controller.select(algorithm)
        snap = drive(controller, delay_ms, args.max_ticks, args.pause_at, args.pause_ticks)
        label = formal_planner_name(algorithm)
        print(f"\n=== {label} ===")
        print(ascii_render(controller))
        print(
            f"{label}: status={snap.status.value}, steps={snap.steps}, explored={snap.explored_count}, "
            f"path_len={snap.stats['path_length']}, path_cost={snap.stats['path_cost']:.2f}"
        )
        results.append(
            {
                "planner": label,
                "status": snap.status.value,
                "steps": snap.steps,
                "explored": snap.explored_count,
                "path_length": snap.stats["path_length"],
                "path_cost": snap.stats["path_cost"],
                "time": snap.stats["elapsed"],
            }
        )
        if args.plot:
            saved = plot_snapshot(controller, output_dir)
            if saved:
                print(f"Saved plot: {saved}")

    if results:
        results.sort(key=lambda r: FORMAL_PLANNER_ORDER.index(r["planner"]))
        output_dir.mkdir(parents=True, exist_ok=True)
        csv_path = output_dir / "results.csv"
        fieldnames = ["planner", "status", "steps", "explored", "path_length", "path_cost", "time"]
        with csv_path.open("w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(results)
        print(f"\nSaved quantitative results: {csv_path}")


if __name__ == "__main__":
    main()
