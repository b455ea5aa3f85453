import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .common import euclidean
from .config import RRTParams
from .errors import CoordinateOutOfBounds
from .map_utils import Cell, GridMap
from .results import Edge, Point, Status, StepResult

logger = logging.getLogger(__name__)


@dataclass
class TreeNode:
    point: Point
    parent: int  # index into the node list, -1 for the root
    cost: float


@dataclass
class RRTState:
    """
    Growing RRT over continuous grid coordinates.

    Points use cell units: cell (x, y) covers [x, x+1) x [y, y+1), and the
    start/goal cells enter the tree as the points (x, y). The node list is
    append-only; `points` mirrors it as an array for nearest-neighbor scans.
    """

    grid: GridMap
    start: Point
    goal: Point
    params: RRTParams
    rng: np.random.Generator
    status: Status = Status.RUNNING
    nodes: List[TreeNode] = field(default_factory=list)
    points: Optional[np.ndarray] = None
    iterations: int = 0
    path: List[Point] = field(default_factory=list)

    @property
    def tree_edges(self) -> List[Edge]:
        return [(self.nodes[n.parent].point, n.point) for n in self.nodes if n.parent >= 0]

    def _append(self, point: Point, parent: int) -> int:
        cost = 0.0 if parent < 0 else self.nodes[parent].cost + euclidean(self.nodes[parent].point, point)
        self.nodes.append(TreeNode(point, parent, cost))
        idx = len(self.nodes) - 1
        self.points[idx] = point
        return idx


def init_rrt(grid: GridMap, start: Cell, goal: Cell, params: Optional[RRTParams] = None) -> RRTState:
    params = params if params is not None else RRTParams()
    for cell in (start, goal):
        if not grid.in_bounds(*cell):
            raise CoordinateOutOfBounds(cell, grid.shape())
    state = RRTState(
        grid,
        (float(start[0]), float(start[1])),
        (float(goal[0]), float(goal[1])),
        params,
        np.random.default_rng(params.rng_seed),
    )
    # Root, at most one node per iteration, plus the goal node.
    state.points = np.zeros((params.max_iterations + 2, 2), dtype=np.float64)
    state._append(state.start, -1)
    if state.start == state.goal:
        state.path = [state.start]
        state.status = Status.FOUND
    return state


def segment_collides(grid: GridMap, a: Point, b: Point) -> bool:
    """Sample ceil(2 * length) + 1 evenly spaced points along a->b and test their cells."""
    steps = int(math.ceil(euclidean(a, b) * 2.0))
    ts = np.linspace(0.0, 1.0, steps + 1)
    xs = np.floor(a[0] + (b[0] - a[0]) * ts).astype(int)
    ys = np.floor(a[1] + (b[1] - a[1]) * ts).astype(int)
    h, w = grid.data.shape
    inside = (xs >= 0) & (xs < w) & (ys >= 0) & (ys < h)
    return bool(np.any(grid.data[ys[inside], xs[inside]]))


def _sample(state: RRTState) -> Point:
    if state.rng.random() < state.params.goal_bias:
        return state.goal
    h, w = state.grid.data.shape
    return float(state.rng.uniform(0.0, w)), float(state.rng.uniform(0.0, h))


def _nearest(state: RRTState, target: Point) -> int:
    pts = state.points[: len(state.nodes)]
    d2 = (pts[:, 0] - target[0]) ** 2 + (pts[:, 1] - target[1]) ** 2
    return int(np.argmin(d2))


def _steer(source: Point, target: Point, step_length: float) -> Point:
    angle = math.atan2(target[1] - source[1], target[0] - source[0])
    return source[0] + math.cos(angle) * step_length, source[1] + math.sin(angle) * step_length


def _reconstruct(nodes: List[TreeNode], idx: int) -> List[Point]:
    path: List[Point] = []
    while idx >= 0:
        node = nodes[idx]
        path.append(node.point)
        idx = node.parent
    path.reverse()
    return path


def _running_or_exhausted(state: RRTState, new_points: Tuple = ()) -> StepResult:
    if state.iterations >= state.params.max_iterations:
        state.status = Status.EXHAUSTED
        logger.debug("RRT exhausted after %d iterations with %d nodes", state.iterations, len(state.nodes))
    return StepResult(state.status, newly_visited=new_points)


def step_rrt(state: RRTState) -> StepResult:
    """One sample attempt: sample, extend the nearest node by one step, check collision and the goal."""
    if state.status is not Status.RUNNING:
        return StepResult(state.status, found_path=tuple(state.path) if state.path else None)
    if state.iterations >= state.params.max_iterations:
        return _running_or_exhausted(state)

    state.iterations += 1
    sample = _sample(state)
    nearest_idx = _nearest(state, sample)
    nearest = state.nodes[nearest_idx].point
    new_point = _steer(nearest, sample, state.params.step_length)

    h, w = state.grid.data.shape
    if not (0.0 <= new_point[0] < w and 0.0 <= new_point[1] < h):
        return _running_or_exhausted(state)
    if segment_collides(state.grid, nearest, new_point):
        return _running_or_exhausted(state)

    new_idx = state._append(new_point, nearest_idx)

    # Proximity alone connects the goal; the final link is not collision-checked.
    if euclidean(new_point, state.goal) < state.params.step_length:
        goal_idx = state._append(state.goal, new_idx)
        state.path = _reconstruct(state.nodes, goal_idx)
        state.status = Status.FOUND
        logger.debug("RRT reached goal after %d iterations with %d nodes", state.iterations, len(state.nodes))
        return StepResult(Status.FOUND, newly_visited=(new_point, state.goal), found_path=tuple(state.path))

    return _running_or_exhausted(state, (new_point,))
