"""
Single entry point over the closed set of search strategies.

Each strategy keeps its progress in a plain state object (AStarState,
DijkstraState or RRTState); `step` dispatches on the state type.
"""

import time
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from .common import path_cost
from .config import RRTParams
from .graph_search import AStarState, DijkstraState, init_astar, init_dijkstra, step_astar, step_dijkstra
from .map_utils import Cell, GridMap
from .results import Status, StepResult
from .rrt import RRTState, init_rrt, step_rrt

SessionState = Union[AStarState, DijkstraState, RRTState]


class Algorithm(Enum):
    ASTAR = "astar"
    DIJKSTRA = "dijkstra"
    RRT = "rrt"

    @classmethod
    def parse(cls, value: Union["Algorithm", str]) -> "Algorithm":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("*", "star").replace("-", "").replace("_", "")
        for algo in cls:
            if algo.value == key:
                return algo
        options = ", ".join(a.value for a in cls)
        raise ValueError(f"Unknown algorithm '{value}'. Choose from: {options}.")


_STEPPERS = {
    AStarState: step_astar,
    DijkstraState: step_dijkstra,
    RRTState: step_rrt,
}


def initialize(
    algorithm: Union[Algorithm, str],
    grid: GridMap,
    start: Optional[Cell] = None,
    goal: Optional[Cell] = None,
    rrt_params: Optional[RRTParams] = None,
) -> SessionState:
    """Create fresh search state; start/goal default to the grid's markers."""
    algorithm = Algorithm.parse(algorithm)
    start = grid.start if start is None else (int(start[0]), int(start[1]))
    goal = grid.goal if goal is None else (int(goal[0]), int(goal[1]))
    if algorithm is Algorithm.ASTAR:
        return init_astar(grid, start, goal)
    if algorithm is Algorithm.DIJKSTRA:
        return init_dijkstra(grid, start, goal)
    return init_rrt(grid, start, goal, rrt_params)


def step(state: SessionState) -> StepResult:
    return _STEPPERS[type(state)](state)


def explored_count(state: SessionState) -> int:
    if isinstance(state, RRTState):
        return len(state.nodes)
    return len(state.visited)


def plan(
    algorithm: Union[Algorithm, str],
    grid: GridMap,
    start: Optional[Cell] = None,
    goal: Optional[Cell] = None,
    rrt_params: Optional[RRTParams] = None,
) -> Tuple[List, Dict[str, float]]:
    """Run a strategy to completion. Returns (path, stats); the path is empty when the goal is unreachable."""
    start_time = time.time()
    state = initialize(algorithm, grid, start, goal, rrt_params)
    result = step(state)
    steps = 1
    while result.status is Status.RUNNING:
        result = step(state)
        steps += 1
    path = list(state.path) if result.status is Status.FOUND else []
    stats = {
        "success": result.status is Status.FOUND,
        "path_length": len(path),
        "path_cost": path_cost(path),
        "explored": explored_count(state),
        "steps": steps,
        "time": time.time() - start_time,
    }
    return path, stats
