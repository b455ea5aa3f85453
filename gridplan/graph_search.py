"""
Grid search strategies (A* and Dijkstra) advanced one expansion per step.

Both share one state layout: an arena of SearchNode records addressed by
index, a binary heap of (priority..., node index) entries and lazy deletion
on pop. A* re-registers an improved cell under its first-seen sequence
number so ties keep their first-seen order; Dijkstra pushes a duplicate entry
with a fresh sequence number and skips it on pop once the cell is closed.

Tie-breaking:
- A*: lower f, then lower h (deeper node), then first registration order.
- Dijkstra: lower g, then insertion order.
"""

import heapq
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set, Tuple

from .errors import CoordinateOutOfBounds
from .heuristics import euclidean_distance, octile_heuristic
from .map_utils import Cell, GridMap
from .neighbors import neighbors8
from .results import Status, StepResult

logger = logging.getLogger(__name__)


@dataclass
class SearchNode:
    cell: Cell
    g: float
    h: float
    parent: int  # arena index, -1 for the start node
    seq: int

    @property
    def f(self) -> float:
        return self.g + self.h


@dataclass
class GridSearchState:
    grid: GridMap
    start: Cell
    goal: Cell
    status: Status = Status.RUNNING
    nodes: List[SearchNode] = field(default_factory=list)
    open_heap: List[Tuple[float, float, int, int]] = field(default_factory=list)
    open_index: Dict[Cell, int] = field(default_factory=dict)
    best_g: Dict[Cell, float] = field(default_factory=dict)
    closed: Set[Cell] = field(default_factory=set)
    visited: List[Cell] = field(default_factory=list)
    path: List[Cell] = field(default_factory=list)
    insert_counter: int = 0
    expansions: int = 0

    @property
    def frontier(self) -> Set[Cell]:
        return set(self.open_index)


@dataclass
class AStarState(GridSearchState):
    pass


@dataclass
class DijkstraState(GridSearchState):
    pass


def _check_endpoints(grid: GridMap, start: Cell, goal: Cell) -> None:
    for cell in (start, goal):
        if not grid.in_bounds(*cell):
            raise CoordinateOutOfBounds(cell, grid.shape())


def _seed(state: GridSearchState, h0: float) -> GridSearchState:
    root = SearchNode(state.start, g=0.0, h=h0, parent=-1, seq=0)
    state.nodes.append(root)
    heapq.heappush(state.open_heap, (root.f, root.h, 0, 0))
    state.open_index[state.start] = 0
    state.best_g[state.start] = 0.0
    state.insert_counter = 1
    return state


def init_astar(grid: GridMap, start: Cell, goal: Cell) -> AStarState:
    _check_endpoints(grid, start, goal)
    state = AStarState(grid, tuple(start), tuple(goal))
    return _seed(state, octile_heuristic(start, goal))


def init_dijkstra(grid: GridMap, start: Cell, goal: Cell) -> DijkstraState:
    _check_endpoints(grid, start, goal)
    state = DijkstraState(grid, tuple(start), tuple(goal))
    return _seed(state, 0.0)


def _pop_live(state: GridSearchState) -> Optional[int]:
    while state.open_heap:
        _, _, _, idx = heapq.heappop(state.open_heap)
        cell = state.nodes[idx].cell
        if cell in state.closed:
            continue
        if state.open_index.get(cell) != idx:
            continue  # superseded by a cheaper registration
        return idx
    return None


def _reconstruct(nodes: List[SearchNode], idx: int) -> List[Cell]:
    path: List[Cell] = []
    while idx >= 0:
        node = nodes[idx]
        path.append(node.cell)
        idx = node.parent
    path.reverse()
    return path


def _finish(state: GridSearchState, status: Status) -> StepResult:
    state.status = status
    if status is Status.FOUND:
        logger.debug("Goal %s reached after %d expansions", state.goal, state.expansions)
        return StepResult(status, found_path=tuple(state.path))
    logger.debug("Open set exhausted after %d expansions", state.expansions)
    return StepResult(status)


def _grid_step(
    state: GridSearchState,
    heuristic: Callable[[Cell, Cell], float],
    reuse_seq: bool,
) -> StepResult:
    if state.status is not Status.RUNNING:
        return StepResult(state.status, found_path=tuple(state.path) if state.path else None)

    idx = _pop_live(state)
    if idx is None:
        return _finish(state, Status.EXHAUSTED)
    current = state.nodes[idx]
    del state.open_index[current.cell]

    if current.cell == state.goal:
        state.path = _reconstruct(state.nodes, idx)
        return _finish(state, Status.FOUND)

    state.closed.add(current.cell)
    state.visited.append(current.cell)
    state.expansions += 1

    grid = state.grid
    added = set()
    for nb in neighbors8(grid, current.cell):
        if nb in state.closed or grid.data[nb[1], nb[0]]:
            continue
        tentative_g = current.g + euclidean_distance(current.cell, nb)
        known_g = state.best_g.get(nb)
        if known_g is not None and tentative_g >= known_g:
            continue
        prev_idx = state.open_index.get(nb)
        if reuse_seq and prev_idx is not None:
            seq = state.nodes[prev_idx].seq
        else:
            seq = state.insert_counter
            state.insert_counter += 1
        node = SearchNode(nb, g=tentative_g, h=heuristic(nb, state.goal), parent=idx, seq=seq)
        state.nodes.append(node)
        node_idx = len(state.nodes) - 1
        heapq.heappush(state.open_heap, (node.f, node.h, seq, node_idx))
        state.best_g[nb] = tentative_g
        if prev_idx is None:
            added.add(nb)
        state.open_index[nb] = node_idx

    if not state.open_index:
        state.status = Status.EXHAUSTED
        logger.debug("Open set exhausted after %d expansions", state.expansions)
    return StepResult(state.status, newly_visited=(current.cell,), new_frontier=frozenset(added))


def step_astar(state: AStarState) -> StepResult:
    return _grid_step(state, octile_heuristic, reuse_seq=True)


def _zero(a: Cell, b: Cell) -> float:
    return 0.0


def step_dijkstra(state: DijkstraState) -> StepResult:
    return _grid_step(state, _zero, reuse_seq=False)
