import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Tuple

import numpy as np

from .common import clamp
from .config import PlannerConfig
from .errors import CoordinateOutOfBounds

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

# (x0, x1, y0, y1) half-open spans of the default wall layout on the 25x25 grid.
DEFAULT_WALLS = (
    (8, 9, 3, 10),
    (8, 9, 15, 22),
    (16, 17, 5, 20),
    (10, 16, 6, 7),
    (10, 14, 18, 19),
)


@dataclass(eq=False)
class GridMap:
    """
    Editable occupancy grid with start and goal markers.
    data: numpy array (H, W), 1 for obstacle, 0 for empty; indexed data[y, x].
    start/goal: (x, y) cells, always empty.

    in_bounds(x, y) takes scalar coordinates; cell-based methods such as
    is_blocked(cell) take an (x, y) tuple, so call in_bounds(*cell) on a cell.

    Edits never raise: invalid writes are ignored and reported through the
    boolean return value. Every accepted edit notifies the registered
    listeners so that an active planning session can be discarded.
    """

    data: np.ndarray
    start: Cell
    goal: Cell
    _listeners: List[Callable[["GridMap"], None]] = field(default_factory=list, repr=False, compare=False)

    def __post_init__(self):
        self.data = np.asarray(self.data, dtype=np.uint8)
        if self.data.ndim != 2 or 0 in self.data.shape:
            raise ValueError(f"Expected non-empty 2D occupancy grid, got shape {self.data.shape}")
        self.start = (int(self.start[0]), int(self.start[1]))
        self.goal = (int(self.goal[0]), int(self.goal[1]))
        for cell in (self.start, self.goal):
            if not self.in_bounds(*cell):
                raise CoordinateOutOfBounds(cell, self.data.shape)
            # Markers win over obstacles so the invariant holds from the start.
            self.data[cell[1], cell[0]] = 0

    @classmethod
    def empty(cls, width: int, height: int, start: Cell, goal: Cell) -> "GridMap":
        return cls(np.zeros((height, width), dtype=np.uint8), start, goal)

    @classmethod
    def from_config(cls, config: PlannerConfig) -> "GridMap":
        grid = cls.empty(config.width, config.height, config.start, config.goal)
        grid._apply_default_walls()
        return grid

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    def shape(self) -> Tuple[int, int]:
        return self.data.shape

    def in_bounds(self, x: int, y: int) -> bool:
        h, w = self.data.shape
        return 0 <= x < w and 0 <= y < h

    def is_blocked(self, cell: Cell) -> bool:
        x, y = cell
        if not self.in_bounds(x, y):
            raise CoordinateOutOfBounds(cell, self.data.shape)
        return bool(self.data[y, x])

    def clamp_cell(self, x: float, y: float) -> Cell:
        """Quantize a pointer position (in cell units) to the nearest in-bounds cell."""
        h, w = self.data.shape
        return int(clamp(int(np.floor(x)), 0, w - 1)), int(clamp(int(np.floor(y)), 0, h - 1))

    def obstacle_cells(self) -> List[Cell]:
        ys, xs = np.nonzero(self.data)
        return [(int(x), int(y)) for x, y in zip(xs, ys)]

    def add_listener(self, callback: Callable[["GridMap"], None]) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: Callable[["GridMap"], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback(self)

    def _is_marker(self, cell: Cell) -> bool:
        return cell == self.start or cell == self.goal

    def set_obstacle(self, cell: Cell) -> bool:
        return self._write(cell, 1)

    def clear_obstacle(self, cell: Cell) -> bool:
        return self._write(cell, 0)

    def _write(self, cell: Cell, value: int) -> bool:
        cell = (int(cell[0]), int(cell[1]))
        if not self.in_bounds(*cell) or self._is_marker(cell):
            logger.debug("Ignored occupancy write %d at %s", value, cell)
            return False
        self.data[cell[1], cell[0]] = value
        self._notify()
        return True

    def set_start(self, cell: Cell) -> bool:
        cell = (int(cell[0]), int(cell[1]))
        if not self.in_bounds(*cell) or self.data[cell[1], cell[0]]:
            logger.debug("Ignored start move to %s", cell)
            return False
        self.start = cell
        self._notify()
        return True

    def set_goal(self, cell: Cell) -> bool:
        cell = (int(cell[0]), int(cell[1]))
        if not self.in_bounds(*cell) or self.data[cell[1], cell[0]]:
            logger.debug("Ignored goal move to %s", cell)
            return False
        self.goal = cell
        self._notify()
        return True

    def fill(self, cells: Iterable[Cell]) -> int:
        """Place obstacles on several cells with a single notification; returns the number written."""
        written = 0
        for x, y in cells:
            cell = (int(x), int(y))
            if self.in_bounds(*cell) and not self._is_marker(cell):
                self.data[cell[1], cell[0]] = 1
                written += 1
        if written:
            self._notify()
        return written

    def reset(self, config: PlannerConfig) -> None:
        """Restore the default wall layout and marker cells in place."""
        for cell in (config.start, config.goal):
            if not (0 <= cell[0] < config.width and 0 <= cell[1] < config.height):
                raise CoordinateOutOfBounds(cell, (config.height, config.width))
        self.data = np.zeros((config.height, config.width), dtype=np.uint8)
        self.start = config.start
        self.goal = config.goal
        self._apply_default_walls()
        self._notify()

    def _apply_default_walls(self) -> None:
        h, w = self.data.shape
        for x0, x1, y0, y1 in DEFAULT_WALLS:
            self.data[min(y0, h) : min(y1, h), min(x0, w) : min(x1, w)] = 1
        for x, y in (self.start, self.goal):
            if self.in_bounds(x, y):
                self.data[y, x] = 0
