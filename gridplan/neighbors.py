from typing import List, Tuple

from .errors import CoordinateOutOfBounds
from .map_utils import Cell, GridMap

# Row-major order starting at the upper-left neighbor; expansion order depends on it.
DIRECTIONS = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


def neighbors8(grid: GridMap, cell: Cell) -> List[Cell]:
    """
    In-bounds 8-connected neighbors of `cell`.

    A diagonal move (dx, dy) is dropped when either orthogonal cell it would
    squeeze past, (x+dx, y) or (x, y+dy), is an obstacle. Occupancy of the
    neighbor itself is left to the caller.
    """
    x, y = cell
    if not grid.in_bounds(x, y):
        raise CoordinateOutOfBounds(cell, grid.shape())
    data = grid.data
    out: List[Cell] = []
    for dx, dy in DIRECTIONS:
        nx = x + dx
        ny = y + dy
        if not grid.in_bounds(nx, ny):
            continue
        if dx != 0 and dy != 0:
            if data[y, nx] or data[ny, x]:
                continue
        out.append((nx, ny))
    return out


def is_corner_cut(grid: GridMap, a: Cell, b: Cell) -> bool:
    """True if the move a -> b is diagonal and brushes an obstacle corner."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    if dx == 0 or dy == 0:
        return False
    return grid.is_blocked((a[0] + dx, a[1])) or grid.is_blocked((a[0], a[1] + dy))


def path_is_valid(grid: GridMap, path: List[Tuple[int, int]]) -> bool:
    """Check a cell path for blocked cells, non-adjacent jumps and corner cuts."""
    for cell in path:
        if grid.is_blocked(cell):
            return False
    for a, b in zip(path, path[1:]):
        if max(abs(b[0] - a[0]), abs(b[1] - a[1])) != 1:
            return False
        if is_corner_cut(grid, a, b):
            return False
    return True
