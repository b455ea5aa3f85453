from typing import Tuple

from .common import SQRT2, euclidean


def octile_heuristic(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """
    Octile distance between two cells.

    Exact shortest-path cost on an empty 8-connected grid with unit orthogonal
    and sqrt(2) diagonal steps, hence admissible and consistent for A*.
    """
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return max(dx, dy) + (SQRT2 - 1.0) * min(dx, dy)


def euclidean_distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Straight-line distance; 1 or sqrt(2) between adjacent cells."""
    return euclidean(a, b)
