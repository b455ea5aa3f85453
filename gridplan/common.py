import math
from typing import Tuple

SQRT2 = math.sqrt(2.0)


def euclidean(p: Tuple[float, float], q: Tuple[float, float]) -> float:
    return math.hypot(p[0] - q[0], p[1] - q[1])


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def path_cost(path) -> float:
    """Sum of straight-line segment lengths along a point sequence."""
    length = 0.0
    for i in range(1, len(path)):
        length += euclidean(path[i - 1], path[i])
    return length
