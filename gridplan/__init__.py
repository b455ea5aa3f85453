"""
Step-wise path planning on small 2-D occupancy grids.
Exports:
- GridMap (editable grid with start/goal markers)
- RunController (pausable, cancelable session driver)
- Algorithm: A*, Dijkstra, RRT
"""

from .config import PlannerConfig, RRTParams, tick_delay_from_speed
from .controller import PlannerSession, RunController
from .errors import CoordinateOutOfBounds
from .heuristics import euclidean_distance, octile_heuristic
from .map_utils import GridMap
from .neighbors import neighbors8
from .results import Snapshot, Status, StepResult
from .strategies import Algorithm, initialize, plan, step

__all__ = [
    "Algorithm",
    "CoordinateOutOfBounds",
    "GridMap",
    "PlannerConfig",
    "PlannerSession",
    "RRTParams",
    "RunController",
    "Snapshot",
    "Status",
    "StepResult",
    "euclidean_distance",
    "initialize",
    "neighbors8",
    "octile_heuristic",
    "plan",
    "step",
    "tick_delay_from_speed",
]
